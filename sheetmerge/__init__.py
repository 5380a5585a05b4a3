"""Merge computed report values into labelled Excel template sheets."""
from __future__ import annotations

from .errors import AppError, friendly_message
from .merger import merge, run_merge
from .models import LabelCell, MergePayload, MergeResult, Report, TargetCell, ValueItem
from .resolver import classify_anchors, format_value, resolve_targets
from .scanner import scan_label_cells

__all__ = [
    "AppError",
    "friendly_message",
    "merge",
    "run_merge",
    "LabelCell",
    "MergePayload",
    "MergeResult",
    "Report",
    "TargetCell",
    "ValueItem",
    "classify_anchors",
    "format_value",
    "resolve_targets",
    "scan_label_cells",
]
