"""
sheetmerge/writer.py — Applies resolved targets to a worksheet.

Only called after every report item has resolved; a failing merge never
reaches this module, so a half-written template is never produced.
"""
from __future__ import annotations

from typing import Iterable

from openpyxl.worksheet.worksheet import Worksheet

from .models import TargetCell


def apply_targets(ws: Worksheet, targets: Iterable[TargetCell]) -> int:
    """
    Write each formatted value in order. Duplicate targets overwrite.

    Returns the number of cells written.
    """
    written = 0
    for target in targets:
        ws.cell(row=target.row, column=target.column, value=target.value)
        written += 1
    return written
