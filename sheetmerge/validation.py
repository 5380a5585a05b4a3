from __future__ import annotations

from .errors import AppError, BAD_PAYLOAD
from .models import LabelCell, MergePayload, ValueItem


def validate_payload(payload: MergePayload) -> None:
    """
    Reject a payload before any scanning or resolution starts.
    An empty item list is valid (zero writes); a missing one is not.
    """
    if payload is None:
        raise AppError(BAD_PAYLOAD, "Merge payload is missing.")
    if payload.worksheet is None:
        raise AppError(BAD_PAYLOAD, "Worksheet is missing.")
    if payload.items is None:
        raise AppError(BAD_PAYLOAD, "Report values are missing.")

    for i, item in enumerate(payload.items):
        if not isinstance(item, ValueItem):
            raise AppError(BAD_PAYLOAD, f"Report value #{i} is not a ValueItem: {item!r}")

    if payload.cells is not None:
        for i, cell in enumerate(payload.cells):
            if not isinstance(cell, LabelCell):
                raise AppError(BAD_PAYLOAD, f"Label cell #{i} is not a LabelCell: {cell!r}")
