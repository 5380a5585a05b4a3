"""
sheetmerge/resolver.py — Anchor classification and target-cell resolution.

This module is the SOLE authority for:
  1. Deciding which label cells are row anchors and which are column anchors.
  2. Matching a report item's logical (row, column) to exactly one anchor each.
  3. Computing the physical cell that receives the item's formatted value.

Classification rules:
  - Row anchor    = the only label cell on its physical row.
  - Column anchor = the only label cell on its physical column.
  Both passes run over the FULL candidate list, so one cell can be both,
  either, or neither.

Placement:
  - Canonical layout (row labels left, column labels on top): the row anchor's
    row and the column anchor's column are each the larger of the pair, so
    (max rows, max cols) lands in the data area.
  - Row labels on the RIGHT: the row anchor sits strictly below AND right of
    the column anchor, so max(cols) would pick the label column. That exact
    case takes the column anchor's column instead. No other offsets are
    special-cased.

Everything here is pure: nothing touches a worksheet.
"""
from __future__ import annotations

from collections import Counter
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List, Sequence, Tuple

from .errors import AppError, ANCHOR_AMBIGUOUS, ANCHOR_NOT_FOUND, BAD_VALUE
from .models import LabelCell, TargetCell, ValueItem


# ── Classification ────────────────────────────────────────────────────────────

def classify_anchors(cells: Iterable[LabelCell]) -> Tuple[List[LabelCell], List[LabelCell]]:
    """
    Return (row_anchors, column_anchors), each in input order.
    """
    cells = list(cells)
    per_row = Counter(c.row for c in cells)
    per_col = Counter(c.column for c in cells)
    row_anchors = [c for c in cells if per_row[c.row] == 1]
    column_anchors = [c for c in cells if per_col[c.column] == 1]
    return row_anchors, column_anchors


def find_anchor(anchors: Sequence[LabelCell], index: int, axis: str) -> LabelCell:
    """
    Return the single anchor labelled `index`.
    Raises AppError(ANCHOR_NOT_FOUND / ANCHOR_AMBIGUOUS) otherwise.
    """
    matches = [a for a in anchors if a.value == index]
    if not matches:
        raise AppError(
            ANCHOR_NOT_FOUND,
            f"No {axis} label matches index {index}",
            details={"axis": axis, "index": index},
        )
    if len(matches) > 1:
        raise AppError(
            ANCHOR_AMBIGUOUS,
            f"{len(matches)} {axis} labels match index {index}",
            details={
                "axis": axis,
                "index": index,
                "cells": [(m.row, m.column) for m in matches],
            },
        )
    return matches[0]


# ── Placement ─────────────────────────────────────────────────────────────────

def target_position(row_anchor: LabelCell, column_anchor: LabelCell) -> Tuple[int, int]:
    a, b = row_anchor, column_anchor
    if a.row > b.row and a.column > b.column:
        # row labels on the right of the data area
        return a.row, b.column
    return max(a.row, b.row), max(a.column, b.column)


# ── Formatting ────────────────────────────────────────────────────────────────

def format_value(raw: Any) -> str:
    """
    "0" for zero, otherwise thousands-grouped with no decimals (1234 -> "1,234").
    Halves round away from zero.
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
        raise AppError(BAD_VALUE, f"Report value is not a number: {raw!r}")
    if raw == 0:
        return "0"
    try:
        exact = Decimal(str(raw))
    except InvalidOperation:
        raise AppError(BAD_VALUE, f"Report value is not a number: {raw!r}")
    if not exact.is_finite():
        raise AppError(BAD_VALUE, f"Report value is not a finite number: {raw!r}")
    whole = exact.to_integral_value(rounding=ROUND_HALF_UP)
    return f"{int(whole):,}"


# ── Resolution ────────────────────────────────────────────────────────────────

def resolve_item(
    item: ValueItem,
    row_anchors: Sequence[LabelCell],
    column_anchors: Sequence[LabelCell],
) -> TargetCell:
    a = find_anchor(row_anchors, item.row, "row")
    b = find_anchor(column_anchors, item.column, "column")
    row, column = target_position(a, b)
    return TargetCell(row=row, column=column, value=format_value(item.value))


def resolve_items(
    items: Iterable[ValueItem],
    row_anchors: Sequence[LabelCell],
    column_anchors: Sequence[LabelCell],
) -> List[TargetCell]:
    """Resolve items against anchors that are already classified."""
    return [resolve_item(item, row_anchors, column_anchors) for item in items]


def resolve_targets(cells: Iterable[LabelCell], items: Iterable[ValueItem]) -> List[TargetCell]:
    """
    Resolve every item to one TargetCell, in input order.

    All-or-nothing: the first unresolvable item raises and no list is
    returned. Targets are not deduplicated; the last write to a cell wins.
    """
    row_anchors, column_anchors = classify_anchors(cells)
    return resolve_items(items, row_anchors, column_anchors)
