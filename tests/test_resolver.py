"""Tests for sheetmerge.resolver — anchor classification, placement, formatting."""
from decimal import Decimal

import pytest

from sheetmerge.errors import AppError, ANCHOR_AMBIGUOUS, ANCHOR_NOT_FOUND, BAD_VALUE
from sheetmerge.models import LabelCell, TargetCell, ValueItem
from sheetmerge.resolver import (
    classify_anchors,
    find_anchor,
    format_value,
    resolve_items,
    resolve_targets,
    target_position,
)


ROW_ANCHORS = [LabelCell(11, 2, 10), LabelCell(12, 2, 20)]
COLUMN_ANCHORS = [LabelCell(10, 5, 10), LabelCell(10, 6, 11), LabelCell(10, 7, 12)]
CANONICAL = COLUMN_ANCHORS + ROW_ANCHORS

MIRRORED = COLUMN_ANCHORS + [LabelCell(11, 12, 10), LabelCell(12, 12, 20)]


# ---- Classification ----

def test_classify_canonical_layout():
    rows, cols = classify_anchors(CANONICAL)
    assert rows == ROW_ANCHORS
    assert cols == COLUMN_ANCHORS


def test_classify_uniqueness_property():
    cells = [
        LabelCell(1, 1, 1), LabelCell(1, 2, 2),   # share row 1
        LabelCell(3, 2, 3),                       # shares column 2
        LabelCell(5, 7, 4),                       # alone on both axes
    ]
    rows, cols = classify_anchors(cells)
    for c in cells:
        alone_on_row = sum(1 for o in cells if o.row == c.row) == 1
        alone_on_col = sum(1 for o in cells if o.column == c.column) == 1
        assert (c in rows) == alone_on_row
        assert (c in cols) == alone_on_col


def test_classify_cell_can_be_both_roles():
    lonely = LabelCell(20, 20, 99)
    rows, cols = classify_anchors(CANONICAL + [lonely])
    assert lonely in rows
    assert lonely in cols


def test_classify_uses_full_set_not_filtered_opposite():
    # (11,2) is a row anchor, but column 2 holds two labels so it is no column anchor.
    rows, cols = classify_anchors(CANONICAL)
    assert LabelCell(11, 2, 10) in rows
    assert LabelCell(11, 2, 10) not in cols


def test_classify_empty():
    assert classify_anchors([]) == ([], [])


# ---- Anchor lookup ----

def test_find_anchor_not_found():
    with pytest.raises(AppError) as ei:
        find_anchor(ROW_ANCHORS, 99, "row")
    assert ei.value.code == ANCHOR_NOT_FOUND
    assert ei.value.details == {"axis": "row", "index": 99}


def test_find_anchor_ambiguous():
    anchors = ROW_ANCHORS + [LabelCell(14, 3, 10)]
    with pytest.raises(AppError) as ei:
        find_anchor(anchors, 10, "row")
    assert ei.value.code == ANCHOR_AMBIGUOUS
    assert ei.value.details["cells"] == [(11, 2), (14, 3)]


# ---- Placement ----

def test_target_position_canonical_uses_max_rule():
    assert target_position(LabelCell(11, 2, 10), LabelCell(10, 5, 10)) == (11, 5)


def test_target_position_row_label_on_right_uses_column_anchor_column():
    assert target_position(LabelCell(11, 12, 10), LabelCell(10, 5, 10)) == (11, 5)


def test_target_position_other_offsets_fall_back_to_max_rule():
    # row anchor above and right of column anchor: not the mirrored case
    assert target_position(LabelCell(3, 9, 1), LabelCell(10, 5, 1)) == (10, 9)


# ---- Formatting ----

@pytest.mark.parametrize("raw,expected", [
    (0, "0"),
    (0.0, "0"),
    (100, "100"),
    (1234, "1,234"),
    (1234567, "1,234,567"),
    (-1234, "-1,234"),
    (1234.5, "1,235"),
    (-1234.5, "-1,235"),
    (Decimal("999.49"), "999"),
    (10**30, "1," + ",".join(["000"] * 10)),
    (1e30, "1," + ",".join(["000"] * 10)),
    (Decimal("1e30"), "1," + ",".join(["000"] * 10)),
    (Decimal("-12345678901234567890123456789012.5"), "-12,345,678,901,234,567,890,123,456,789,013"),
])
def test_format_value(raw, expected):
    assert format_value(raw) == expected


@pytest.mark.parametrize("raw", ["100", None, True, float("nan"), float("inf")])
def test_format_value_rejects_non_numbers(raw):
    with pytest.raises(AppError) as ei:
        format_value(raw)
    assert ei.value.code == BAD_VALUE


# ---- Resolution ----

def test_resolve_concrete_scenario():
    targets = resolve_targets(CANONICAL, [ValueItem(10, 10, 100)])
    assert targets == [TargetCell(11, 5, "100")]
    assert targets[0].coordinate == "E11"


def test_resolve_keeps_input_order_and_duplicates():
    items = [ValueItem(20, 12, 5), ValueItem(10, 11, 1), ValueItem(20, 12, 6)]
    targets = resolve_targets(CANONICAL, items)
    assert targets == [
        TargetCell(12, 7, "5"),
        TargetCell(11, 6, "1"),
        TargetCell(12, 7, "6"),
    ]


def test_resolve_mirrored_layout_lands_in_data_area():
    targets = resolve_targets(MIRRORED, [ValueItem(10, 10, 100), ValueItem(20, 12, 0)])
    assert targets == [TargetCell(11, 5, "100"), TargetCell(12, 7, "0")]


def test_mirror_variants_pick_layout_specific_cells_with_same_values():
    # Left: row labels in A, column labels in B:C. Right: column labels in A:B, row labels in C.
    left = [LabelCell(1, 2, 1), LabelCell(1, 3, 2), LabelCell(2, 1, 7)]
    right = [LabelCell(1, 1, 1), LabelCell(1, 2, 2), LabelCell(2, 3, 7)]
    items = [ValueItem(7, 1, 1500), ValueItem(7, 2, 0)]

    left_targets = resolve_targets(left, items)
    right_targets = resolve_targets(right, items)

    assert [(t.row, t.column) for t in left_targets] == [(2, 2), (2, 3)]
    assert [(t.row, t.column) for t in right_targets] == [(2, 1), (2, 2)]
    assert [t.value for t in left_targets] == [t.value for t in right_targets] == ["1,500", "0"]


def test_resolve_unknown_row_fails_whole_run():
    items = [ValueItem(10, 10, 100), ValueItem(99, 10, 1)]
    with pytest.raises(AppError) as ei:
        resolve_targets(CANONICAL, items)
    assert ei.value.code == ANCHOR_NOT_FOUND
    assert ei.value.details["axis"] == "row"


def test_resolve_unknown_column_fails():
    with pytest.raises(AppError) as ei:
        resolve_targets(CANONICAL, [ValueItem(10, 77, 1)])
    assert ei.value.code == ANCHOR_NOT_FOUND
    assert ei.value.details["axis"] == "column"


def test_resolve_no_cells_no_items_is_noop():
    assert resolve_targets([], []) == []


def test_resolve_items_without_cells_fails():
    with pytest.raises(AppError) as ei:
        resolve_targets([], [ValueItem(10, 10, 1)])
    assert ei.value.code == ANCHOR_NOT_FOUND


def test_resolve_items_uses_given_anchors():
    rows, cols = classify_anchors(MIRRORED)
    assert resolve_items([ValueItem(20, 11, 1e30)], rows, cols) == [
        TargetCell(12, 6, "1," + ",".join(["000"] * 10)),
    ]
