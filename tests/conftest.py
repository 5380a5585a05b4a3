"""Shared template fixtures for the merge tests."""
from __future__ import annotations

import pytest
from openpyxl import Workbook

COLUMN_LABELS = ["010", "011", "012", "022", "025", "031", "040"]   # row 10, cols E..K
ROW_LABELS = ["010", "020"]                                           # rows 11..12


def _build_template(ws, row_label_col: int):
    """
    F 20.04-style sheet: column labels on row 10 from column E, row labels
    on rows 11-12 in `row_label_col` (2 = left of the data, 12 = right).
    """
    ws["A1"] = "F 20.04"
    ws["A2"] = "Geographical breakdown of assets"
    ws["C3"] = "Carrying amount"
    for offset, label in enumerate(COLUMN_LABELS):
        ws.cell(row=10, column=5 + offset, value=label)
    for offset, label in enumerate(ROW_LABELS):
        ws.cell(row=11 + offset, column=row_label_col, value=label)
        ws.cell(row=11 + offset, column=1, value=f"Line {label}")
    return ws


@pytest.fixture
def make_template():
    def _make(sheet_name: str = "F 20.04", row_label_col: int = 2) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        _build_template(ws, row_label_col)
        return wb
    return _make


@pytest.fixture
def canonical_ws(make_template):
    return make_template()["F 20.04"]


@pytest.fixture
def mirrored_ws(make_template):
    return make_template("WithRowsIndexOnTheRight", row_label_col=12)["WithRowsIndexOnTheRight"]
