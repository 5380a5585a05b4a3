"""
sheetmerge/scanner.py — Label-cell discovery.

A label cell is any template cell whose printable value is a base-10 integer
("010", 20, " 7 "). The resolver later decides which of them act as row or
column anchors; this module only finds candidates.

Uses ws.iter_rows() for reading, never ws.cell() in a scan loop, so scanning
does not register phantom cells in the template.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional

from openpyxl.worksheet.worksheet import Worksheet

from .models import LabelCell


# ASCII only: int() would also take Arabic-Indic or full-width digits
INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$", re.ASCII)


def parse_label(value: Any) -> Optional[int]:
    """
    Return the integer a cell value reads as, or None.
    Bools, fractional numbers, formulas and free text are not labels.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and INTEGER_RE.match(value):
        return int(value)
    return None


def _label_text(value: Any) -> str:
    if isinstance(value, float):
        return str(int(value))
    return str(value).strip()


def scan_label_cells_in_rows(rows: Iterable[Iterable[Any]]) -> List[LabelCell]:
    """
    Scan a plain 2-D table (row 0 is worksheet row 1) in row-major order.
    """
    cells: List[LabelCell] = []
    for r_idx, row in enumerate(rows, start=1):
        for c_idx, value in enumerate(row, start=1):
            parsed = parse_label(value)
            if parsed is None:
                continue
            cells.append(LabelCell(row=r_idx, column=c_idx, value=parsed, text=_label_text(value)))
    return cells


def scan_label_cells(ws: Worksheet) -> List[LabelCell]:
    """
    Return every label cell in the worksheet, row-major.
    An empty result is valid; callers decide whether it is useful.
    """
    return scan_label_cells_in_rows(ws.iter_rows(min_row=1, min_col=1, values_only=True))
