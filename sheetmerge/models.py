from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Union

from openpyxl.utils import get_column_letter


Number = Union[int, float, Decimal]


# ---- Grid addressing ----

@dataclass(frozen=True)
class LabelCell:
    """
    A template cell whose text parses as an integer.
    row/column are physical 1-based positions; value is the parsed label.
    """
    row: int
    column: int
    value: int
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class ValueItem:
    """
    One computed report value. row/column are LOGICAL indices,
    matched against label values, not worksheet positions.
    """
    row: int
    column: int
    value: Number


@dataclass(frozen=True)
class TargetCell:
    row: int                # physical, 1-based
    column: int             # physical, 1-based
    value: str              # formatted for display

    @property
    def coordinate(self) -> str:
        return f"{get_column_letter(self.column)}{self.row}"


# ---- Merge inputs / outputs ----

@dataclass
class Report:
    name: str = ""
    items: List[ValueItem] = field(default_factory=list)


@dataclass
class MergePayload:
    """
    Everything one merge needs. cells=None means scan them from the worksheet.
    """
    worksheet: Any
    items: Optional[List[ValueItem]]
    cells: Optional[List[LabelCell]] = None


@dataclass
class MergeResult:
    """
    Returned by merger.merge / merger.run_merge. CLI renders this; tests can assert it.
    """
    sheet_name: str
    cells_written: int
    targets: List[TargetCell] = field(default_factory=list)
    row_anchors: int = 0
    column_anchors: int = 0
    output_path: str = ""
    message: str = ""
