from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict
import json

from .errors import AppError, MISSING_SETTING


@dataclass
class MergeSettings:
    """
    Where one merge reads from and writes to.
    All paths are plain strings; nothing is resolved against a working dir.
    """
    sheet_name: str = ""
    template_path: str = ""
    report_path: str = ""
    output_path: str = ""

    # ---------- Validation ----------

    def validate(self) -> None:
        for f in fields(self):
            if not (getattr(self, f.name) or "").strip():
                raise AppError(MISSING_SETTING, f"Setting '{f.name}' is blank.", {"setting": f.name})

    # ---------- Serialization ----------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MergeSettings":
        return cls(
            sheet_name=data.get("sheet_name", ""),
            template_path=data.get("template_path", ""),
            report_path=data.get("report_path", ""),
            output_path=data.get("output_path", ""),
        )

    # ---------- File IO ----------

    def save_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_json(cls, path: str) -> "MergeSettings":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)
