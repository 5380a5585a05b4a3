from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AppError(Exception):
    """
    User-facing error with a short code and structured details.
    Raise AppError from sheetmerge modules; the CLI displays friendly_message(e).
    """
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} ({self.details})"
        return f"{self.code}: {self.message}"


# ── Error codes (keep stable for tests and CLI) ───────────────────────────────

BAD_PAYLOAD          = "BAD_PAYLOAD"
ANCHOR_NOT_FOUND     = "ANCHOR_NOT_FOUND"
ANCHOR_AMBIGUOUS     = "ANCHOR_AMBIGUOUS"
BAD_VALUE            = "BAD_VALUE"
BAD_REPORT           = "BAD_REPORT"
REPORT_READ_FAILED   = "REPORT_READ_FAILED"
TEMPLATE_READ_FAILED = "TEMPLATE_READ_FAILED"
SHEET_NOT_FOUND      = "SHEET_NOT_FOUND"
FILE_LOCKED          = "FILE_LOCKED"
SAVE_FAILED          = "SAVE_FAILED"
MISSING_SETTING      = "MISSING_SETTING"


# ── Friendly message lookup ───────────────────────────────────────────────────

def _fname(e: AppError) -> str:
    if e.details and "path" in e.details:
        return f" ({os.path.basename(str(e.details['path']))})"
    return ""


def friendly_message(e: AppError) -> str:
    """
    Return a plain-English one-liner suitable for the command line.
    Never exposes raw tracebacks or internal code paths.
    """
    code = e.code
    msg  = e.message or ""
    details = e.details or {}

    if code == FILE_LOCKED:
        return f"File is open in another program{_fname(e)}. Close it and try again."

    if code == SAVE_FAILED:
        if "permission" in msg.lower() or "locked" in msg.lower() or "access" in msg.lower():
            return f"Could not save, the file is open in another program{_fname(e)}. Close it and try again."
        return f"Could not save the merged workbook{_fname(e)}. Check that the path is valid and the folder exists."

    if code in (ANCHOR_NOT_FOUND, ANCHOR_AMBIGUOUS):
        axis  = details.get("axis", "")
        index = details.get("index", "")
        label = f" {axis} index {index}" if axis else ""
        if code == ANCHOR_NOT_FOUND:
            return (
                f"The template has no label cell for{label or ' a report index'}. "
                "Check that the report matches the template sheet."
            )
        return (
            f"The template has more than one label cell for{label or ' a report index'}. "
            "Each row and column label must appear exactly once."
        )

    if code == BAD_PAYLOAD:
        return f"Nothing to merge, the worksheet or report values are missing.\n({msg})"

    if code == BAD_VALUE:
        return f"A report value is not a number.\n({msg})"

    if code == BAD_REPORT:
        return f"The report file has an invalid entry. Row, Column and Value must be numbers.\n({msg})"

    if code == REPORT_READ_FAILED:
        if "no such file" in msg.lower() or "not found" in msg.lower():
            return "Report file not found. Check that the file path is correct."
        return f"Could not read the report file. Check that it is a valid XML or CSV.\n({msg})"

    if code == TEMPLATE_READ_FAILED:
        if "permission" in msg.lower() or "locked" in msg.lower():
            return "Template file is open in another program. Close it and try again."
        return f"Could not read the template workbook. Check that it is a valid XLSX.\n({msg})"

    if code == SHEET_NOT_FOUND:
        return f"Sheet not found in the template. Check that the sheet name is correct.\n({msg})"

    if code == MISSING_SETTING:
        name = details.get("setting", "")
        if name:
            return f"Setting '{name}' is empty. Fill it in and try again."
        return "A required setting is empty. Fill it in and try again."

    # Fallback: first line only, never show raw tracebacks
    clean = msg.splitlines()[0] if msg else "An unexpected error occurred."
    return clean
