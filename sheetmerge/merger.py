"""
sheetmerge/merger.py — Report-into-template merge executor.

Responsible for:
  - Validating the payload before any work starts
  - Scanning label cells (unless the caller supplies them)
  - Resolving every report item to a target cell
  - Writing targets only after ALL items resolved (all-or-nothing)
  - For run_merge: opening the template, loading the report, saving the output

Resolution itself lives in sheetmerge.resolver and never touches a worksheet.
"""
from __future__ import annotations

import os

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import (
    AppError,
    FILE_LOCKED, SAVE_FAILED, SHEET_NOT_FOUND, TEMPLATE_READ_FAILED,
)
from .log import get_logger
from .models import MergePayload, MergeResult
from .report import load_report
from .resolver import classify_anchors, resolve_items
from .scanner import scan_label_cells
from .settings import MergeSettings
from .validation import validate_payload
from .writer import apply_targets

logger = get_logger("merger")


# ── Template access (shared with cli) ─────────────────────────────────────────

def open_template(template_path: str) -> Workbook:
    try:
        return load_workbook(template_path)
    except PermissionError:
        raise AppError(
            FILE_LOCKED,
            f"Template file is locked: {template_path}",
            {"path": template_path},
        )
    except Exception as e:
        raise AppError(
            TEMPLATE_READ_FAILED,
            f"Could not open template: {e}",
            {"path": template_path},
        )


def get_sheet(wb: Workbook, name: str) -> Worksheet:
    if name not in wb.sheetnames:
        raise AppError(SHEET_NOT_FOUND, f"Sheet not found: {name}", {"available": list(wb.sheetnames)})
    return wb[name]


# ── Private helpers ───────────────────────────────────────────────────────────

def _save(wb: Workbook, output_path: str) -> None:
    folder = os.path.dirname(output_path)
    try:
        if folder:
            os.makedirs(folder, exist_ok=True)
        wb.save(output_path)
    except PermissionError:
        raise AppError(
            FILE_LOCKED,
            f"Output file is open in another program: {output_path}",
            {"path": output_path},
        )
    except Exception as e:
        raise AppError(SAVE_FAILED, str(e), {"path": output_path})


# ── Public API ────────────────────────────────────────────────────────────────

def merge(payload: MergePayload) -> MergeResult:
    """
    Merge report values into the payload's worksheet in place.

    Pipeline:
      1. Validate payload
      2. Scan label cells (skipped when payload.cells is given)
      3. Classify anchors + resolve every item
      4. Write

    Raises AppError on the first unresolvable item; the worksheet is then
    left exactly as it was.
    """
    validate_payload(payload)
    ws = payload.worksheet
    items = payload.items

    cells = payload.cells if payload.cells is not None else scan_label_cells(ws)
    logger.info(
        "Merging report values into sheet %r. Report values: %d, label cells: %d",
        getattr(ws, "title", ""), len(items), len(cells),
    )
    if not cells:
        logger.info("No label cells found in sheet %r", getattr(ws, "title", ""))

    row_anchors, column_anchors = classify_anchors(cells)
    logger.info("Found %d row anchors with %d column anchors", len(row_anchors), len(column_anchors))

    try:
        targets = resolve_items(items, row_anchors, column_anchors)
    except AppError as e:
        logger.error("Merge aborted, nothing written: %s", e)
        raise

    logger.info("Writing %d values into the sheet", len(targets))
    written = apply_targets(ws, targets)

    return MergeResult(
        sheet_name=getattr(ws, "title", ""),
        cells_written=written,
        targets=targets,
        row_anchors=len(row_anchors),
        column_anchors=len(column_anchors),
        message="OK" if written > 0 else "0 cells written",
    )


def run_merge(settings: MergeSettings) -> MergeResult:
    """
    Open the template, merge the report file into the configured sheet and
    save to settings.output_path. Nothing is saved when the merge fails.
    """
    settings.validate()

    wb = open_template(settings.template_path)
    ws = get_sheet(wb, settings.sheet_name)
    report = load_report(settings.report_path)
    logger.info("Loaded report %r with %d values", report.name, len(report.items))

    result = merge(MergePayload(worksheet=ws, items=report.items))

    _save(wb, settings.output_path)
    logger.info("Saved merged workbook to %s", settings.output_path)

    result.output_path = settings.output_path
    return result
