"""
sheetmerge/report.py — Report value loading (XML / CSV).

XML shape (attributes or child elements, tag names case-insensitive):

    <ReportRoot>
      <Report Name="F 20.04">
        <Item Row="10" Column="10" Value="100" />
        <Item><Row>20</Row><Column>11</Column><Value>500</Value></Item>
      </Report>
    </ReportRoot>

CSV shape: a header with row, column, value (any case), one item per line.
"""
from __future__ import annotations

import csv
import os
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union
import xml.etree.ElementTree as ET

from .errors import AppError, BAD_REPORT, REPORT_READ_FAILED
from .models import Number, Report, ValueItem
from .scanner import INTEGER_RE


_NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$", re.ASCII)


def _parse_index(raw: Any, field_name: str) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and INTEGER_RE.match(raw):
        return int(raw)
    raise AppError(BAD_REPORT, f"Bad {field_name}: {raw!r}")


def _parse_number(raw: Any) -> Number:
    """Plain ASCII decimal text only; no NaN/inf, underscores or other scripts."""
    s = raw.strip() if isinstance(raw, str) else ""
    if not _NUMBER_RE.match(s):
        raise AppError(BAD_REPORT, f"Bad value: {raw!r}")
    if INTEGER_RE.match(s):
        return int(s)
    try:
        return Decimal(s)
    except InvalidOperation:
        raise AppError(BAD_REPORT, f"Bad value: {raw!r}")


def build_item(fields: Dict[str, Any]) -> ValueItem:
    """Build a ValueItem from a lower-cased {row, column, value} mapping."""
    for key in ("row", "column", "value"):
        if key not in fields:
            raise AppError(BAD_REPORT, f"Report item is missing '{key}'", {"item": dict(fields)})
    return ValueItem(
        row=_parse_index(fields["row"], "row"),
        column=_parse_index(fields["column"], "column"),
        value=_parse_number(fields["value"]),
    )


# ── XML ───────────────────────────────────────────────────────────────────────

def _local(tag: str) -> str:
    """Tag name without namespace, lower-cased."""
    return tag.rsplit("}", 1)[-1].lower()


def _element_fields(el: ET.Element) -> Dict[str, Any]:
    fields = {k.lower(): v for k, v in el.attrib.items()}
    for child in el:
        fields.setdefault(_local(child.tag), child.text)
    return fields


def _find_report(root: ET.Element) -> Optional[ET.Element]:
    if _local(root.tag) == "report":
        return root
    for el in root.iter():
        if _local(el.tag) == "report":
            return el
    return None


def parse_report_xml(text: Union[str, bytes]) -> Report:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise AppError(REPORT_READ_FAILED, f"Invalid XML: {e}")

    report_el = _find_report(root)
    if report_el is None:
        raise AppError(BAD_REPORT, "No <Report> element found")

    name = report_el.attrib.get("Name") or report_el.attrib.get("name") or ""
    items: List[ValueItem] = []
    for child in report_el:
        tag = _local(child.tag)
        if tag == "name" and not name:
            name = (child.text or "").strip()
        elif tag == "items":
            items.extend(build_item(_element_fields(i)) for i in child if _local(i.tag) == "item")
        elif tag == "item":
            items.append(build_item(_element_fields(child)))

    return Report(name=name, items=items)


def load_report_xml(path: str) -> Report:
    try:
        with open(path, "rb") as f:
            text = f.read()
    except OSError as e:
        raise AppError(REPORT_READ_FAILED, f"Failed to read report: {e}", {"path": path})
    return parse_report_xml(text)


# ── CSV ───────────────────────────────────────────────────────────────────────

def load_report_csv(path: str) -> Report:
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            rows = [
                {(k or "").strip().lower(): v for k, v in row.items()}
                for row in reader
            ]
    except OSError as e:
        raise AppError(REPORT_READ_FAILED, f"Failed to read report: {e}", {"path": path})

    items = [build_item(r) for r in rows if any((v or "").strip() for v in r.values() if isinstance(v, str))]
    name = os.path.splitext(os.path.basename(path))[0]
    return Report(name=name, items=items)


def load_report(path: str) -> Report:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        return load_report_csv(path)
    return load_report_xml(path)
