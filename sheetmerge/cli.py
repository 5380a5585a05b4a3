"""Typer based command line entry points for sheetmerge."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .errors import AppError, friendly_message
from .merger import get_sheet, open_template, run_merge
from .resolver import classify_anchors
from .scanner import scan_label_cells
from .settings import MergeSettings

app = typer.Typer(help="Merge report values into labelled Excel templates.")


def _fail(e: AppError) -> None:
    typer.secho(friendly_message(e), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from e


@app.command("merge")
def merge_command(
    settings_file: Optional[Path] = typer.Argument(None, dir_okay=False, help="Settings JSON file"),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Template sheet name"),
    template: Optional[str] = typer.Option(None, "--template", help="Template XLSX path"),
    report: Optional[str] = typer.Option(None, "--report", help="Report XML/CSV path"),
    output: Optional[str] = typer.Option(None, "--output", help="Merged XLSX path"),
) -> None:
    """Merge a report into a template sheet and save the result."""
    settings = MergeSettings()
    if settings_file is not None:
        try:
            settings = MergeSettings.load_json(str(settings_file))
        except (OSError, ValueError) as exc:
            typer.secho(f"Unable to load settings: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2) from exc

    # command-line flags win over the file
    if sheet is not None:
        settings.sheet_name = sheet
    if template is not None:
        settings.template_path = template
    if report is not None:
        settings.report_path = report
    if output is not None:
        settings.output_path = output

    try:
        result = run_merge(settings)
    except AppError as e:
        _fail(e)
        return

    typer.echo(f"{result.cells_written} cells written to '{result.sheet_name}' -> {result.output_path}")


@app.command("scan")
def scan_command(
    template: Path = typer.Argument(..., dir_okay=False, help="Template XLSX path"),
    sheet: str = typer.Option(..., "--sheet", help="Template sheet name"),
) -> None:
    """List label cells and how they classify as anchors."""
    try:
        wb = open_template(str(template))
        cells = scan_label_cells(get_sheet(wb, sheet))
    except AppError as e:
        _fail(e)
        return

    row_anchors, column_anchors = classify_anchors(cells)
    rows = set(row_anchors)
    cols = set(column_anchors)
    for c in cells:
        roles = [name for name, group in (("row", rows), ("column", cols)) if c in group]
        typer.echo(f"R{c.row}C{c.column}\t{c.text}\t{'+'.join(roles) or '-'}")
    typer.echo(f"{len(cells)} label cells, {len(row_anchors)} row anchors, {len(column_anchors)} column anchors")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
