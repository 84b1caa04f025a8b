import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import IO, Any

from openpyxl import load_workbook
from openpyxl.utils.datetime import to_ISO8601
from openpyxl.worksheet.worksheet import Worksheet

from tabsheet.grid import Grid
from tabsheet.spreadsheet import Spreadsheet


def cell_to_text(value: Any) -> str:
    """Convert an openpyxl cell value to raw cell content."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, (datetime, date, time)):
        # It's common to use a space for readability, Excel also does it
        return to_ISO8601(value).replace("T", " ")
    return str(value).strip()


def _trim_trailing_empty(cells: list[str]) -> list[str]:
    while cells and cells[-1] == "":
        cells.pop()
    return cells


def read_worksheet(ws: Worksheet, row: int = 1, col: int = 1) -> Spreadsheet:
    """Build a Spreadsheet from an openpyxl worksheet.

    The cell at (`row`, `col`) becomes A1 of the spreadsheet. Trailing empty
    cells of each row and trailing empty rows are dropped, empty rows in
    between are kept so that addresses stay aligned with the worksheet.
    """
    rows = [
        _trim_trailing_empty([cell_to_text(value) for value in values])
        for values in ws.iter_rows(
            min_row=row,
            min_col=col,
            max_row=max(ws.max_row, row),
            max_col=max(ws.max_column, col),
            values_only=True,
        )
    ]
    _trim_trailing_empty_rows(rows)
    logging.debug(f"Read {len(rows)} rows from worksheet {ws.title}")
    return Spreadsheet(grid=Grid.from_rows(rows))


def _trim_trailing_empty_rows(rows: list[list[str]]) -> None:
    while rows and not rows[-1]:
        rows.pop()


def load_spreadsheet(
    file: str | Path | IO[bytes], sheet: str | None = None, row: int = 1, col: int = 1
) -> Spreadsheet:
    """Read a worksheet of an .xlsx file, the active one unless `sheet` is given."""
    # Formulas are kept as text, cached values are ignored
    wb = load_workbook(file, data_only=False)
    if sheet is None:
        ws = wb.active
    else:
        if sheet not in wb:
            raise KeyError(f'Worksheet "{sheet}" not found.')
        ws = wb[sheet]
    assert isinstance(ws, Worksheet)
    return read_worksheet(ws, row=row, col=col)
