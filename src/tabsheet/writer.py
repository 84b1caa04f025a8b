import logging
from pathlib import Path
from typing import IO

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from tabsheet.interpreter import ExpressionEvaluator
from tabsheet.spreadsheet import Spreadsheet
from tabsheet.types import is_number
from tabsheet.utils import column_as_int, column_as_str

TWO_DECIMALS_FORMAT = "0.00"


def display_values(sheet: Spreadsheet, evaluate: bool = True) -> list[list[str]]:
    """Return every cell of the sheet, evaluated unless `evaluate` is False."""
    if not evaluate:
        return [list(row) for row in sheet.grid.rows]
    return [
        [ExpressionEvaluator.evaluate_top_level(raw, sheet) for raw in row]
        for row in sheet.grid.rows
    ]


def to_excel_value(text: str) -> tuple[str | int | float, str | None]:
    """Convert a displayed value to a worksheet value and its number format."""
    if not is_number(text):
        return text, None
    if "." in text:
        return float(text), TWO_DECIMALS_FORMAT
    return int(text), None


class SpreadsheetWriter:
    ws: Worksheet
    row: int
    col: int

    def __init__(self, ws: Worksheet, row: int = 1, col: int | str = 1) -> None:
        self.ws = ws
        self.row = row
        self.col = column_as_int(col)

    def write(self, sheet: Spreadsheet, evaluate: bool = True) -> None:
        """Write the sheet with its top-left cell at the writer's position.

        Numbers are written as numbers, everything else as text. With
        `evaluate=False` the raw contents (formulas included) are written.
        """
        for i, values in enumerate(display_values(sheet, evaluate=evaluate)):
            for j, text in enumerate(values):
                if evaluate:
                    value, number_format = to_excel_value(text)
                else:
                    value, number_format = text, None
                # Keep empty cells empty
                if value == "":
                    continue
                cell = self.ws.cell(self.row + i, self.col + j)
                cell.value = value
                if number_format is not None:
                    cell.number_format = number_format
        logging.debug(f"Wrote {sheet.grid.row_count()} rows to worksheet {self.ws.title}")

    def auto_resize_columns(self, min_width: float = 0, max_width: float = 50) -> None:
        """Resize the worksheet's columns to fit their content."""
        for col in self.ws.columns:
            max_length = max((len(str(cell.value)) for cell in col if cell.value), default=0)
            adjusted_width = max(min_width, min(max_length + 2, max_width))
            self.ws.column_dimensions[col[0].column_letter].width = adjusted_width


def write_to_worksheet(
    sheet: Spreadsheet,
    ws: Worksheet,
    row: int = 1,
    col: int | str = 1,
    evaluate: bool = True,
) -> None:
    SpreadsheetWriter(ws, row=row, col=col).write(sheet, evaluate=evaluate)


def save_spreadsheet(
    sheet: Spreadsheet,
    file: str | Path | IO[bytes],
    title: str = "Sheet1",
    evaluate: bool = True,
) -> None:
    """Save the sheet's values to a new .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    assert ws is not None
    ws.title = title
    writer = SpreadsheetWriter(ws)
    writer.write(sheet, evaluate=evaluate)
    writer.auto_resize_columns()
    wb.save(file)


def to_dataframe(sheet: Spreadsheet, evaluate: bool = True) -> pd.DataFrame:
    """Return the sheet as a DataFrame indexed by row number, with column
    letters as column names. Short rows are padded with None."""
    values = display_values(sheet, evaluate=evaluate)
    width = max((len(row) for row in values), default=0)
    data = [row + [None] * (width - len(row)) for row in values]
    columns = [column_as_str(i + 1) for i in range(width)]
    index = pd.RangeIndex(start=1, stop=len(values) + 1)
    return pd.DataFrame(data, columns=columns, index=index, dtype=object)
