from datetime import datetime

import pytest
from openpyxl import Workbook, load_workbook

from tabsheet.errors import InvalidExpression
from tabsheet.reader import cell_to_text, load_spreadsheet, read_worksheet
from tabsheet.spreadsheet import Spreadsheet
from tabsheet.writer import (
    display_values,
    save_spreadsheet,
    to_dataframe,
    to_excel_value,
    write_to_worksheet,
)


@pytest.fixture
def workbook():
    wb = Workbook()
    sheet1 = wb.active
    sheet1.title = "Sheet1"
    sheet1["A1"] = 10
    sheet1["B1"] = 4
    sheet1["C1"] = "=DIVIDE(A1, B1)"
    sheet1["A2"] = "label"
    sheet1["B2"] = True
    # Row 3 left empty
    sheet1["A4"] = "=ADD(A1, B1, C1)"

    sheet2 = wb.create_sheet("Sheet2")
    sheet2["B2"] = 1
    sheet2["C2"] = "=MULTIPLY(A1, 3)"
    return wb


@pytest.fixture
def sheet():
    return Spreadsheet("1\t=DIVIDE(A1, 4)\tfoo\n=ADD(A1, 2)")


class TestReader:
    def test_cell_to_text(self):
        assert cell_to_text(None) == ""
        assert cell_to_text(3) == "3"
        assert cell_to_text(2.5) == "2.5"
        assert cell_to_text(False) == "FALSE"
        assert cell_to_text(" padded ") == "padded"
        assert cell_to_text(datetime(2024, 3, 1, 12, 30)) == "2024-03-01 12:30:00"

    def test_read_worksheet(self, workbook):
        sheet = read_worksheet(workbook["Sheet1"])
        assert sheet.grid.rows == (
            ("10", "4", "=DIVIDE(A1, B1)"),
            ("label", "TRUE"),
            (),
            ("=ADD(A1, B1, C1)",),
        )
        assert sheet["C1"] == "2.50"
        assert sheet["A4"] == "16.50"

    def test_read_worksheet_with_origin(self, workbook):
        # B2 becomes A1
        sheet = read_worksheet(workbook["Sheet2"], row=2, col=2)
        assert sheet.grid.rows == (("1", "=MULTIPLY(A1, 3)"),)
        assert sheet["B1"] == "3"

    def test_read_empty_worksheet(self):
        wb = Workbook()
        assert read_worksheet(wb.active).is_empty()

    def test_load_spreadsheet(self, workbook, tmp_path):
        path = tmp_path / "book.xlsx"
        workbook.save(path)
        assert load_spreadsheet(path)["C1"] == "2.50"
        assert load_spreadsheet(path, sheet="Sheet2", row=2, col=2)["B1"] == "3"
        with pytest.raises(KeyError, match="Sheet3"):
            load_spreadsheet(path, sheet="Sheet3")


class TestWriter:
    def test_to_excel_value(self):
        assert to_excel_value("3") == (3, None)
        assert to_excel_value("-2.50") == (-2.5, "0.00")
        assert to_excel_value("foo") == ("foo", None)
        assert to_excel_value("inf") == ("inf", None)

    def test_display_values(self, sheet):
        assert display_values(sheet) == [["1", "0.25", "foo"], ["3"]]
        assert display_values(sheet, evaluate=False) == [
            ["1", "=DIVIDE(A1, 4)", "foo"],
            ["=ADD(A1, 2)"],
        ]

    def test_write_to_worksheet(self, sheet):
        wb = Workbook()
        ws = wb.active
        write_to_worksheet(sheet, ws, row=2, col="B")
        assert ws["B2"].value == 1
        assert ws["C2"].value == 0.25
        assert ws["C2"].number_format == "0.00"
        assert ws["D2"].value == "foo"
        assert ws["B3"].value == 3
        assert ws["A1"].value is None

    def test_write_raw_contents(self, sheet):
        wb = Workbook()
        ws = wb.active
        write_to_worksheet(sheet, ws, evaluate=False)
        assert ws["B1"].value == "=DIVIDE(A1, 4)"
        assert ws["A2"].value == "=ADD(A1, 2)"

    def test_write_fails_on_bad_cell(self):
        wb = Workbook()
        with pytest.raises(InvalidExpression):
            write_to_worksheet(Spreadsheet("=oops"), wb.active)

    def test_save_and_load_round_trip(self, sheet, tmp_path):
        path = tmp_path / "out.xlsx"
        save_spreadsheet(sheet, path, title="Values")
        wb = load_workbook(path)
        assert wb.sheetnames == ["Values"]
        assert wb["Values"]["B1"].value == 0.25
        assert wb["Values"].column_dimensions["C"].width == 5

        # Raw contents survive a round trip
        raw_path = tmp_path / "raw.xlsx"
        save_spreadsheet(sheet, raw_path, evaluate=False)
        assert load_spreadsheet(raw_path).render() == sheet.render()

    def test_to_dataframe(self, sheet):
        df = to_dataframe(sheet)
        assert list(df.columns) == ["A", "B", "C"]
        assert list(df.index) == [1, 2]
        assert df.loc[1, "B"] == "0.25"
        assert df.loc[2, "A"] == "3"
        assert df.loc[2, "C"] is None

    def test_to_dataframe_raw(self, sheet):
        df = to_dataframe(sheet, evaluate=False)
        assert df.loc[2, "A"] == "=ADD(A1, 2)"

    def test_to_dataframe_empty(self):
        df = to_dataframe(Spreadsheet())
        assert df.empty


if __name__ == "__main__":
    pytest.main([__file__])
