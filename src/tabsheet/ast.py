import sys
from typing import TYPE_CHECKING, NamedTuple

from tabsheet.errors import CellNotFound, InvalidCellIndex
from tabsheet.functions import call_function
from tabsheet.utils import CELL_REF_REGEX, column_as_int, coords_to_str_ref

if TYPE_CHECKING:
    from tabsheet.spreadsheet import Spreadsheet

# Longest digit string int() accepts, 0 when unlimited
MAX_ROW_DIGITS = sys.get_int_max_str_digits() or sys.maxsize


class CellAddress(NamedTuple):
    row: int
    column: int
    label: str

    @classmethod
    def parse(cls, index: str) -> "CellAddress":
        match = CELL_REF_REGEX.fullmatch(index)
        if not match:
            raise InvalidCellIndex(index)
        col, row = match.groups()
        digits = row.lstrip("0")
        # Row numbers are 1-based, there is no row 0
        if not digits:
            raise InvalidCellIndex(index)
        # Too long to convert, and longer than any grid
        if len(digits) > MAX_ROW_DIGITS:
            raise CellNotFound(index)
        return cls(row=int(digits) - 1, column=column_as_int(col) - 1, label=index)

    @classmethod
    def from_coordinates(cls, row: int, column: int) -> "CellAddress":
        if row < 0 or column < 0:
            raise ValueError(f"Invalid coordinates: ({row}, {column})")
        return cls(row=row, column=column, label=coords_to_str_ref(row, column))

    def __str__(self) -> str:
        return self.label


class Formula(NamedTuple):
    name: str
    arguments: tuple[str, ...]

    def evaluate(self, sheet: "Spreadsheet") -> float:
        """Dispatch to the named function. Arguments are evaluated lazily by
        the function itself, after its arity has been checked."""
        return call_function(self.name, self.arguments, sheet)
