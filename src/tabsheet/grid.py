import logging
import re
from typing import Iterable, Sequence

from typing_extensions import Self

from tabsheet.ast import CellAddress
from tabsheet.errors import CellNotFound

# Cells on a line are separated by a tab or by two or more spaces
CELL_SEPARATOR_REGEX = re.compile(r"\t|\s{2,}", re.ASCII)


def split_row(line: str) -> tuple[str, ...]:
    return tuple(cell.strip() for cell in CELL_SEPARATOR_REGEX.split(line.strip()))


class Grid:
    """The raw, unevaluated contents of a sheet, row by row.

    Rows may have different lengths. The grid is never modified after it has
    been built.
    """

    def __init__(self, rows: Iterable[Sequence[str]] = ()):
        self._rows: tuple[tuple[str, ...], ...] = tuple(tuple(row) for row in rows)

    @classmethod
    def from_text(cls, data: str) -> Self:
        """Parse tab (or multi-space) separated text. Blank lines are skipped."""
        rows = [split_row(line) for line in data.split("\n") if line.strip()]
        logging.debug(f"Parsed grid with {len(rows)} rows")
        return cls(rows)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> Self:
        return cls(rows)

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        return self._rows

    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def raw_at(self, address: CellAddress) -> str:
        if address.row >= len(self._rows) or address.column >= len(
            self._rows[address.row]
        ):
            raise CellNotFound(str(address))
        return self._rows[address.row][address.column]
