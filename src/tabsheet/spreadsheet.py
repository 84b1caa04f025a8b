from tabsheet.ast import CellAddress
from tabsheet.grid import Grid
from tabsheet.interpreter import ExpressionEvaluator


class Spreadsheet:
    """A sheet of cells parsed from tab separated text.

    >>> sheet = Spreadsheet("1\\t=ADD(A1, 2)")
    >>> sheet["B1"]
    '3'
    """

    def __init__(self, data: str = "", grid: Grid | None = None):
        self.grid = grid if grid is not None else Grid.from_text(data)

    def is_empty(self) -> bool:
        return self.grid.is_empty()

    def cell_at(self, index: str) -> str:
        """Return the raw content of a cell, without evaluating it."""
        return self.grid.raw_at(CellAddress.parse(index))

    def get(self, index: str) -> str:
        """Return the displayed value of a cell."""
        return ExpressionEvaluator.evaluate_top_level(self.cell_at(index), self)

    def __getitem__(self, index: str) -> str:
        return self.get(index)

    def render(self) -> str:
        return "\n".join(self._render_row(row) for row in self.grid.rows)

    def _render_row(self, row: tuple[str, ...]) -> str:
        return "\t".join(ExpressionEvaluator.evaluate_top_level(raw, self) for raw in row)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Spreadsheet(rows={self.grid.row_count()})"
