import logging
from typing import TYPE_CHECKING

from tabsheet.errors import InvalidExpression
from tabsheet.parser import FormulaParser
from tabsheet.types import format_number, is_number, parse_number
from tabsheet.utils import is_cell_reference

if TYPE_CHECKING:
    from tabsheet.spreadsheet import Spreadsheet

# TODO:
# - Bound the reference depth so a cycle raises a SpreadsheetError instead of
#   RecursionError


class ExpressionEvaluator:
    """Evaluates raw cell contents to their displayed value.

    Nothing is cached: every call re-reads the referenced cells.
    """

    @staticmethod
    def is_expression(raw: str) -> bool:
        return raw.startswith("=")

    @staticmethod
    def evaluate_top_level(raw: str, sheet: "Spreadsheet") -> str:
        """Evaluate a cell's content. Anything not starting with "=" is a
        literal and is returned as is."""
        if not ExpressionEvaluator.is_expression(raw):
            return raw
        return ExpressionEvaluator.evaluate_expression(raw[1:], sheet)

    @staticmethod
    def evaluate_expression(expression: str, sheet: "Spreadsheet") -> str:
        """Evaluate an expression body: a cell reference, a formula call or a
        number, tried in that order."""
        if is_cell_reference(expression):
            logging.debug(f"Resolving reference {expression}")
            return sheet.get(expression)

        if FormulaParser.recognize(expression):
            formula = FormulaParser(expression).parse()
            logging.debug(f"Evaluating formula {formula.name}{formula.arguments}")
            return format_number(formula.evaluate(sheet))

        if is_number(expression):
            return format_number(parse_number(expression))

        raise InvalidExpression(expression)
