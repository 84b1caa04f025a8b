import re

from tabsheet.ast import Formula
from tabsheet.errors import InvalidExpression

# The argument list may not contain ")", so a call nested directly inside
# another call never matches. Nesting goes through cell references instead.
FORMULA_REGEX = re.compile(r"([A-Z]+)\(([^)]*)\)")
ARGUMENT_SEPARATOR_REGEX = re.compile(r"\s*,\s*")


# Helper function to parse a formula string into a Formula node.
def parse_formula(formula: str) -> Formula:
    """Helper function to parse a formula string into a Formula node."""
    return FormulaParser(formula).parse()


class FormulaParser:
    def __init__(self, formula: str):
        self.formula = formula

    @staticmethod
    def recognize(formula: str) -> bool:
        """Return True if the string looks like `NAME(arg, ...)`."""
        return FORMULA_REGEX.fullmatch(formula) is not None

    def parse(self) -> Formula:
        """Split the formula into its name and raw, unevaluated arguments."""
        match = FORMULA_REGEX.fullmatch(self.formula)
        if not match:
            raise InvalidExpression(self.formula)
        name, body = match.groups()
        return Formula(name=name, arguments=self.split_arguments(body))

    @staticmethod
    def split_arguments(body: str) -> tuple[str, ...]:
        body = body.strip()
        # Empty argument list
        if not body:
            return ()
        return tuple(ARGUMENT_SEPARATOR_REGEX.split(body))
