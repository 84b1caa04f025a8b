import logging
from enum import Enum
from functools import reduce
from typing import TYPE_CHECKING, Callable, NamedTuple, Sequence

import numpy as np
from rapidfuzz import fuzz, process

from tabsheet.errors import ArityError, UnknownFunction
from tabsheet.types import coerce_to_number

if TYPE_CHECKING:
    from tabsheet.spreadsheet import Spreadsheet

# Minimum rapidfuzz ratio for an unknown function name to get a suggestion
SUGGESTION_CUTOFF = 60.0


class FunctionName(Enum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MOD = "MOD"


class Arity(NamedTuple):
    count: int
    at_least: bool = False

    def check(self, name: str, actual: int) -> None:
        valid = actual >= self.count if self.at_least else actual == self.count
        if not valid:
            raise ArityError(name, self.count, actual, at_least=self.at_least)


class SpreadsheetFunction(NamedTuple):
    arity: Arity
    reducer: Callable[[list[float]], float]


SPREADSHEET_FUNCTIONS: dict[FunctionName, SpreadsheetFunction] = {}


def spreadsheet_fn(name: FunctionName, arity: Arity):
    """Decorator to register the reducer of one of the built-in functions."""

    def decorator(fn: Callable[[list[float]], float]) -> Callable[[list[float]], float]:
        SPREADSHEET_FUNCTIONS[name] = SpreadsheetFunction(arity=arity, reducer=fn)
        return fn

    return decorator


@spreadsheet_fn(FunctionName.ADD, Arity(2, at_least=True))
def ADD(values: list[float]) -> float:
    return reduce(lambda acc, x: acc + x, values[1:], values[0])


@spreadsheet_fn(FunctionName.SUBTRACT, Arity(2))
def SUBTRACT(values: list[float]) -> float:
    return values[0] - values[1]


@spreadsheet_fn(FunctionName.MULTIPLY, Arity(2, at_least=True))
def MULTIPLY(values: list[float]) -> float:
    return reduce(lambda acc, x: acc * x, values[1:], values[0])


@spreadsheet_fn(FunctionName.DIVIDE, Arity(2))
def DIVIDE(values: list[float]) -> float:
    """Divide the first value by the second.

    A zero divisor gives inf (or nan for 0/0) instead of raising.
    """
    dividend, divisor = values
    if divisor == 0:
        logging.warning(f"Division by zero in DIVIDE({dividend}, {divisor})")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(dividend), np.float64(divisor)))


@spreadsheet_fn(FunctionName.MOD, Arity(2))
def MOD(values: list[float]) -> float:
    """Remainder of the first value divided by the second, with the sign of
    the divisor. A zero divisor gives nan."""
    dividend, divisor = values
    if divisor == 0:
        logging.warning(f"Modulo by zero in MOD({dividend}, {divisor})")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.mod(np.float64(dividend), np.float64(divisor)))


def suggest_function(name: str, cutoff: float = SUGGESTION_CUTOFF) -> str | None:
    """Return the known function name closest to `name`, if any is close enough."""
    match = process.extractOne(
        name,
        [function.value for function in FunctionName],
        scorer=fuzz.ratio,
        score_cutoff=cutoff,
    )
    if match is None:
        return None
    return match[0]


def lookup_function(name: str) -> FunctionName:
    try:
        return FunctionName(name)
    except ValueError:
        raise UnknownFunction(name, suggest_function(name)) from None


def evaluate_arguments(arguments: Sequence[str], sheet: "Spreadsheet") -> list[float]:
    """Evaluate each raw argument as an expression and read it back as a number."""
    # Avoid circular imports
    from tabsheet.interpreter import ExpressionEvaluator

    return [
        coerce_to_number(ExpressionEvaluator.evaluate_expression(argument, sheet))
        for argument in arguments
    ]


def call_function(name: str, arguments: Sequence[str], sheet: "Spreadsheet") -> float:
    """Check arity, evaluate the arguments and apply the named function."""
    function = SPREADSHEET_FUNCTIONS[lookup_function(name)]
    function.arity.check(name, len(arguments))
    values = evaluate_arguments(arguments, sheet)
    logging.debug(f"Calling {name} with {values}")
    return function.reducer(values)
