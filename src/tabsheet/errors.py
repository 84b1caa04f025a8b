class SpreadsheetError(ValueError):
    """Base class for every error raised while reading or evaluating a sheet."""


class InvalidCellIndex(SpreadsheetError):
    def __init__(self, index: str):
        self.index = index
        super().__init__(f"Invalid cell index '{index}'")


class CellNotFound(SpreadsheetError):
    def __init__(self, index: str):
        self.index = index
        super().__init__(f"Cell '{index}' does not exist")


class InvalidExpression(SpreadsheetError):
    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Invalid expression '{expression}'")


class UnknownFunction(SpreadsheetError):
    def __init__(self, name: str, suggestion: str | None = None):
        self.name = name
        self.suggestion = suggestion
        message = f"Unknown function '{name}'"
        if suggestion is not None:
            message += f" (did you mean '{suggestion}'?)"
        super().__init__(message)


class ArityError(SpreadsheetError):
    def __init__(self, name: str, expected: int, actual: int, at_least: bool = False):
        self.name = name
        self.expected = expected
        self.actual = actual
        self.at_least = at_least
        qualifier = "at least " if at_least else ""
        super().__init__(
            f"Wrong number of arguments for '{name}': "
            f"expected {qualifier}{expected}, got {actual}"
        )
