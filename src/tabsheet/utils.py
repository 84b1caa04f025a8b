import re

# Constants
LETTERS = ord("Z") - ord("A") + 1
CELL_REF_REGEX = re.compile(r"([A-Z]+)([0-9]+)")


def is_cell_reference(ref: str) -> bool:
    return CELL_REF_REGEX.fullmatch(ref) is not None


def column_as_int(col: int | str) -> int:
    """Convert a column label to its 1-based index ("A" -> 1, "AA" -> 27).

    Unlike openpyxl's `column_index_from_string`, labels of any length are
    accepted.
    """
    if isinstance(col, int):
        return col
    index = 0
    for letter in col:
        index = index * LETTERS + (ord(letter) - ord("A") + 1)
    return index


def column_as_str(col: int | str) -> str:
    """Convert a 1-based column index to its label (27 -> "AA")."""
    if isinstance(col, str):
        return col
    if col < 1:
        raise ValueError(f"Invalid column index {col}")
    letters = []
    while col > 0:
        col, remainder = divmod(col - 1, LETTERS)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


def coords_to_str_ref(row: int, col: int) -> str:
    """Format zero-based (row, column) coordinates as an address like "B12"."""
    return f"{column_as_str(col + 1)}{row + 1}"
