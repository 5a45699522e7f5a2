"""Spreadsheet-style column naming and default column policy."""

import string

from vocabreview.core.exceptions import IndexOutOfRangeError
from vocabreview.core.models import FilterFileMode


LETTERS = string.ascii_uppercase


def column_name(index: int) -> str:
    """
    Get the display name for a zero-based column index.

    Names follow spreadsheet convention: A..Z, then AA, AB, ... ZZ, AAA.
    """
    if index < 0:
        raise IndexOutOfRangeError(index, 0)

    name = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, len(LETTERS))
        name = LETTERS[remainder] + name
    return name


def default_columns(mode: FilterFileMode, column_count: int) -> frozenset[int]:
    """Get the columns included by default for a freshly loaded grid."""
    if column_count <= 0:
        return frozenset()
    if mode == FilterFileMode.SPREADSHEET:
        return frozenset(range(column_count))
    return frozenset({0})


def column_flags(columns, column_count: int) -> list[bool]:
    """Turn a set of column indices into one flag per column."""
    included = set(columns)
    return [i in included for i in range(column_count)]
