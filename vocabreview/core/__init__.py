"""Core business logic - UI independent."""
from .models import (
    EMPTY_CELL,
    FilterFileMode,
    FilterFileSelection,
    GridCell,
    GridLine,
    TextGrid,
    WordEntry,
    WordState,
)
from .exceptions import GridParseError, IndexOutOfRangeError, InvalidSessionError
from .columns import column_name
from .grid_filter import GridFilterEngine
from .session import SessionState, session_from_grid

__all__ = [
    "EMPTY_CELL",
    "FilterFileMode",
    "FilterFileSelection",
    "GridCell",
    "GridLine",
    "TextGrid",
    "WordEntry",
    "WordState",
    "GridParseError",
    "IndexOutOfRangeError",
    "InvalidSessionError",
    "column_name",
    "GridFilterEngine",
    "SessionState",
    "session_from_grid",
]
