"""Data models for review sessions and imported word grids."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable


class WordState(Enum):
    """Review state for a word in a session."""
    UNKNOWN = "unknown"
    KNOWN = "known"
    EXCLUDED = "excluded"


class FilterFileMode(Enum):
    """How an imported word source is laid out."""
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"


@dataclass(eq=False)
class WordEntry:
    """A distinct word in a session, identified by its sequence number."""
    sequence_no: int
    text: str
    state: WordState = WordState.UNKNOWN
    uses: tuple[str, ...] = ()

    def __hash__(self):
        return hash(self.sequence_no)

    def __eq__(self, other):
        if isinstance(other, WordEntry):
            return self.sequence_no == other.sequence_no
        return False

    @property
    def is_unknown(self) -> bool:
        return self.state == WordState.UNKNOWN


@dataclass(frozen=True)
class GridCell:
    """A single cell of an imported grid."""
    content: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    def __str__(self):
        return self.content


EMPTY_CELL = GridCell()


@dataclass(frozen=True)
class GridLine:
    """One row of an imported grid. May be shorter than the grid is wide."""
    cells: tuple[GridCell, ...] = ()

    @classmethod
    def of(cls, *values: str) -> "GridLine":
        """Create a line from plain strings."""
        return cls(tuple(GridCell(v) for v in values))

    def __len__(self):
        return len(self.cells)


@dataclass(frozen=True)
class TextGrid:
    """Immutable tabular form of a document or spreadsheet."""
    lines: tuple[GridLine, ...] = ()
    column_count: int = 0

    def __post_init__(self):
        longest = max((len(line) for line in self.lines), default=0)
        if self.column_count < longest:
            raise ValueError(
                f"column_count {self.column_count} is less than longest line ({longest})"
            )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> "TextGrid":
        """Create a grid from rows of strings, sizing it to the longest row."""
        lines = tuple(GridLine.of(*row) for row in rows)
        column_count = max((len(line) for line in lines), default=0)
        return cls(lines=lines, column_count=column_count)

    def __len__(self):
        return len(self.lines)


@dataclass
class GridFilterModel:
    """The complete state of a grid filter: the source and its column flags."""
    file: Path
    grid: TextGrid
    mode: FilterFileMode
    column_selections: list[bool] = field(default_factory=list)

    def __post_init__(self):
        if len(self.column_selections) != self.grid.column_count:
            raise ValueError(
                f"Expected {self.grid.column_count} column selections, "
                f"got {len(self.column_selections)}"
            )


@dataclass(frozen=True)
class FilterFileSelection:
    """The last accepted filter choice for a word list file."""
    file: Path
    mode: FilterFileMode
    columns: frozenset[int] = frozenset()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file": str(self.file),
            "mode": self.mode.value,
            "columns": sorted(self.columns),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FilterFileSelection":
        """Create from dictionary."""
        return cls(
            file=Path(data["file"]),
            mode=FilterFileMode(data.get("mode", FilterFileMode.DOCUMENT.value)),
            columns=frozenset(int(c) for c in data.get("columns", [])),
        )
