"""Column-selective projection of an imported grid into a word list."""

from pathlib import Path
from typing import Iterable, Optional

from vocabreview.core.columns import column_flags, default_columns as mode_defaults
from vocabreview.core.events import FilterEvent, Observable
from vocabreview.core.exceptions import IndexOutOfRangeError
from vocabreview.core.models import (
    EMPTY_CELL,
    FilterFileMode,
    FilterFileSelection,
    GridCell,
    GridFilterModel,
    GridLine,
    TextGrid,
)


class GridFilterEngine(Observable):
    """
    Holds an imported grid and the set of columns the user wants to keep.

    The raw grid is kept rather than a projected word list so the same
    import can be re-read under a different column subset.

    Listeners receive ``(FilterEvent.COLUMN_CHANGED, engine, index)`` when a
    single flag flips and ``(FilterEvent.CONTENT_REPLACED, engine)`` after
    replace_content(). Anything bound to individual column flags must be
    detached before replace_content() is called, as the column count may
    change.
    """

    def __init__(
        self,
        file: str | Path,
        grid: TextGrid,
        mode: FilterFileMode,
        columns: Optional[Iterable[int]] = None,
    ):
        super().__init__()
        self._model = self._build_model(file, grid, mode, columns)

    @classmethod
    def load(cls, file: str | Path, mode: FilterFileMode, grid: TextGrid) -> "GridFilterEngine":
        """Create an engine with the default columns for the mode."""
        return cls(file, grid, mode)

    @classmethod
    def from_selection(cls, selection: FilterFileSelection, reader) -> "GridFilterEngine":
        """
        Open the file of a previous filter choice with its saved columns.

        Args:
            selection: The saved filter choice
            reader: Anything with a ``read(path, mode) -> TextGrid`` method

        Raises:
            GridParseError: If the file cannot be read
        """
        grid = reader.read(selection.file, selection.mode)
        columns = selection.columns or None
        return cls(selection.file, grid, selection.mode, columns)

    @staticmethod
    def _build_model(file, grid, mode, columns) -> GridFilterModel:
        if columns is None:
            columns = mode_defaults(mode, grid.column_count)
        return GridFilterModel(
            file=Path(file),
            grid=grid,
            mode=mode,
            column_selections=column_flags(columns, grid.column_count),
        )

    # Content

    def replace_content(
        self,
        file: str | Path,
        grid: TextGrid,
        mode: FilterFileMode,
        default_columns: Optional[Iterable[int]] = None,
    ) -> None:
        """Swap the file, grid, mode and column flags in one step."""
        self._model = self._build_model(file, grid, mode, default_columns)
        self._notify(FilterEvent.CONTENT_REPLACED)

    def to_selection(self) -> FilterFileSelection:
        """Get the current choice in the form stored by the caller."""
        return FilterFileSelection(
            file=self.file,
            mode=self.mode,
            columns=self.columns(),
        )

    @property
    def file(self) -> Path:
        return self._model.file

    @property
    def mode(self) -> FilterFileMode:
        return self._model.mode

    @property
    def grid(self) -> TextGrid:
        return self._model.grid

    @property
    def lines(self) -> tuple[GridLine, ...]:
        return self._model.grid.lines

    @property
    def column_count(self) -> int:
        return self._model.grid.column_count

    # Column selection

    def _check_column(self, index: int) -> None:
        if not 0 <= index < self.column_count:
            raise IndexOutOfRangeError(index, self.column_count)

    def set_column_included(self, index: int, included: bool) -> None:
        """Include or exclude a column."""
        self._check_column(index)
        if self._model.column_selections[index] != included:
            self._model.column_selections[index] = included
            self._notify(FilterEvent.COLUMN_CHANGED, index)

    def is_column_included(self, index: int) -> bool:
        self._check_column(index)
        return self._model.column_selections[index]

    @property
    def column_selections(self) -> tuple[bool, ...]:
        return tuple(self._model.column_selections)

    def columns(self) -> frozenset[int]:
        """Get the indices of all included columns."""
        return frozenset(
            i for i, included in enumerate(self._model.column_selections) if included
        )

    # Projection

    @staticmethod
    def cell(line: GridLine, index: int) -> GridCell:
        """Get a cell of a line, or EMPTY_CELL past the end of a short row."""
        if 0 <= index < len(line.cells):
            return line.cells[index]
        return EMPTY_CELL

    def project_row(self, line: GridLine) -> tuple[GridCell, ...]:
        """Get the cells of a line in the included columns, in column order."""
        return tuple(
            self.cell(line, i)
            for i, included in enumerate(self._model.column_selections)
            if included
        )

    def filtered_values(self) -> list[str]:
        """Get one text value per row, skipping rows with nothing selected."""
        values = []
        for line in self.lines:
            parts = [c.content.strip() for c in self.project_row(line) if not c.is_empty]
            if parts:
                values.append(" ".join(parts))
        return values
