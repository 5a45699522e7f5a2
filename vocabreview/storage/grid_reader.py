"""Read documents and spreadsheets into text grids."""

import csv
import logging
import zipfile
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from vocabreview.core.exceptions import GridParseError
from vocabreview.core.models import FilterFileMode, TextGrid


logger = logging.getLogger(__name__)

SPREADSHEET_SUFFIXES = {".csv", ".tsv", ".xlsx", ".xlsm"}


def mode_for_file(path: str | Path) -> FilterFileMode:
    """Guess how a word list file is laid out from its extension."""
    if Path(path).suffix.lower() in SPREADSHEET_SUFFIXES:
        return FilterFileMode.SPREADSHEET
    return FilterFileMode.DOCUMENT


def _trim(row: list[str]) -> list[str]:
    """Drop trailing empty cells so short rows stay short."""
    end = len(row)
    while end > 0 and not row[end - 1].strip():
        end -= 1
    return row[:end]


def _cell_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


class TextGridReader:
    """Reads word list files into TextGrid values."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, path: str | Path, mode: FilterFileMode) -> TextGrid:
        """Read a file using the parser for the given mode."""
        if mode == FilterFileMode.DOCUMENT:
            return self.read_document(path)
        return self.read_spreadsheet(path)

    def read_document(self, path: str | Path) -> TextGrid:
        """
        Read a plain text document.

        Each non-blank line becomes a row; tabs split a line into cells.

        Raises:
            GridParseError: If the file cannot be read as text
        """
        path = Path(path)
        try:
            with open(path, "r", encoding=self.encoding) as f:
                rows = [
                    _trim([cell.strip() for cell in line.rstrip("\r\n").split("\t")])
                    for line in f
                    if line.strip()
                ]
        except (OSError, UnicodeDecodeError) as e:
            raise GridParseError(path, str(e)) from e

        logger.debug("Read %d lines from document %s", len(rows), path)
        return TextGrid.from_rows(rows)

    def read_spreadsheet(self, path: str | Path) -> TextGrid:
        """
        Read a CSV, TSV or Excel workbook.

        Only the first worksheet of a workbook is read.

        Raises:
            GridParseError: If the file is missing or malformed
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix in (".csv", ".tsv"):
            rows = self._read_delimited(path, "\t" if suffix == ".tsv" else ",")
        else:
            rows = self._read_workbook(path)

        rows = [row for row in (_trim(r) for r in rows) if row]
        logger.debug("Read %d rows from spreadsheet %s", len(rows), path)
        return TextGrid.from_rows(rows)

    def _read_delimited(self, path: Path, delimiter: str) -> list[list[str]]:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return [
                    [_cell_text(cell) for cell in row]
                    for row in csv.reader(f, delimiter=delimiter)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise GridParseError(path, str(e)) from e

    def _read_workbook(self, path: Path) -> list[list[str]]:
        try:
            wb = load_workbook(path, read_only=True, data_only=True)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise GridParseError(path, str(e)) from e

        try:
            ws = wb.worksheets[0] if wb.worksheets else None
            if ws is None:
                return []
            return [
                [_cell_text(value) for value in row]
                for row in ws.iter_rows(values_only=True)
            ]
        finally:
            wb.close()
