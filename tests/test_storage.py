"""Tests for settings, word list reading and export, using temp files."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest
from openpyxl import Workbook

from vocabreview.core.exceptions import GridParseError
from vocabreview.core.models import FilterFileMode, FilterFileSelection, GridLine, WordEntry
from vocabreview.storage.exporter import export_file_name, export_words
from vocabreview.storage.grid_reader import TextGridReader, mode_for_file
from vocabreview.storage.settings import (
    DEFAULT_MINIMUM_LETTERS,
    DEFAULT_MINIMUM_OCCURRENCES,
    SettingsManager,
)


UPDATE_INT_VALUE = 12345


class TestSettingsManager:
    """Test settings persistence and defaults."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.settings_file = self.temp_dir / "settings.json"
        self.dummy_path = self.temp_dir / "dummy"
        self.settings = SettingsManager(self.settings_file)
        self.home = Path.home()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_paths(self):
        assert self.settings.get_documents_path() == self.home
        assert self.settings.get_sessions_path() == self.home
        assert self.settings.get_export_path() == self.home

    def test_update_documents_path(self):
        self.dummy_path.mkdir()
        self.settings.set_documents_path(self.dummy_path)
        assert self.settings.get_documents_path() == self.dummy_path

    def test_update_sessions_path(self):
        self.dummy_path.mkdir()
        self.settings.set_sessions_path(self.dummy_path)
        assert self.settings.get_sessions_path() == self.dummy_path

    def test_update_export_path(self):
        self.dummy_path.mkdir()
        self.settings.set_export_path(self.dummy_path)
        assert self.settings.get_export_path() == self.dummy_path

    def test_missing_path_falls_back_to_home(self):
        self.settings.set_documents_path(self.dummy_path)
        assert self.settings.get_documents_path() == self.home

    def test_deleted_path_falls_back_to_home(self):
        self.dummy_path.mkdir()
        self.settings.set_path("custom", self.dummy_path)
        assert self.settings.get_path("custom") == self.dummy_path

        self.dummy_path.rmdir()
        assert self.settings.get_path("custom") == self.home

    def test_default_ints(self):
        assert self.settings.get_filter_minimum_letters() == DEFAULT_MINIMUM_LETTERS
        assert self.settings.get_filter_minimum_occurrences() == DEFAULT_MINIMUM_OCCURRENCES

    def test_update_ints(self):
        self.settings.set_filter_minimum_letters(UPDATE_INT_VALUE)
        self.settings.set_filter_minimum_occurrences(UPDATE_INT_VALUE)
        assert self.settings.get_filter_minimum_letters() == UPDATE_INT_VALUE
        assert self.settings.get_filter_minimum_occurrences() == UPDATE_INT_VALUE

    def test_values_persist(self):
        self.dummy_path.mkdir()
        self.settings.set_export_path(self.dummy_path)
        self.settings.set_int("count", 7)

        reloaded = SettingsManager(self.settings_file)
        assert reloaded.get_export_path() == self.dummy_path
        assert reloaded.get_int("count", 0) == 7

    def test_unparsable_int_uses_default(self):
        self.settings_file.write_text(json.dumps({"count": "seven", "flag": True}))
        settings = SettingsManager(self.settings_file)
        assert settings.get_int("count", 3) == 3
        assert settings.get_int("flag", 4) == 4

    def test_infinite_int_uses_default(self):
        self.settings_file.write_text('{"filter_minimum_letters": Infinity, "big": 1e400}')
        settings = SettingsManager(self.settings_file)
        assert settings.get_filter_minimum_letters() == DEFAULT_MINIMUM_LETTERS
        assert settings.get_int("big", 9) == 9

    def test_corrupt_file_uses_defaults(self):
        self.settings_file.write_text("{not json")
        settings = SettingsManager(self.settings_file)
        assert settings.get_documents_path() == self.home
        assert settings.get_filter_minimum_letters() == DEFAULT_MINIMUM_LETTERS

    def test_write_failure_is_not_raised(self):
        blocker = self.temp_dir / "blocker"
        blocker.write_text("a file, not a directory")
        settings = SettingsManager(blocker / "settings.json")
        settings.set_int("count", 5)
        assert settings.get_int("count", 0) == 5

    def test_filter_file(self):
        assert self.settings.get_filter_file() is None
        selection = FilterFileSelection(Path("/data/words.csv"), FilterFileMode.SPREADSHEET, frozenset({1}))
        self.settings.set_filter_file(selection)
        assert SettingsManager(self.settings_file).get_filter_file() == selection


class TestTextGridReader:
    """Test reading documents and spreadsheets."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.reader = TextGridReader()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_mode_for_file(self):
        assert mode_for_file("words.xlsx") == FilterFileMode.SPREADSHEET
        assert mode_for_file("words.CSV") == FilterFileMode.SPREADSHEET
        assert mode_for_file("words.tsv") == FilterFileMode.SPREADSHEET
        assert mode_for_file("words.txt") == FilterFileMode.DOCUMENT
        assert mode_for_file("words") == FilterFileMode.DOCUMENT

    def test_read_document(self):
        path = self.temp_dir / "words.txt"
        path.write_text("able\tcapable\n\nbaker\n  cat  \n", encoding="utf-8")

        grid = self.reader.read_document(path)

        assert grid.column_count == 2
        assert grid.lines == (
            GridLine.of("able", "capable"),
            GridLine.of("baker"),
            GridLine.of("cat"),
        )

    def test_read_missing_document(self):
        path = self.temp_dir / "missing.txt"
        with pytest.raises(GridParseError) as info:
            self.reader.read_document(path)
        assert info.value.path == path

    def test_read_binary_document(self):
        path = self.temp_dir / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa\x00\x81")
        with pytest.raises(GridParseError):
            self.reader.read_document(path)

    def test_read_csv(self):
        path = self.temp_dir / "words.csv"
        path.write_text('able,"a, b",\nbaker\n,,\n', encoding="utf-8")

        grid = self.reader.read_spreadsheet(path)

        assert grid.column_count == 2
        assert grid.lines == (GridLine.of("able", "a, b"), GridLine.of("baker"))

    def test_read_tsv(self):
        path = self.temp_dir / "words.tsv"
        path.write_text("able\tone\ncat\n", encoding="utf-8")
        grid = self.reader.read(path, FilterFileMode.SPREADSHEET)
        assert grid.lines[0] == GridLine.of("able", "one")

    def test_read_xlsx(self):
        path = self.temp_dir / "words.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.append(["able", "capable", 1])
        ws.append(["baker", None, None])
        ws.append([None, None, None])
        ws.append(["cat", None, "x"])
        wb.save(path)

        grid = self.reader.read_spreadsheet(path)

        assert grid.column_count == 3
        assert grid.lines == (
            GridLine.of("able", "capable", "1"),
            GridLine.of("baker"),
            GridLine.of("cat", "", "x"),
        )

    def test_read_malformed_xlsx(self):
        path = self.temp_dir / "broken.xlsx"
        path.write_text("not a workbook")
        with pytest.raises(GridParseError):
            self.reader.read_spreadsheet(path)

    def test_read_missing_xlsx(self):
        with pytest.raises(GridParseError):
            self.reader.read_spreadsheet(self.temp_dir / "missing.xlsx")


class TestExporter:
    """Test exporting session words."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_export_file_name(self):
        assert export_file_name("lesson.xlsx") == "lesson-words.txt"
        assert export_file_name("") == "session-words.txt"

    def test_export_words_in_sequence_order(self):
        words = [WordEntry(sequence_no=2, text="cat"), WordEntry(sequence_no=0, text="able")]
        path = self.temp_dir / "out" / "words.txt"

        count = export_words(words, path)

        assert count == 2
        assert path.read_text(encoding="utf-8") == "able\ncat\n"
