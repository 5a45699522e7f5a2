"""Tests for the column selector binding and app configuration."""

import shutil
import tempfile
from pathlib import Path

from vocabreview.core.grid_filter import GridFilterEngine
from vocabreview.core.models import FilterFileMode, TextGrid
from vocabreview.ui.app import DEFAULT_CONFIG, configure_logging, load_config
from vocabreview.ui.widgets import ColumnSelector


class TestColumnSelector:
    """Test check boxes staying in step with the engine across content swaps."""

    def setup_method(self):
        grid = TextGrid.from_rows([["able", "capable", "1"], ["baker"]])
        self.engine = GridFilterEngine.load("words.csv", FilterFileMode.SPREADSHEET, grid)
        self.selector = ColumnSelector(self.engine)

    def test_box_change_reaches_engine(self):
        self.selector.boxes[1].set_state(False)
        assert self.engine.column_selections == (True, False, True)

    def test_engine_change_reaches_box(self):
        self.engine.set_column_included(2, False)
        assert self.selector.boxes[2].get_state() is False

    def test_rebind_after_replace_content(self):
        old_boxes = self.selector.boxes

        self.selector.unbind()
        self.engine.replace_content(
            "other.txt", TextGrid.from_rows([["cat"]]), FilterFileMode.DOCUMENT
        )
        self.selector.bind()

        assert len(self.selector.boxes) == 1
        self.selector.boxes[0].set_state(False)
        assert self.engine.column_selections == (False,)

        # Boxes for the old columns no longer drive the engine
        old_boxes[2].set_state(False)
        old_boxes[0].set_state(True)
        assert self.engine.column_selections == (False,)


class TestConfig:
    """Test config loading and logging setup."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_sections_use_defaults(self):
        path = self.temp_dir / "config.yaml"
        path.write_text("logging:\n  level: DEBUG\n")

        config = load_config(str(path))

        assert config["logging"]["level"] == "DEBUG"
        assert config["logging"]["file"] is None
        assert config["settings"] == DEFAULT_CONFIG["settings"]

    def test_non_mapping_config_uses_defaults(self):
        path = self.temp_dir / "config.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config(str(path)) == DEFAULT_CONFIG

        path.write_text("settings: plain text\n")
        assert load_config(str(path))["settings"] == DEFAULT_CONFIG["settings"]

    def test_log_directory_is_created(self):
        log_file = self.temp_dir / "missing" / "logs" / "app.log"
        configure_logging({"logging": {"file": str(log_file), "level": "INFO"}})
        assert log_file.parent.is_dir()

    def test_unusable_log_path_does_not_raise(self):
        blocker = self.temp_dir / "blocker"
        blocker.write_text("a file, not a directory")
        configure_logging({"logging": {"file": str(blocker / "app.log")}})
