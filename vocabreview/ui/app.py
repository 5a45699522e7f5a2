"""Main application entry point."""

import logging
import os
from pathlib import Path
from typing import Optional

import urwid
import yaml

from vocabreview.core.exceptions import GridParseError, InvalidSessionError
from vocabreview.core.grid_filter import GridFilterEngine
from vocabreview.core.session import SessionState, session_from_grid
from vocabreview.storage.exporter import export_file_name, export_words
from vocabreview.storage.grid_reader import TextGridReader, mode_for_file
from vocabreview.storage.settings import SettingsManager
from vocabreview.ui.screens import FilterGridScreen, SessionScreen
from vocabreview.ui.theme import PALETTE
from vocabreview.ui.widgets import PathPrompt, StatusBar, TabBar


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "settings": {
        "file": "~/.config/vocab-review/settings.json",
    },
    "logging": {
        "file": None,
        "level": "INFO",
    },
    "session": {
        "known_words": None,
    },
}


def load_config(config_path: Optional[str] = None) -> dict:
    """Load configuration from file, falling back to defaults."""
    paths_to_try = [
        config_path,
        "config.yaml",
        os.path.expanduser("~/.config/vocab-review/config.yaml"),
    ]

    for path in paths_to_try:
        if path and os.path.exists(path):
            with open(path, "r") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                logger.warning("Ignoring config %s: expected a mapping", path)
                loaded = {}
            return {
                section: {**defaults, **_section(loaded, section)}
                for section, defaults in DEFAULT_CONFIG.items()
            }

    return {section: dict(defaults) for section, defaults in DEFAULT_CONFIG.items()}


def _section(loaded: dict, name: str) -> dict:
    value = loaded.get(name)
    return value if isinstance(value, dict) else {}


def configure_logging(config: dict) -> None:
    """Log to the configured file; stay silent otherwise so the TUI is not disturbed."""
    log_config = config.get("logging", {})
    log_file = log_config.get("file")
    root = logging.getLogger()

    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            logging.basicConfig(
                filename=log_path,
                level=getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO),
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            )
            return
        except OSError as e:
            print(f"Warning: could not open log file {log_path}: {e}")

    root.addHandler(logging.NullHandler())


class App:
    """Main application class."""

    TAB_NAMES = ["Session", "Filter"]

    def __init__(self, config_path: Optional[str] = None, file: Optional[str] = None):
        self.config = load_config(config_path)
        configure_logging(self.config)

        settings_file = os.path.expanduser(self.config["settings"]["file"])
        self.settings = SettingsManager(settings_file)
        self.reader = TextGridReader()
        self.known_words = self._load_known_words()
        self.loop: urwid.MainLoop | None = None

        self._init_ui()

        if file:
            self.open_file(file)
        else:
            self._restore_filter()

    def _load_known_words(self) -> set[str]:
        """Read the optional known-words list named in the config."""
        path = self.config["session"].get("known_words")
        if not path:
            return set()

        try:
            grid = self.reader.read_document(os.path.expanduser(path))
        except GridParseError as e:
            logger.warning("Ignoring known words list: %s", e)
            return set()
        return {line.cells[0].content.lower() for line in grid.lines if line.cells}

    def _restore_filter(self):
        """Reopen the word list from the last accepted filter, if still readable."""
        selection = self.settings.get_filter_file()
        if selection is None:
            return

        try:
            engine = GridFilterEngine.from_selection(selection, self.reader)
        except GridParseError as e:
            logger.info("Not restoring previous filter: %s", e)
            return
        self.filter_screen.set_engine(engine)

    def _init_ui(self):
        """Initialize the UI components."""
        self.tab_bar = TabBar(self.TAB_NAMES, on_tab_change=self._on_tab_change)

        self.session_screen = SessionScreen(self)
        self.filter_screen = FilterGridScreen(self)
        self.screens = [self.session_screen, self.filter_screen]

        self.status_bar = StatusBar()
        self.body = urwid.WidgetPlaceholder(self.screens[0])

        self.frame = urwid.Frame(
            header=self.tab_bar,
            body=self.body,
            footer=self.status_bar,
        )
        self.update_status()

    def _on_tab_change(self, index: int):
        """Handle tab change."""
        self.body.original_widget = self.screens[index]
        self.update_status()

    def switch_tab(self, index: int):
        """Switch to a specific tab."""
        self.tab_bar.set_active(index)

    @property
    def session(self) -> SessionState | None:
        return self.session_screen.session

    # Actions

    def open_file(self, path: str | Path) -> bool:
        """
        Read a word list into the grid filter.

        On a read error the current filter is left as it was.
        """
        path = Path(path).expanduser()
        mode = mode_for_file(path)
        try:
            grid = self.reader.read(path, mode)
        except GridParseError as e:
            self.show_message(f"Error: {e}")
            return False

        if self.filter_screen.engine is None:
            self.filter_screen.set_engine(GridFilterEngine.load(path, mode, grid))
        else:
            self.filter_screen.replace_content(path, grid, mode)

        self.settings.set_documents_path(path.parent)
        self.switch_tab(1)
        self.show_message(f"Loaded {path.name}: {len(grid)} rows, {grid.column_count} columns")
        return True

    def apply_filter(self, engine: GridFilterEngine) -> bool:
        """Remember the filter choice and start a session from it."""
        self.settings.set_filter_file(engine.to_selection())
        try:
            session = session_from_grid(
                engine.file.name,
                engine,
                self.known_words,
                minimum_letters=self.settings.get_filter_minimum_letters(),
                minimum_occurrences=self.settings.get_filter_minimum_occurrences(),
            )
        except InvalidSessionError:
            self.show_message("Nothing to review - include more columns or choose another file")
            return False

        self.session_screen.set_session(session)
        self.switch_tab(0)
        return True

    def export_session(self) -> bool:
        """Write the selected words to the export directory."""
        session = self.session
        if session is None:
            self.show_message("No session to export")
            return False

        path = self.settings.get_export_path() / export_file_name(session.document_name)
        try:
            count = export_words(session.selected_words, path)
        except OSError as e:
            self.show_message(f"Export failed: {e}")
            return False

        session.set_changes_saved(True)
        self.show_message(f"Exported {count} words to {path}")
        return True

    # Status

    def update_status(self):
        """Update the status bar based on current state."""
        current = self.body.original_widget

        if current == self.session_screen:
            session = self.session
            if session is None:
                self.status_bar.set_text("[2] Filter to import a word list | [q]uit")
                return
            saved = "" if session.changes_saved else " | *unsaved*"
            self.status_bar.set_text(
                f"{session.document_name} | Selected: {len(session.selected_words)}"
                f"/{session.all_words_size()}{saved}"
                " | [Space]select [k]nown [u]nknown [x]exclude [e]dit mode [w]rite"
            )
        elif current == self.filter_screen:
            engine = self.filter_screen.engine
            if engine is None:
                self.status_bar.set_text("[o]pen word list | [q]uit")
                return
            self.status_bar.set_text(
                f"{engine.file.name} ({engine.mode.value}) | "
                f"Columns: {len(engine.columns())}/{engine.column_count} | "
                f"Words: {len(engine.filtered_values())} | [o]pen [s]tart session"
            )

    def show_message(self, message: str):
        """Show a temporary message in the status bar."""
        self.status_bar.set_text(message)

    def handle_input(self, key):
        """Handle global key input."""

        # Handle tuple keys (special keys) - ignore them
        if not isinstance(key, str):
            return

        if key in ("q", "Q"):
            raise urwid.ExitMainLoop()

        if key in ("1", "2"):
            self.switch_tab(int(key) - 1)
            return

        if key == "tab":
            self.switch_tab((self.tab_bar.active_tab + 1) % len(self.TAB_NAMES))
            return

        if key == "w":
            self.export_session()
            return

    def show_open_dialog(self):
        """Ask for the path of a word list to import."""
        def close():
            self.loop.widget = self.frame
            self.loop.unhandled_input = self.handle_input

        def do_open(path: str):
            close()
            if path:
                self.open_file(path)

        prompt = PathPrompt(
            "Open word list",
            initial=str(self.settings.get_documents_path()) + os.sep,
            on_done=do_open,
            on_cancel=close,
        )
        overlay = urwid.Overlay(
            urwid.Filler(prompt),
            self.frame,
            align="center",
            width=("relative", 70),
            valign="middle",
            height=9,
        )

        self.loop.widget = overlay
        self.loop.unhandled_input = lambda key: True

    def run(self):
        """Run the application."""
        self.loop = urwid.MainLoop(
            self.frame,
            palette=PALETTE,
            unhandled_input=self.handle_input,
            handle_mouse=True,
        )

        try:
            self.loop.run()
        except KeyboardInterrupt:
            pass


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Vocabulary review sessions from imported word lists")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Word list to open (text, CSV, TSV or XLSX)",
    )
    args = parser.parse_args()

    app = App(config_path=args.config, file=args.file)
    app.run()


if __name__ == "__main__":
    main()
