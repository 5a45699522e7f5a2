"""Screen compositions for different app views."""

import urwid

from vocabreview.core.events import FilterEvent, SessionEvent
from vocabreview.core.grid_filter import GridFilterEngine
from vocabreview.core.models import WordEntry, WordState
from vocabreview.core.session import SessionState
from vocabreview.ui.widgets import ColumnSelector, GridTable, WordListBrowser


NAVIGATION_KEYS = ("up", "down", "page up", "page down", "home", "end")


class SessionScreen(urwid.WidgetWrap):
    """Screen for reviewing the words of a session."""

    def __init__(self, app):
        self.app = app
        self.session: SessionState | None = None

        self.word_browser = WordListBrowser(on_select=self._on_word_select, on_toggle=self._on_word_toggle)

        self.use_walker = urwid.SimpleFocusListWalker([])
        self.use_listbox = urwid.ListBox(self.use_walker)

        self.words_box = urwid.LineBox(self.word_browser, title="Words")
        self.uses_box = urwid.LineBox(self.use_listbox, title="Uses")

        self.placeholder = urwid.Filler(
            urwid.Text("No session open. Use the Filter tab to import a word list.", align="center")
        )
        self.columns = urwid.Columns([
            ("weight", 1, self.words_box),
            ("weight", 2, self.uses_box),
        ])
        self.body = urwid.WidgetPlaceholder(self.placeholder)

        super().__init__(self.body)

    def set_session(self, session: SessionState | None):
        """Show a new session, detaching from the previous one."""
        if self.session is not None:
            self.session.remove_listener(self._on_session_event)

        self.session = session
        if session is None:
            self.body.original_widget = self.placeholder
            return

        session.add_listener(self._on_session_event)
        self.body.original_widget = self.columns
        self._show_word_list()
        self._show_uses()

    def _is_selected(self, word: WordEntry) -> bool:
        return self.session.contains_selected(word)

    def _show_word_list(self):
        self.word_browser.set_words(self.session.word_list, self._is_selected)
        mode = "all words" if self.session.editable else "selected words"
        self.words_box.set_title(f"{self.session.document_name} - {mode}")

    def _show_uses(self):
        word = self.session.current_word
        self.use_walker.clear()
        self.use_walker.extend(
            urwid.AttrMap(urwid.Text(use), "use") for use in self.session.use_list
        )
        title = f"{word.text} {self.session.use_count}" if word else "Uses"
        self.uses_box.set_title(title)

    def _on_session_event(self, event, session):
        if event == SessionEvent.WORD_LIST:
            self._show_word_list()
        elif event in (SessionEvent.SELECTION, SessionEvent.WORD_STATE):
            self.word_browser.refresh(self._is_selected)
        elif event == SessionEvent.CURRENT_WORD:
            self._show_uses()
        self.app.update_status()

    def _on_word_select(self, word: WordEntry):
        self.session.focus(word)

    def _on_word_toggle(self, word: WordEntry):
        if self._is_selected(word):
            self.session.remove_deselected_word(word)
        else:
            self.session.add_selected_word(word)

    def _mark_focused(self, state: WordState):
        word = self.word_browser.get_focused_word()
        if word is not None:
            self.session.mark_word(word, state)

    def keypress(self, size, key):
        if self.session is None:
            return key

        if key == "e":
            self.session.set_editable(not self.session.editable)
            return None
        elif key == "k":
            self._mark_focused(WordState.KNOWN)
            return None
        elif key == "u":
            self._mark_focused(WordState.UNKNOWN)
            return None
        elif key == "x":
            self._mark_focused(WordState.EXCLUDED)
            return None

        result = super().keypress(size, key)
        if key in NAVIGATION_KEYS:
            word = self.word_browser.get_focused_word()
            if word is not None and word is not self.session.current_word:
                self.session.focus(word)
        return result


class FilterGridScreen(urwid.WidgetWrap):
    """Screen for choosing which columns of an imported word list to use."""

    def __init__(self, app):
        self.app = app
        self.engine: GridFilterEngine | None = None
        self.column_selector: ColumnSelector | None = None
        self.grid_table: GridTable | None = None

        self.placeholder = urwid.Filler(
            urwid.Text("No word list loaded. Press [o] to open a file.", align="center")
        )
        self.body = urwid.WidgetPlaceholder(self.placeholder)
        super().__init__(self.body)

    def set_engine(self, engine: GridFilterEngine | None):
        """Show a grid filter, detaching widgets from the previous one."""
        self._unbind()
        self.engine = engine
        if engine is None:
            self.body.original_widget = self.placeholder
            return

        self.column_selector = ColumnSelector(engine)
        self.grid_table = GridTable(engine)
        engine.add_listener(self._on_filter_event)
        self.body.original_widget = urwid.Columns([
            (16, self.column_selector),
            ("weight", 1, self.grid_table),
        ])

    def _unbind(self):
        if self.engine is not None:
            self.engine.remove_listener(self._on_filter_event)
        if self.column_selector is not None:
            self.column_selector.unbind()

    def replace_content(self, file, grid, mode):
        """Load a different file into the current filter."""
        self.column_selector.unbind()
        self.engine.replace_content(file, grid, mode)
        self.column_selector.bind()

    def _on_filter_event(self, event, engine, *args):
        if event in (FilterEvent.COLUMN_CHANGED, FilterEvent.CONTENT_REPLACED):
            self.grid_table.refresh()
        self.app.update_status()

    def keypress(self, size, key):
        if key == "o":
            self.app.show_open_dialog()
            return None
        elif key == "s" and self.engine is not None:
            self.app.apply_filter(self.engine)
            return None
        return super().keypress(size, key)
