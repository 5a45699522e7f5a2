"""Custom urwid widgets for the review app."""

import urwid

from vocabreview.core.columns import column_name
from vocabreview.core.events import FilterEvent
from vocabreview.core.grid_filter import GridFilterEngine
from vocabreview.core.models import GridLine, WordEntry
from vocabreview.ui.theme import get_column_attr, get_cursor_attr, get_state_attr


class WordRow(urwid.WidgetWrap):
    """A selectable row for one word of a session."""

    def __init__(self, word: WordEntry, selected: bool, on_select=None, on_toggle=None):
        self.word = word
        self.selected = selected
        self.on_select = on_select
        self.on_toggle = on_toggle
        super().__init__(self._build())

    def _build(self):
        mark = "[x]" if self.selected else "[ ]"
        text = f"{mark} {self.word.text}  ({len(self.word.uses)})"
        attr = "selected" if self.selected else get_state_attr(self.word.state)
        return urwid.AttrMap(
            urwid.Text(text),
            attr,
            focus_map=get_cursor_attr(self.word.state, self.selected),
        )

    def refresh(self, selected: bool):
        """Redraw after the word's state or selection changed."""
        self.selected = selected
        self._w = self._build()

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key == "enter" and self.on_select:
            self.on_select(self.word)
            return None
        if key == " " and self.on_toggle:
            self.on_toggle(self.word)
            return None
        return key

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1 and self.on_select:
            self.on_select(self.word)
            return True
        return False


class WordListBrowser(urwid.WidgetWrap):
    """A scrollable list of session words."""

    def __init__(self, on_select=None, on_toggle=None):
        self.on_select = on_select
        self.on_toggle = on_toggle
        self.rows: list[WordRow] = []
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(self.listbox)

    def set_words(self, words, is_selected):
        """Show words; is_selected(word) decides the check mark."""
        self.rows = [
            WordRow(w, is_selected(w), on_select=self.on_select, on_toggle=self.on_toggle)
            for w in words
        ]
        self.walker.clear()
        self.walker.extend(self.rows)

    def refresh(self, is_selected):
        """Redraw every row in place, keeping focus."""
        for row in self.rows:
            row.refresh(is_selected(row.word))

    def get_focused_word(self) -> WordEntry | None:
        if self.walker and self.walker.focus is not None:
            return self.walker[self.walker.focus].word
        return None


class ColumnSelector(urwid.WidgetWrap):
    """
    One check box per grid column, kept in step with a GridFilterEngine.

    Box changes call engine.set_column_included(); engine column events
    update the boxes. Call unbind() before replacing the engine's content
    and bind() afterwards.
    """

    def __init__(self, engine: GridFilterEngine):
        self.engine = engine
        self.boxes: list[urwid.CheckBox] = []
        self.pile = urwid.Pile([urwid.Text("")])
        super().__init__(urwid.LineBox(urwid.Filler(self.pile, valign="top"), title="Columns"))
        self.bind()

    def bind(self):
        """Build boxes for the engine's current columns and connect them."""
        self.boxes = []
        for index in range(self.engine.column_count):
            box = urwid.CheckBox(column_name(index), state=self.engine.is_column_included(index))
            urwid.connect_signal(box, "change", self._on_box_change, user_args=[index])
            self.boxes.append(box)

        widgets = [
            urwid.AttrMap(box, "checkbox", focus_map="checkbox_focus") for box in self.boxes
        ] or [urwid.Text("(no columns)")]
        self.pile.contents[:] = [(w, self.pile.options("pack")) for w in widgets]
        self.engine.add_listener(self._on_engine_event)

    def unbind(self):
        """Disconnect every box from the engine."""
        self.engine.remove_listener(self._on_engine_event)
        for index, box in enumerate(self.boxes):
            urwid.disconnect_signal(box, "change", self._on_box_change, user_args=[index])
        self.boxes = []

    def _on_box_change(self, index, box, new_state):
        self.engine.set_column_included(index, new_state)

    def _on_engine_event(self, event, engine, *args):
        if event == FilterEvent.COLUMN_CHANGED:
            index = args[0]
            if index < len(self.boxes):
                self.boxes[index].set_state(engine.is_column_included(index), do_callback=False)


class GridTable(urwid.WidgetWrap):
    """Shows an imported grid with excluded columns dimmed."""

    CELL_WIDTH = 18

    def __init__(self, engine: GridFilterEngine):
        self.engine = engine
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(urwid.LineBox(self.listbox, title="Words"))
        self.refresh()

    def _row(self, cells: list[tuple[str, str]]) -> urwid.Widget:
        return urwid.Columns(
            [(self.CELL_WIDTH, urwid.Text((attr, text), wrap="clip")) for attr, text in cells],
            dividechars=1,
        )

    def _line_row(self, line: GridLine) -> urwid.Widget:
        cells = [
            (get_column_attr(included), self.engine.cell(line, i).content)
            for i, included in enumerate(self.engine.column_selections)
        ]
        return urwid.AttrMap(SelectableRow(self._row(cells)), None, focus_map="checkbox_focus")

    def refresh(self):
        """Rebuild from the engine, e.g. after a column or content change."""
        header = [
            ("content_title", column_name(i)) for i in range(self.engine.column_count)
        ]
        self.walker.clear()
        self.walker.append(self._row(header))
        self.walker.extend(self._line_row(line) for line in self.engine.lines)


class SelectableRow(urwid.WidgetWrap):
    """Wraps a widget so a ListBox can scroll through it."""

    def selectable(self):
        return True

    def keypress(self, size, key):
        return key


class TabBar(urwid.WidgetWrap):
    """A horizontal tab bar."""

    def __init__(self, tabs: list[str], on_tab_change=None):
        self.tabs = tabs
        self.active_tab = 0
        self.on_tab_change = on_tab_change

        super().__init__(urwid.Text(""))
        self._build()

    def _build(self):
        """Build the tab bar widget."""
        columns = []
        for i, tab in enumerate(self.tabs):
            attr = "tab_active" if i == self.active_tab else "tab_inactive"
            columns.append(("pack", urwid.AttrMap(urwid.Text(f" {tab} "), attr)))
            columns.append(("pack", urwid.Text(" ")))

        self._w = urwid.AttrMap(urwid.Columns(columns), "header")

    def set_active(self, index: int):
        """Set the active tab."""
        if 0 <= index < len(self.tabs):
            self.active_tab = index
            self._build()
            if self.on_tab_change:
                self.on_tab_change(index)

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1:
            x = 0
            for i, tab in enumerate(self.tabs):
                tab_width = len(tab) + 2 + 1  # text + padding + spacer
                if x <= col < x + tab_width:
                    self.set_active(i)
                    return True
                x += tab_width
        return False


class StatusBar(urwid.WidgetWrap):
    """A status bar showing hints and messages."""

    def __init__(self, text: str = ""):
        self.text_widget = urwid.Text(text)
        super().__init__(urwid.AttrMap(self.text_widget, "footer"))

    def set_text(self, text: str):
        """Set the status text."""
        self.text_widget.set_text(text)

    def get_text(self) -> str:
        return self.text_widget.text


class PathPrompt(urwid.WidgetWrap):
    """A one-line prompt for a file path."""

    def __init__(self, title: str, initial: str = "", on_done=None, on_cancel=None):
        self.on_done = on_done
        self.on_cancel = on_cancel
        self.edit = urwid.Edit("Path: ", initial)

        pile = urwid.Pile([
            urwid.AttrMap(urwid.Text(title, align="center"), "dialog_title"),
            urwid.Divider(),
            urwid.AttrMap(self.edit, "checkbox_focus"),
            urwid.Divider(),
            urwid.Text("Enter to open, Esc to cancel", align="center"),
        ])
        super().__init__(urwid.AttrMap(urwid.LineBox(pile), "dialog"))

    def keypress(self, size, key):
        if key == "enter" and self.on_done:
            self.on_done(self.edit.edit_text.strip())
            return None
        if key == "esc" and self.on_cancel:
            self.on_cancel()
            return None
        return super().keypress(size, key)
