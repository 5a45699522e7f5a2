"""Synchronous change notification for the state engines."""

from enum import Enum
from typing import Any, Callable


class SessionEvent(Enum):
    """Changes announced by a SessionState."""
    SELECTION = "selection"
    WORD_LIST = "word_list"
    CURRENT_WORD = "current_word"
    WORD_STATE = "word_state"
    CHANGES_SAVED = "changes_saved"


class FilterEvent(Enum):
    """Changes announced by a GridFilterEngine."""
    COLUMN_CHANGED = "column_changed"
    CONTENT_REPLACED = "content_replaced"


Listener = Callable[..., Any]


class Observable:
    """
    Keeps an ordered list of listeners and calls them in turn.

    Listeners are called as ``listener(event, source, *args)`` once the
    mutation that caused the event is complete.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        """Register a listener. Registering the same one twice is a no-op."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener if present."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: Enum, *args) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event, self, *args)
