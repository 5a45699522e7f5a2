"""Review session state: selection tracking, word list view and focus."""

from typing import Iterable, Optional

from vocabreview.core.events import Observable, SessionEvent
from vocabreview.core.exceptions import IndexOutOfRangeError, InvalidSessionError
from vocabreview.core.models import WordEntry, WordState


def next_word(words: list[WordEntry]) -> Optional[WordEntry]:
    """Pick the word to focus first: the first unknown one, else the first one."""
    for word in words:
        if word.state == WordState.UNKNOWN:
            return word
    return words[0] if words else None


def format_use_count(uses) -> str:
    return f"({len(uses)} uses)"


class SessionState(Observable):
    """
    Tracks which words of a session are selected for review.

    Selected words always iterate in sequence order, whatever order they were
    selected in. The word list view is only rebuilt by set_editable();
    adding or removing a selection leaves it alone until the next toggle.

    Listeners receive ``(event, session)`` with a SessionEvent after each
    change has been applied in full.
    """

    def __init__(self, document_name: str, words: Iterable[WordEntry]):
        super().__init__()
        all_words = list(words)
        self._check_words(all_words)

        self._all_words: list[WordEntry] = all_words
        self._by_sequence: dict[int, WordEntry] = {w.sequence_no: w for w in all_words}
        self._selected: set[int] = {w.sequence_no for w in all_words if w.is_unknown}
        self._word_list: list[WordEntry] = []
        self._use_list: list[str] = []
        self._use_count: str = ""
        self._editable = True
        self._changes_saved = True
        self.document_name = document_name

        self._rebuild_word_list()
        self._current_word: Optional[WordEntry] = None
        self._set_focus(next_word(self._all_words))

    @staticmethod
    def _check_words(words: list[WordEntry]) -> None:
        if not words:
            raise InvalidSessionError("There are no words to review")

        previous = None
        for word in words:
            if previous is not None and word.sequence_no <= previous:
                raise InvalidSessionError(
                    f"Word '{word.text}' is out of sequence ({word.sequence_no} after {previous})"
                )
            previous = word.sequence_no

    def _check_member(self, word: WordEntry) -> None:
        if self._by_sequence.get(word.sequence_no) is not word:
            raise ValueError(f"'{word.text}' is not part of this session")

    @staticmethod
    def _check_index(index: int, size: int) -> None:
        if not 0 <= index < size:
            raise IndexOutOfRangeError(index, size)

    # Selection

    def add_selected_word(self, word: WordEntry) -> None:
        """Select a word. Does not rebuild the word list."""
        self._check_member(word)
        if word.sequence_no not in self._selected:
            self._selected.add(word.sequence_no)
            self._notify(SessionEvent.SELECTION)

    def remove_deselected_word(self, word: WordEntry) -> None:
        """Deselect a word. Does not rebuild the word list."""
        self._check_member(word)
        if word.sequence_no in self._selected:
            self._selected.remove(word.sequence_no)
            self._notify(SessionEvent.SELECTION)

    @property
    def selected_words(self) -> tuple[WordEntry, ...]:
        return tuple(self._by_sequence[n] for n in sorted(self._selected))

    def is_selected(self, index: int) -> bool:
        """Check whether the word at an index of all_words is selected."""
        return self.word(index).sequence_no in self._selected

    def contains_selected(self, word: WordEntry) -> bool:
        """Check whether a word is selected, without building a snapshot."""
        return word.sequence_no in self._selected and self._by_sequence.get(word.sequence_no) is word

    def mark_word(self, word: WordEntry, state: WordState) -> None:
        """
        Change the review state of a word.

        Unknown words are selected, everything else is deselected, and the
        session is flagged as having unsaved changes.
        """
        self._check_member(word)
        if word.state == state:
            return

        word.state = state
        was_selected = word.sequence_no in self._selected
        if state == WordState.UNKNOWN:
            self._selected.add(word.sequence_no)
        else:
            self._selected.discard(word.sequence_no)
        was_saved = self._changes_saved
        self._changes_saved = False

        self._notify(SessionEvent.WORD_STATE)
        if was_selected != (word.sequence_no in self._selected):
            self._notify(SessionEvent.SELECTION)
        if was_saved:
            self._notify(SessionEvent.CHANGES_SAVED)

    # Edit mode

    def set_editable(self, is_editable: bool) -> None:
        """Switch between showing all words and only the selected ones."""
        self._editable = is_editable
        self._rebuild_word_list()
        self._notify(SessionEvent.WORD_LIST)

    def _rebuild_word_list(self) -> None:
        if self._editable:
            self._word_list = list(self._all_words)
        else:
            self._word_list = list(self.selected_words)

    @property
    def editable(self) -> bool:
        return self._editable

    # Focus

    def focus(self, word: WordEntry) -> None:
        """Make a word current and show its uses."""
        self._check_member(word)
        self._set_focus(word)
        self._notify(SessionEvent.CURRENT_WORD)

    process_word_update = focus

    def _set_focus(self, word: Optional[WordEntry]) -> None:
        self._current_word = word
        uses = list(word.uses) if word else []
        self._use_list = uses
        self._use_count = format_use_count(uses)

    @property
    def current_word(self) -> Optional[WordEntry]:
        return self._current_word

    @property
    def use_list(self) -> tuple[str, ...]:
        return tuple(self._use_list)

    @property
    def use_count(self) -> str:
        return self._use_count

    # Saving

    @property
    def changes_saved(self) -> bool:
        return self._changes_saved

    def set_changes_saved(self, saved: bool) -> None:
        if self._changes_saved != saved:
            self._changes_saved = saved
            self._notify(SessionEvent.CHANGES_SAVED)

    # Queries

    @property
    def all_words(self) -> tuple[WordEntry, ...]:
        return tuple(self._all_words)

    @property
    def word_list(self) -> tuple[WordEntry, ...]:
        return tuple(self._word_list)

    def word_list_size(self) -> int:
        return len(self._word_list)

    def all_words_size(self) -> int:
        return len(self._all_words)

    def word(self, index: int) -> WordEntry:
        """Get a word by its index in all_words."""
        self._check_index(index, len(self._all_words))
        return self._all_words[index]

    def word_list_item(self, index: int) -> WordEntry:
        """Get a word by its index in the current word list view."""
        self._check_index(index, len(self._word_list))
        return self._word_list[index]


def build_word_entries(
    values: Iterable[str],
    known_words: Iterable[str] = (),
    minimum_letters: int = 1,
    minimum_occurrences: int = 1,
) -> list[WordEntry]:
    """
    Turn imported values into session words.

    Values are grouped case-insensitively in order of first appearance; each
    word keeps the original values that produced it as its uses. Words
    shorter than minimum_letters or seen fewer than minimum_occurrences
    times are left out.
    """
    known = {w.lower() for w in known_words}
    texts: dict[str, str] = {}
    uses: dict[str, list[str]] = {}

    for value in values:
        text = value.strip()
        if not text:
            continue
        key = text.lower()
        if key not in texts:
            texts[key] = text
            uses[key] = []
        uses[key].append(value)

    entries = []
    for key, text in texts.items():
        if len(text) < minimum_letters or len(uses[key]) < minimum_occurrences:
            continue
        state = WordState.KNOWN if key in known else WordState.UNKNOWN
        entries.append(WordEntry(
            sequence_no=len(entries),
            text=text,
            state=state,
            uses=tuple(uses[key]),
        ))
    return entries


def session_from_grid(
    document_name: str,
    engine,
    known_words: Iterable[str] = (),
    minimum_letters: int = 1,
    minimum_occurrences: int = 1,
) -> SessionState:
    """
    Build a session from the filtered values of a grid filter.

    Raises:
        InvalidSessionError: If the filter leaves no words
    """
    words = build_word_entries(
        engine.filtered_values(),
        known_words,
        minimum_letters=minimum_letters,
        minimum_occurrences=minimum_occurrences,
    )
    return SessionState(document_name, words)
