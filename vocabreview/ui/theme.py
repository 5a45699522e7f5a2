"""Color theme and styling for the TUI."""

from vocabreview.core.models import WordState

# Urwid palette for the application
# Format: (name, foreground, background, mono, foreground_high, background_high)

PALETTE = [
    # Word states
    ("unknown", "white", ""),
    ("known", "light green", ""),
    ("excluded", "dark gray", ""),
    ("selected", "yellow", ""),

    # Focused row - underline variants
    ("cursor", "white,underline", "dark cyan"),
    ("cursor_known", "light green,underline", "dark cyan"),
    ("cursor_excluded", "dark gray,underline", "dark cyan"),
    ("cursor_selected", "yellow,underline", "dark cyan"),

    # UI elements
    ("header", "white", "dark blue"),
    ("footer", "white", "dark gray"),
    ("tab_active", "white,bold", "dark blue"),
    ("tab_inactive", "light gray", "dark gray"),

    # Grid
    ("column_included", "white,bold", ""),
    ("column_excluded", "dark gray", ""),
    ("checkbox", "white", ""),
    ("checkbox_focus", "white,bold", "dark blue"),

    # Content
    ("content", "white", ""),
    ("content_title", "white,bold", ""),
    ("use", "light cyan", ""),

    # Status/info
    ("info", "light cyan", ""),
    ("success", "light green", ""),
    ("warning", "yellow", ""),
    ("error", "light red", ""),

    # Dialog
    ("dialog", "white", "dark gray"),
    ("dialog_title", "white,bold", "dark blue"),
    ("button", "white", "dark gray"),
    ("button_focus", "white,bold", "dark blue"),
]


def get_state_attr(state) -> str:
    """Get attribute name for a word state."""
    return {
        WordState.KNOWN: "known",
        WordState.EXCLUDED: "excluded",
        WordState.UNKNOWN: "unknown",
    }.get(state, "unknown")


def get_cursor_attr(state, is_selected: bool) -> str:
    """Get attribute name for the focused row of a word with given state."""
    if is_selected:
        return "cursor_selected"
    return {
        WordState.KNOWN: "cursor_known",
        WordState.EXCLUDED: "cursor_excluded",
        WordState.UNKNOWN: "cursor",
    }.get(state, "cursor")


def get_column_attr(included: bool) -> str:
    """Get attribute name for a grid column."""
    return "column_included" if included else "column_excluded"
