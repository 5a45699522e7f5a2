"""JSON file storage for user settings."""

import json
import logging
from pathlib import Path
from typing import Optional

from vocabreview.core.models import FilterFileSelection


logger = logging.getLogger(__name__)

DOCUMENTS_PATH = "documents_path"
SESSIONS_PATH = "sessions_path"
EXPORT_PATH = "export_path"
FILTER_MINIMUM_LETTERS = "filter_minimum_letters"
FILTER_MINIMUM_OCCURRENCES = "filter_minimum_occurrences"
FILTER_FILE = "filter_file"

DEFAULT_MINIMUM_LETTERS = 2
DEFAULT_MINIMUM_OCCURRENCES = 1


class SettingsManager:
    """
    Settings backed by a single JSON file.

    Reads never fail: missing or invalid values fall back to defaults (the
    home directory for paths). Every write saves the file straight away, and
    a failed save is logged rather than raised.
    """

    def __init__(self, settings_file: str | Path):
        self.settings_file = Path(settings_file)
        self._settings: dict = self._load()

    def _load(self) -> dict:
        """Load the settings file, or start empty if it is missing or corrupt."""
        if not self.settings_file.exists():
            return {}

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not load settings from %s: %s", self.settings_file, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring settings in %s: not a JSON object", self.settings_file)
            return {}
        return data

    def _save(self) -> None:
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.settings_file, e)

    # Generic accessors

    def get_path(self, key: str) -> Path:
        """Get a stored directory, or the home directory if unset or gone."""
        value = self._settings.get(key)
        if isinstance(value, str) and value:
            path = Path(value)
            if path.exists():
                return path
        return Path.home()

    def set_path(self, key: str, path: str | Path) -> None:
        self._settings[key] = str(path)
        self._save()

    def get_int(self, key: str, default: int) -> int:
        """Get a stored integer, or the default if unset or not a number."""
        value = self._settings.get(key)
        if isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return default

    def set_int(self, key: str, value: int) -> None:
        self._settings[key] = int(value)
        self._save()

    # Named settings

    def get_documents_path(self) -> Path:
        return self.get_path(DOCUMENTS_PATH)

    def set_documents_path(self, path: str | Path) -> None:
        self.set_path(DOCUMENTS_PATH, path)

    def get_sessions_path(self) -> Path:
        return self.get_path(SESSIONS_PATH)

    def set_sessions_path(self, path: str | Path) -> None:
        self.set_path(SESSIONS_PATH, path)

    def get_export_path(self) -> Path:
        return self.get_path(EXPORT_PATH)

    def set_export_path(self, path: str | Path) -> None:
        self.set_path(EXPORT_PATH, path)

    def get_filter_minimum_letters(self) -> int:
        return self.get_int(FILTER_MINIMUM_LETTERS, DEFAULT_MINIMUM_LETTERS)

    def set_filter_minimum_letters(self, value: int) -> None:
        self.set_int(FILTER_MINIMUM_LETTERS, value)

    def get_filter_minimum_occurrences(self) -> int:
        return self.get_int(FILTER_MINIMUM_OCCURRENCES, DEFAULT_MINIMUM_OCCURRENCES)

    def set_filter_minimum_occurrences(self, value: int) -> None:
        self.set_int(FILTER_MINIMUM_OCCURRENCES, value)

    def get_filter_file(self) -> Optional[FilterFileSelection]:
        """Get the last accepted grid filter choice, if any."""
        data = self._settings.get(FILTER_FILE)
        if not isinstance(data, dict):
            return None
        try:
            return FilterFileSelection.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring stored filter file: %s", e)
            return None

    def set_filter_file(self, selection: FilterFileSelection) -> None:
        self._settings[FILTER_FILE] = selection.to_dict()
        self._save()
