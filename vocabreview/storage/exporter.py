"""Plain text export of session words."""

import logging
from pathlib import Path
from typing import Iterable

from vocabreview.core.models import WordEntry


logger = logging.getLogger(__name__)


def export_file_name(document_name: str) -> str:
    """Get the export file name for a session's document."""
    stem = Path(document_name).stem or "session"
    return f"{stem}-words.txt"


def export_words(words: Iterable[WordEntry], path: str | Path) -> int:
    """
    Write one word per line, in sequence order. Returns the count written.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    ordered = sorted(words, key=lambda w: w.sequence_no)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for word in ordered:
            f.write(word.text + "\n")

    logger.info("Exported %d words to %s", len(ordered), path)
    return len(ordered)
