"""Local file text provider."""

from __future__ import annotations

from pathlib import Path

from diffsage.domain.text_source import TextNotFoundError, TextSourceError

from .base import TextProvider


class LocalFileTextProvider(TextProvider):
    """Reads texts from the local file system.

    Files are decoded as UTF-8; undecodable bytes are replaced.
    """

    def read(self, locator: str) -> str:
        path = Path(locator)
        if not path.is_file():
            raise TextNotFoundError(f"File not found: {path}")
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise TextSourceError(f"Cannot read {path}: {e}")
