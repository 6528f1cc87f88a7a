"""Barcode entries on the general tab. The list never drops below one entry."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class BarcodeList:
    def __init__(self):
        self._codes: list[str] = [""]

    @property
    def codes(self) -> list[str]:
        return list(self._codes)

    def add(self) -> int:
        """Append an empty entry and return its index."""
        self._codes.append("")
        return len(self._codes) - 1

    def update(self, index: int, value: str) -> bool:
        if not 0 <= index < len(self._codes):
            return False
        self._codes[index] = value or ""
        return True

    def remove(self, index: int) -> bool:
        if len(self._codes) <= 1:
            logger.debug("remove ignored: at least one barcode entry is required")
            return False
        if not 0 <= index < len(self._codes):
            return False
        del self._codes[index]
        return True

    def filled_count(self) -> int:
        return sum(1 for code in self._codes if code.strip())
