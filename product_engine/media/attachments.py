"""File attachments listed on the form header, plus size formatting."""

from __future__ import annotations

import math
from typing import Any

from product_engine.models.rows import Attachment

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size_bytes: float) -> str:
    """Human-readable size: ``512 B``, ``1.5 KB``, ``20 KB``, ``3.2 GB``.

    Bytes never get decimals; larger units get one decimal below 10.
    """
    if not isinstance(size_bytes, (int, float)) or not math.isfinite(size_bytes) or size_bytes <= 0:
        return "0 B"
    idx = 0
    value = float(size_bytes)
    while value >= 1024 and idx < len(SIZE_UNITS) - 1:
        value /= 1024
        idx += 1
    digits = 0 if idx == 0 else (1 if value < 10 else 0)
    return f"{value:.{digits}f} {SIZE_UNITS[idx]}"


class AttachmentList:
    """Ordered attachments, addressed by id."""

    def __init__(self):
        self._attachments: list[Attachment] = []

    @property
    def attachments(self) -> list[Attachment]:
        return list(self._attachments)

    def count(self) -> int:
        return len(self._attachments)

    def add(self, filename: str, size_bytes: int = 0, handle: Any = None) -> Attachment:
        next_id = max((a.id for a in self._attachments), default=0) + 1
        attachment = Attachment(id=next_id, filename=filename, size_bytes=size_bytes, handle=handle)
        self._attachments.append(attachment)
        return attachment

    def remove(self, attachment_id: int) -> bool:
        remaining = [a for a in self._attachments if a.id != attachment_id]
        if len(remaining) == len(self._attachments):
            return False
        self._attachments = remaining
        return True
