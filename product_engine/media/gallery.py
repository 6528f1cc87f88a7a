"""
Photo Gallery: Ordered Photos with Positional Primacy

The photo at index 0 is the primary photo. There is no separate pointer:
removing the first photo promotes whichever photo is next, and
make_primary() is the only operation that reorders the list.
"""
from __future__ import annotations
from typing import Any, Optional
import logging

from product_engine.models.rows import PhotoEntry

logger = logging.getLogger(__name__)


class PhotoGallery:
    """Ordered photo entries."""

    def __init__(self):
        self._photos: list[PhotoEntry] = []

    @property
    def photos(self) -> list[PhotoEntry]:
        return list(self._photos)

    @property
    def primary(self) -> Optional[PhotoEntry]:
        return self._photos[0] if self._photos else None

    def get_photo(self, photo_id: int) -> Optional[PhotoEntry]:
        for photo in self._photos:
            if photo.id == photo_id:
                return photo
        return None

    def add_photo(self, handle: Any = None) -> PhotoEntry:
        """Append a photo. ``handle`` may be filled in later with set_image()."""
        next_id = max((p.id for p in self._photos), default=0) + 1
        photo = PhotoEntry(id=next_id, image_ref=handle)
        self._photos.append(photo)
        return photo

    def set_image(self, photo_id: int, handle: Any) -> bool:
        photo = self.get_photo(photo_id)
        if photo is None:
            return False
        photo.image_ref = handle
        return True

    def set_caption(self, photo_id: int, text: str) -> bool:
        photo = self.get_photo(photo_id)
        if photo is None:
            logger.debug(f"set_caption ignored: no photo {photo_id}")
            return False
        photo.caption = text or ""
        return True

    def remove_photo(self, photo_id: int) -> bool:
        remaining = [p for p in self._photos if p.id != photo_id]
        if len(remaining) == len(self._photos):
            return False
        self._photos = remaining
        return True

    def make_primary(self, index: int) -> bool:
        """Move the photo at ``index`` to the front, keeping the others' order."""
        if index == 0 or not 0 < index < len(self._photos):
            logger.debug(f"make_primary ignored: index {index}")
            return False
        photo = self._photos.pop(index)
        self._photos.insert(0, photo)
        return True
