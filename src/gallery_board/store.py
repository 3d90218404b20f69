"""The ordered collection of gallery items plus the page heading.

``ItemStore`` is the only mutation surface. Every mutation writes the full
snapshot back to storage (write-through); a failed write is logged and the
in-memory state stays authoritative.
"""

from __future__ import annotations

import dataclasses

from loguru import logger

from .errors import EmptyFieldError, NotFoundError
from .models import (
    DEFAULT_HEADER_TITLE, ITEMS_KEY, TITLE_KEY, GalleryItem,
    decode_items, default_items, encode_items, new_id, now_ms,
)
from .validation import validate_entry


class ItemStore:
    def __init__(self, storage, require_valid_url=True):
        self.storage = storage
        self.require_valid_url = require_valid_url
        self._items: list[GalleryItem] = []
        self._header_title = DEFAULT_HEADER_TITLE

    # ----------------------------
    # Read access
    # ----------------------------
    @property
    def items(self) -> tuple[GalleryItem, ...]:
        return tuple(self._items)

    @property
    def header_title(self) -> str:
        return self._header_title

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def get(self, item_id) -> GalleryItem | None:
        for it in self._items:
            if it.id == item_id:
                return it
        return None

    def index_of(self, item_id) -> int:
        for i, it in enumerate(self._items):
            if it.id == item_id:
                return i
        raise NotFoundError(f"no gallery item with id {item_id!r}")

    def snapshot(self) -> dict:
        return {"title": self._header_title,
                "items": [it.to_record(order=i) for i, it in enumerate(self._items)]}

    # ----------------------------
    # Persistence
    # ----------------------------
    def load(self):
        """Hydrate from storage; missing or corrupt data means defaults."""
        title = self._read(TITLE_KEY)
        if title and title.strip():
            self._header_title = title
        else:
            self._header_title = DEFAULT_HEADER_TITLE

        raw = self._read(ITEMS_KEY)
        items = decode_items(raw) if raw is not None else None
        if items is None:
            if raw is not None:
                logger.warning("Stored gallery is unreadable; using the default collection")
            items = default_items()
        self._items = items
        logger.info("Loaded {} gallery item(s)", len(self._items))
        return self

    def save(self):
        """Write the full snapshot. Failures are logged, never raised."""
        try:
            self.storage.set(ITEMS_KEY, encode_items(self._items))
            self.storage.set(TITLE_KEY, self._header_title)
        except OSError as e:
            logger.warning("Could not persist gallery snapshot: {}", e)
            return False
        return True

    def _read(self, key):
        try:
            return self.storage.get(key)
        except OSError as e:
            logger.warning("Could not read {} from storage: {}", key, e)
            return None

    # ----------------------------
    # Mutations
    # ----------------------------
    def add(self, title, image_url) -> GalleryItem:
        title = (title or "").strip()
        image_url = (image_url or "").strip()
        validate_entry(title, image_url, self._items, require_valid_url=self.require_valid_url)
        item = GalleryItem(id=new_id({it.id for it in self._items}), title=title,
                           image_url=image_url, created_at=now_ms())
        self._items.append(item)
        logger.debug("Added item {} at position {}", item.id, len(self._items) - 1)
        self.save()
        return item

    def update(self, item_id, title, image_url) -> GalleryItem:
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(f"no gallery item with id {item_id!r}")
        title = (title or "").strip()
        image_url = (image_url or "").strip()
        validate_entry(title, image_url, self._items, editing_id=item_id,
                       require_valid_url=self.require_valid_url)
        item = dataclasses.replace(item, title=title, image_url=image_url)
        self._items[self.index_of(item_id)] = item
        logger.debug("Updated item {}", item_id)
        self.save()
        return item

    def remove(self, item_id) -> bool:
        kept = [it for it in self._items if it.id != item_id]
        if len(kept) == len(self._items):
            return False
        self._items = kept
        logger.debug("Removed item {}", item_id)
        self.save()
        return True

    def reorder(self, source_index, dest_index):
        n = len(self._items)
        if not (0 <= source_index < n and 0 <= dest_index < n):
            raise NotFoundError(f"reorder({source_index}, {dest_index}) out of range for {n} item(s)")
        if source_index == dest_index:
            return
        item = self._items.pop(source_index)
        self._items.insert(dest_index, item)
        logger.debug("Moved item {} from {} to {}", item.id, source_index, dest_index)
        self.save()

    def set_header_title(self, new_title):
        new_title = (new_title or "").strip()
        if not new_title:
            raise EmptyFieldError("Page title cannot be empty.")
        self._header_title = new_title
        self.save()
