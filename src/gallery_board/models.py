"""Gallery item record and the snapshot codec used at the storage boundary."""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass

from loguru import logger

ITEMS_KEY = "my-image-gallery"
TITLE_KEY = "my-page-title"
DEFAULT_HEADER_TITLE = "Business Overview"


@dataclass(frozen=True)
class GalleryItem:
    """One titled image card. Frozen; ``ItemStore.update`` swaps in a new copy."""

    id: str
    title: str
    image_url: str
    # epoch milliseconds; None for seed items and legacy records
    created_at: int | None = None

    def to_record(self, order: int | None = None) -> dict:
        rec = {"id": self.id, "title": self.title, "imageUrl": self.image_url}
        if order is not None:
            rec["order"] = order
        if self.created_at is not None:
            rec["createdAt"] = self.created_at
        return rec

    @classmethod
    def from_record(cls, rec) -> GalleryItem | None:
        """Build an item from a stored record, or None when a required field is missing."""
        if not isinstance(rec, dict):
            return None
        rid = rec.get("id")
        title = rec.get("title")
        url = rec.get("imageUrl")
        if isinstance(rid, int) and not isinstance(rid, bool):
            rid = str(rid)
        if not all(isinstance(v, str) and v.strip() for v in (rid, title, url)):
            return None
        created = rec.get("createdAt")
        if isinstance(created, bool) or not isinstance(created, (int, float)):
            created = None
        return cls(id=rid, title=title, image_url=url,
                   created_at=int(created) if created is not None else None)


def default_items():
    return [
        GalleryItem("1", "Short Overview",
                    "https://images.unsplash.com/photo-1559627756-c73e16b9d621?w=500&q=80"),
        GalleryItem("2", "The Greatest Economic Story",
                    "https://images.unsplash.com/photo-1542744173-8e7e53415bb0?w=500&q=80"),
    ]


def new_id(taken=()):
    while True:
        iid = uuid.uuid4().hex
        if iid not in taken:
            return iid


def now_ms() -> int:
    return int(time.time() * 1000)


def encode_items(items) -> str:
    return json.dumps([it.to_record(order=i) for i, it in enumerate(items)])


def decode_items(raw: str) -> list[GalleryItem] | None:
    """Parse a stored collection.

    Returns None when the payload is not a JSON array (caller falls back to
    defaults). Records missing a required field, or repeating an id seen
    earlier in the list, are skipped.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, list):
        return None
    items = []
    seen = set()
    for rec in data:
        item = GalleryItem.from_record(rec)
        if item is None:
            logger.warning("Skipping stored gallery record without id/title/imageUrl: {!r}", rec)
            continue
        if item.id in seen:
            logger.warning("Skipping stored gallery record with repeated id {}", item.id)
            continue
        seen.add(item.id)
        items.append(item)
    return items
