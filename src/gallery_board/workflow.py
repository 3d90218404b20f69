"""Add/edit editor state machine and the confirmation-gated actions.

    idle --open_add/open_edit--> composing --submit (valid)--> idle
                                 composing --submit (invalid)--> composing (+error)
                                 composing --cancel--> idle

Delete and header rename never happen silently: both take a confirmation
port (a plain callable) that the presentation layer answers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from .errors import NotFoundError, ValidationError, WorkflowStateError
from .models import GalleryItem
from .validation import validate_entry


class EditorState(Enum):
    IDLE = "idle"
    COMPOSING = "composing"


@dataclass
class Draft:
    title: str = ""
    image_url: str = ""
    error: str = ""
    target_id: Optional[str] = None

    @property
    def is_edit(self):
        return self.target_id is not None


class EditWorkflow:
    def __init__(self, store):
        self.store = store
        self.draft: Optional[Draft] = None

    @property
    def state(self) -> EditorState:
        return EditorState.IDLE if self.draft is None else EditorState.COMPOSING

    @property
    def preview_url(self) -> Optional[str]:
        if self.draft is None:
            return None
        return self.draft.image_url.strip() or None

    def open_add(self) -> Draft:
        self._discard_open_draft()
        self.draft = Draft()
        return self.draft

    def open_edit(self, item_id) -> Draft:
        item = self.store.get(item_id)
        if item is None:
            raise NotFoundError(f"no gallery item with id {item_id!r}")
        self._discard_open_draft()
        self.draft = Draft(title=item.title, image_url=item.image_url, target_id=item.id)
        return self.draft

    def set_title(self, value):
        self._require_composing().title = value or ""

    def set_image_url(self, value):
        self._require_composing().image_url = value or ""

    def submit(self) -> Optional[GalleryItem]:
        """Validate and commit the draft.

        Returns the committed item, or None when validation failed (the
        draft stays open with ``error`` set) or the edited item vanished.
        """
        draft = self._require_composing()
        draft.error = ""
        try:
            validate_entry(draft.title, draft.image_url, self.store.items,
                           editing_id=draft.target_id,
                           require_valid_url=self.store.require_valid_url)
            if draft.is_edit:
                item = self.store.update(draft.target_id, draft.title, draft.image_url)
            else:
                item = self.store.add(draft.title, draft.image_url)
        except ValidationError as e:
            draft.error = e.message
            return None
        except NotFoundError as e:
            logger.warning("Edited item disappeared before commit: {}", e)
            self.draft = None
            return None
        self.draft = None
        return item

    def cancel(self):
        self.draft = None

    def _require_composing(self) -> Draft:
        if self.draft is None:
            raise WorkflowStateError("editor is not open")
        return self.draft

    def _discard_open_draft(self):
        if self.draft is not None:
            logger.debug("Discarding open draft for {}", self.draft.target_id or "new item")
            self.draft = None


def confirm_delete(store, item_id, confirm: Callable[[GalleryItem], bool]) -> bool:
    """Remove ``item_id`` only if ``confirm(item)`` says yes."""
    item = store.get(item_id)
    if item is None:
        return False
    if not confirm(item):
        return False
    return store.remove(item_id)


def rename_header(store, prompt: Callable[[str], Optional[str]]) -> bool:
    """Ask ``prompt(current_title)`` for a new heading; blank or None keeps it."""
    answer = prompt(store.header_title)
    if answer is None or not answer.strip():
        return False
    store.set_header_title(answer)
    return True
