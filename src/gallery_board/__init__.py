"""Single-page image gallery editor."""

from .errors import (
    DuplicateUrlError, EmptyFieldError, GalleryError, InvalidUrlError,
    NotFoundError, ValidationError, WorkflowStateError,
)
from .models import GalleryItem
from .store import ItemStore

__version__ = "0.1.0"

__all__ = [
    "DuplicateUrlError", "EmptyFieldError", "GalleryError", "GalleryItem",
    "InvalidUrlError", "ItemStore", "NotFoundError", "ValidationError",
    "WorkflowStateError",
]
