"""Error taxonomy for the gallery board."""


class GalleryError(Exception):
    """Base class for every error raised by gallery_board."""


class ValidationError(GalleryError):
    """A candidate title/URL pair may not be committed."""

    message = "Invalid input."

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class EmptyFieldError(ValidationError):
    message = "Please fill in all fields."


class InvalidUrlError(ValidationError):
    message = "Please enter a valid image URL."


class DuplicateUrlError(ValidationError):
    message = "Duplicate image URL."


class NotFoundError(GalleryError):
    """Stale item id or index; the UI and the store disagree."""


class WorkflowStateError(GalleryError):
    """Operation not allowed in the editor's current state."""
