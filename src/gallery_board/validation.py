"""Checks deciding whether a title/URL pair may be committed.

Rules run in a fixed order and stop at the first failure:

1. title and URL are non-empty after trimming   -> EmptyFieldError
2. URL is a well-formed absolute URL (optional)  -> InvalidUrlError
3. no other item already uses the exact URL      -> DuplicateUrlError
"""

import re
from urllib.parse import urlparse

from .errors import DuplicateUrlError, EmptyFieldError, InvalidUrlError, ValidationError

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")
# schemes that need an authority part ("scheme://host/...")
HOST_SCHEMES = {"http", "https", "ftp", "ftps"}
DATA_IMAGE_RE = re.compile(r"^data:image/[a-zA-Z0-9.+\-]+(;[^,]*)?,.+", re.IGNORECASE)


def is_valid_url(url: str) -> bool:
    """True for image URLs a browser can load without running script.

    Only http(s)/ftp(s) with a host, ``file://`` paths and inline
    ``data:image/...`` payloads pass; every other scheme is refused.
    """
    if not url or url != url.strip():
        return False
    if any(ch.isspace() for ch in url):
        return False
    try:
        pr = urlparse(url)
    except ValueError:
        return False
    if not pr.scheme or not SCHEME_RE.match(pr.scheme):
        return False
    scheme = pr.scheme.lower()
    if scheme in HOST_SCHEMES:
        try:
            host = pr.hostname
            _ = pr.port  # raises on a malformed port
        except ValueError:
            return False
        return bool(host)
    if scheme == "file":
        return url.lower().startswith("file://") and bool(pr.path)
    if scheme == "data":
        return bool(DATA_IMAGE_RE.match(url))
    return False


def validate_entry(title, image_url, items=(), editing_id=None, require_valid_url=True):
    """Raise the first failing rule's error for the candidate pair.

    ``items`` is the current collection; ``editing_id`` excludes the item
    being edited from the uniqueness check.
    """
    title = (title or "").strip()
    image_url = (image_url or "").strip()
    if not title or not image_url:
        raise EmptyFieldError()
    if require_valid_url and not is_valid_url(image_url):
        raise InvalidUrlError()
    for item in items:
        if item.image_url == image_url and item.id != editing_id:
            raise DuplicateUrlError()


def check_entry(title, image_url, items=(), editing_id=None, require_valid_url=True):
    """Same as validate_entry but returns the message (or None)."""
    try:
        validate_entry(title, image_url, items, editing_id, require_valid_url)
    except ValidationError as e:
        return e.message
    return None
