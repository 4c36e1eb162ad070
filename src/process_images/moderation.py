"""Content moderation for image candidates."""

from typing import Optional

BANNED_TERMS = ("escort", "sex")


class ModerationError(Exception):
    """Raised when the moderation check itself cannot be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def moderate_content(url: str, title: Optional[str]) -> bool:
    """Return True if the item must be rejected based on its title."""
    if not title:
        return False
    lower = title.lower()
    return any(term in lower for term in BANNED_TERMS)
