"""Hashing utilities."""

import hashlib


def checksum(data: bytes) -> str:
    """Return the MD5 hex digest of a byte buffer, used as a stable upload id."""
    return hashlib.md5(data).hexdigest()
