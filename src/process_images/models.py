"""Data models for process_images pipeline stage."""

from dataclasses import dataclass, field
from enum import Enum


class ImageStatus(str, Enum):
    """Outcome of image enrichment for one item."""
    SKIPPED = "skipped"        # no image on the item
    REJECTED = "rejected"      # failed moderation, never published
    DEGRADED = "degraded"      # moderation unavailable, image cleared
    PROCESSED = "processed"
    FAILED = "failed"          # retries exhausted, published without changes
    ERROR = "error"            # unexpected failure, nothing published


@dataclass
class ImageResult:
    """Fields to merge into the item (image, placeholder, ratio)."""
    status: ImageStatus
    fields: dict = field(default_factory=dict)


@dataclass
class ImageDecision:
    item: dict
    publish: bool
    status: ImageStatus
