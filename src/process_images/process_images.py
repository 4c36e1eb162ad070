"""Moderate, re-host and placeholder the representative image of an item."""

import logging
from typing import Any, Mapping, Optional

from tenacity import Retrying, before_sleep_log, stop_after_attempt, wait_exponential

from common.config import get_settings
from common.event_bus import EventBus
from common.events import decode_event
from common.serialization import serialize_item
from process_images.download import download_and_process
from process_images.models import ImageDecision, ImageResult, ImageStatus
from process_images.moderation import ModerationError, moderate_content

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "post"
DEGRADE_STATUS_CODES = (400, 403)


def image_processed_topic(image_type: str) -> str:
    return f"{image_type}-image-processed"


def process_with_retry(item_id: str, url: str, image_type: str, wait=None) -> dict:
    """
    Run download_and_process with exponential backoff.

    Returns an empty dict once every attempt has failed.
    """
    settings = get_settings()
    retrying = Retrying(
        stop=stop_after_attempt(settings.image_retry_attempts),
        wait=wait if wait is not None else wait_exponential(max=settings.image_retry_wait_max),
        before_sleep=before_sleep_log(logger, logging.INFO),
        reraise=True,
    )
    try:
        return retrying(download_and_process, item_id, url, image_type)
    except Exception as e:
        logger.warning(
            "[%s] giving up on image %s after %d attempts: %s",
            item_id, url, settings.image_retry_attempts, e,
        )
        return {}


def manipulate_image(
    item_id: str,
    url: Optional[str],
    title: Optional[str],
    image_type: str = DEFAULT_TYPE,
    wait=None,
) -> ImageResult:
    """Decide what happens to an item's image and compute the fields to merge."""
    if not url:
        logger.info("[%s] no image, skipping image processing", item_id)
        return ImageResult(status=ImageStatus.SKIPPED)

    try:
        rejected = moderate_content(url, title)
    except ModerationError as e:
        if e.status_code in DEGRADE_STATUS_CODES:
            logger.warning("[%s] failed to check image %s", item_id, url)
            return ImageResult(status=ImageStatus.DEGRADED, fields={"image": None})
        raise

    if rejected:
        logger.warning("[%s] image rejected %s", item_id, url)
        return ImageResult(status=ImageStatus.REJECTED)

    fields = process_with_retry(item_id, url, image_type, wait=wait)
    status = ImageStatus.PROCESSED if fields else ImageStatus.FAILED
    return ImageResult(status=status, fields=fields)


def handle_image_event(
    event: Mapping[str, Any],
    bus: Optional[EventBus] = None,
    wait=None,
) -> ImageDecision:
    """
    Handle one inbound image event end to end.

    Decode failures propagate. Anything failing afterwards is logged and the
    original item is returned without publishing.
    """
    data = decode_event(event)
    item_id = data.get("id")
    image_type = data.get("type") or DEFAULT_TYPE

    try:
        result = manipulate_image(item_id, data.get("image"), data.get("title"), image_type, wait=wait)
        if result.status is ImageStatus.REJECTED:
            return ImageDecision(item=data, publish=False, status=result.status)

        item = {**data, **result.fields}
        if bus is None:
            bus = EventBus()
        logger.info("[%s] %s image processed", item_id, image_type)
        bus.publish(image_processed_topic(image_type), serialize_item(item))
        return ImageDecision(item=item, publish=True, status=result.status)
    except Exception as e:
        logger.warning("[%s] failed to process image: %s", item_id, e)
        return ImageDecision(item=data, publish=False, status=ImageStatus.ERROR)
