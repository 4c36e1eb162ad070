"""CLI for processing the image of a single item."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import save_jsonl_local, setup_logging
from common.event_bus import EventBus
from common.events import encode_event
from process_images.helpers import build_image_item, parse_process_images_args
from process_images.models import ImageStatus
from process_images.process_images import handle_image_event, manipulate_image

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_process_images_args()
    item = build_image_item(args)

    if args.publish:
        decision = handle_image_event(encode_event(item), bus=EventBus())
        status, processed = decision.status, decision.item
    else:
        result = manipulate_image(item["id"], item["image"], item.get("title"), item["type"])
        status, processed = result.status, {**item, **result.fields}

    logger.info("Image %s: %s", status.value, processed)

    if status in (ImageStatus.REJECTED, ImageStatus.ERROR):
        return

    if args.load_local:
        filepath = save_jsonl_local([processed], f"{item['type']}_images")
        logger.info("Saved processed item to %s", filepath)


if __name__ == "__main__":
    main()
