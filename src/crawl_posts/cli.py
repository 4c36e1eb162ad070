"""CLI for enriching a single post with page metadata."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import save_jsonl_local, setup_logging
from common.event_bus import EventBus
from common.events import encode_event
from crawl_posts.crawl_posts import crawl_post, handle_crawl_event
from crawl_posts.helpers import build_post, parse_crawl_posts_args

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_crawl_posts_args()
    post = build_post(args)

    if args.publish:
        decision = handle_crawl_event(encode_event(post), bus=EventBus())
    else:
        decision = crawl_post(post)

    if not decision.publish:
        logger.warning("Post suppressed: %s", decision.reason)
        return

    logger.info("Post accepted: %s", decision.item)

    if args.load_local:
        filepath = save_jsonl_local([decision.item], "crawled_posts")
        logger.info("Saved crawled post to %s", filepath)


if __name__ == "__main__":
    main()
