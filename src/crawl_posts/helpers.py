"""Helper functions for crawl_posts CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import parse_tags


def build_post(args: argparse.Namespace) -> dict:
    '''Build a post payload from CLI arguments.'''

    post = {
        "id": args.id or args.url,
        "publicationId": args.publication_id,
        "url": args.url,
        "tags": parse_tags(args.tags),
    }
    if args.title:
        post["title"] = args.title
    return post


def parse_crawl_posts_args() -> argparse.Namespace:
    '''Parse CLI arguments for crawl_posts.'''

    parser = argparse.ArgumentParser(description="Enrich a single post with page metadata.")
    parser.add_argument("--url", required=True)
    parser.add_argument("--publication-id", required=True)
    parser.add_argument("--id", default=None)
    parser.add_argument("--title", default=None)
    parser.add_argument(
        "--tags",
        default=None,
        help="Comma-separated list of raw tags.",
    )
    parser.add_argument("--publish", action="store_true")
    parser.add_argument("--load-local", action="store_true")
    return parser.parse_args()
