"""Helper functions for process_images CLI."""

from __future__ import annotations

import argparse


def build_image_item(args: argparse.Namespace) -> dict:
    '''Build an item payload from CLI arguments.'''

    item = {"id": args.id or args.image, "type": args.type, "image": args.image}
    if args.title:
        item["title"] = args.title
    return item


def parse_process_images_args() -> argparse.Namespace:
    '''Parse CLI arguments for process_images.'''

    parser = argparse.ArgumentParser(description="Process the image of a single item.")
    parser.add_argument("--image", required=True)
    parser.add_argument("--title", default=None)
    parser.add_argument("--type", default="post")
    parser.add_argument("--id", default=None)
    parser.add_argument("--publish", action="store_true")
    parser.add_argument("--load-local", action="store_true")
    return parser.parse_args()
