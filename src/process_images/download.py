"""Download an image and derive its hosted URL, placeholder and ratio."""

import base64
import io
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests
from PIL import Image

from common.config import get_settings
from process_images.upload import upload_image

logger = logging.getLogger(__name__)

MIN_PLACEHOLDER_WIDTH = 10


class ImageFetchError(Exception):
    """Raised when an image cannot be downloaded."""

    def __init__(self, url: str, status_code: Optional[int] = None):
        super().__init__(f"Failed to download {url} (status {status_code})")
        self.url = url
        self.status_code = status_code


def download_image(url: str) -> bytes:
    settings = get_settings()
    response = requests.get(
        url,
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
    )
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise ImageFetchError(url, response.status_code) from exc
    return response.content


def _looks_like_svg(data: bytes) -> bool:
    head = data[:512].lstrip().lower()
    return head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head)


def open_image(data: bytes) -> Image.Image:
    """Open image bytes with Pillow, rasterizing SVG documents first."""
    if _looks_like_svg(data):
        import cairosvg

        return Image.open(io.BytesIO(cairosvg.svg2png(bytestring=data)))
    return Image.open(io.BytesIO(data))


def placeholder_width(ratio: float) -> int:
    return max(MIN_PLACEHOLDER_WIDTH, math.floor(3 * ratio))


def create_placeholder(image: Image.Image, width: int) -> str:
    """Resize to ``width`` keeping the aspect ratio and return a JPEG data URI."""
    height = max(1, round(width * image.height / image.width))
    resized = image.convert("RGB").resize((width, height))
    buffer = io.BytesIO()
    resized.save(buffer, format="JPEG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


def download_and_process(item_id: str, url: str, image_type: str) -> dict:
    """
    Download an image and build its enrichment fields.

    Upload and placeholder generation run side by side over the same bytes;
    both must succeed for the result to be returned.

    Returns:
        Dict with image, placeholder and ratio.
    """
    logger.info("[%s] downloading %s", item_id, url)
    data = download_image(url)
    image = open_image(data)

    logger.info("[%s] processing image", item_id)
    ratio = image.width / image.height
    is_gif = (image.format or "").lower() == "gif"

    with ThreadPoolExecutor(max_workers=2) as executor:
        upload_future = executor.submit(upload_image, item_id, data, is_gif, image_type, url)
        placeholder_future = executor.submit(create_placeholder, image, placeholder_width(ratio))
        hosted_url = upload_future.result()
        placeholder = placeholder_future.result()

    return {
        "image": hosted_url,
        "placeholder": placeholder,
        "ratio": ratio,
    }
