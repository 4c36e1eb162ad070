"""Upload processed images to Cloudinary."""

import io
import logging

import cloudinary.uploader
from cloudinary.utils import cloudinary_url

from common.hashing import checksum

logger = logging.getLogger(__name__)


def is_svg(url: str) -> bool:
    return url.find(".svg") > 0


def upload_preset(image_type: str, url: str):
    """SVGs are uploaded as-is, everything else through the type's preset."""
    if is_svg(url):
        return None
    return f"{image_type}_image"


def upload_image(item_id: str, data: bytes, is_gif: bool, image_type: str, url: str) -> str:
    """
    Upload an image and return its delivery URL.

    GIFs are not re-hosted; their source URL is returned unchanged. Other
    images are uploaded under the checksum of their bytes so re-uploads of the
    same image land on the same public id.
    """
    if is_gif:
        return url

    public_id = checksum(data)
    preset = upload_preset(image_type, url)
    logger.info("[%s] uploading image %s with preset %s", item_id, public_id, preset)

    options = {"public_id": public_id}
    if preset:
        options["upload_preset"] = preset

    result = cloudinary.uploader.upload(io.BytesIO(data), **options)
    delivery_url, _ = cloudinary_url(
        result["public_id"],
        secure=True,
        fetch_format="auto",
        quality="auto",
    )
    return delivery_url
