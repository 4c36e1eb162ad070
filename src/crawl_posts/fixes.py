"""Per-publication metadata fixups."""

from typing import Callable

MetaFix = Callable[[str, dict], dict]


def _use_fetched_url(url: str, meta: dict) -> dict:
    # Addy Osmani's blog has a wrong twitter:url tag
    return {**meta, "url": url}


def _fix_bair_image(url: str, meta: dict) -> dict:
    # BAIR has a wrong image path in its meta tags
    image = meta.get("image")
    if not image:
        return meta
    return {**meta, "image": image.replace("blogassets", "blog/assets")}


PUBLICATION_FIXES: dict[str, MetaFix] = {
    "addy": _use_fetched_url,
    "bair": _fix_bair_image,
}


def apply_publication_fixes(publication_id: str, url: str, meta: dict) -> dict:
    """Apply the fixup registered for a publication; unknown publications pass through."""
    fix = PUBLICATION_FIXES.get(publication_id)
    if fix is None:
        return meta
    return fix(url, meta)
