# ABOUTME: Collects image URLs from a decoded hotel document of any shape
# ABOUTME: Trusts structured image blocks, falls back to matching image-like strings anywhere

import re

from pydantic import JsonValue

IMAGE_COLLECTION_KEY = "image"
IMAGE_URL_FIELD = "url"
IMAGE_URL_PATTERN = re.compile(r".*\.(jpg|jpeg|png|gif)", re.IGNORECASE)


def _structured_image_urls(mapping: dict[str, JsonValue]) -> list[str]:
    """URLs from an ``image`` list of ``{"url": ...}`` blocks, taken without pattern checks."""
    images = mapping.get(IMAGE_COLLECTION_KEY)
    if not isinstance(images, list):
        return []

    urls = []
    for image in images:
        if isinstance(image, dict):
            url = image.get(IMAGE_URL_FIELD)
            if isinstance(url, str):
                urls.append(url)
    return urls


def extract_image_urls(tree: JsonValue) -> set[str]:
    """Walk ``tree`` depth-first and return every image URL found.

    Two sources feed the result:

    - structured blocks: a mapping whose ``image`` key holds a list contributes the
      ``url`` string of each mapping element, unconditionally;
    - loose strings: any string anywhere in the tree whose whole value ends in
      ``.jpg``, ``.jpeg``, ``.png`` or ``.gif`` (case-insensitive). A URL embedded
      in a longer sentence is not picked up.

    Numbers, booleans and nulls are ignored. The walk uses an explicit stack so
    deeply nested documents do not hit the recursion limit.

    Args:
        tree: Decoded document content

    Returns:
        Deduplicated set of URLs
    """
    urls: set[str] = set()
    stack: list[JsonValue] = [tree]

    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            urls.update(_structured_image_urls(node))
            stack.extend(node.values())
        elif isinstance(node, list):
            stack.extend(node)
        elif isinstance(node, str) and IMAGE_URL_PATTERN.fullmatch(node):
            urls.add(node)

    return urls
