#!/usr/bin/env python3
"""Image loading backed by the disk cache."""

import asyncio
import logging
from pathlib import PurePosixPath

import httpx
from PIL import Image

from .image_cache import DiskImageCache, decode_image

logger = logging.getLogger(__name__)


def strip_file_type(path: str) -> str:
    """Turn an image path like "/abc123.jpg" into the cache id "abc123".

    Only the last path segment is kept, so "/a/x.jpg" and "/b/x.jpg" share
    the id "x". Movie API image paths are single segments, so they don't
    collide.
    """
    return PurePosixPath(path).stem


class ImageLoader:
    """Load images from the cache, downloading and caching them on a miss."""

    def __init__(
        self,
        cache: DiskImageCache,
        url_prefix: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cache = cache
        self.url_prefix = url_prefix
        self.transport = transport

    async def get(self, client: httpx.AsyncClient, url_path: str) -> Image.Image | None:
        """Get the image for url_path, or None if it cannot be loaded."""
        if not url_path:
            return None

        image_id = strip_file_type(url_path)
        cached_image = self.cache.load(image_id)
        if cached_image is not None:
            return cached_image

        url = self.url_prefix + url_path
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.info("Could not fetch %s: %s", url, e)
            return None

        image = decode_image(response.content)
        if image is None:
            logger.info("Response from %s is not an image", url)
            return None

        self.cache.store(image_id, image)
        return image

    async def get_many(self, url_paths: list[str]) -> dict[str, Image.Image | None]:
        """Get images for several paths concurrently."""
        async with httpx.AsyncClient(transport=self.transport) as client:
            tasks = [self.get(client, url_path) for url_path in url_paths]
            images = await asyncio.gather(*tasks)

        return dict(zip(url_paths, images))
