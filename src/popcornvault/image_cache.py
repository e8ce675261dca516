#!/usr/bin/env python3
"""Disk cache for downloaded images with time-based expiration."""

import io
import logging
import os
import time
from enum import Enum
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


class TimeUnit(str, Enum):
    """Unit of the expiration period."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds_per_unit(self) -> int:
        return _SECONDS_PER_UNIT[self]


_SECONDS_PER_UNIT = {
    TimeUnit.SECONDS: 1,
    TimeUnit.MINUTES: 60,
    TimeUnit.HOURS: 3600,
    TimeUnit.DAYS: 86400,
}


def user_cache_dir() -> Path | None:
    """Get the XDG cache directory, or None if it cannot be determined."""
    xdg_cache_home = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache_home:
        return Path(xdg_cache_home)

    try:
        return Path.home() / ".cache"
    except RuntimeError:
        return None


def user_data_dir() -> Path | None:
    """Get the XDG data directory, or None if it cannot be determined."""
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)

    try:
        return Path.home() / ".local" / "share"
    except RuntimeError:
        return None


class DiskImageCache:
    """PNG image cache stored as flat files under a single directory.

    The cache directory is resolved once: the user cache directory if there is
    one, else the user data directory. Entries older than the expiration period
    are deleted when the cache is created. If no directory can be resolved or
    created the cache stays disabled for its whole lifetime, and every
    operation does nothing.

    No method raises; I/O and codec failures look like a miss to the caller.
    """

    def __init__(
        self,
        cache_dir_name: str,
        expiration_unit: TimeUnit,
        amount: float,
    ) -> None:
        self.expiration_unit = TimeUnit(expiration_unit)
        self.amount = amount
        self._root: Path | None = None

        candidate = self._resolve_cache_dir(cache_dir_name)
        if candidate is None:
            logger.warning("No cache directory available, image cache disabled")
            return

        self._delete_expired_files(candidate)

        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create image cache at %s: %s", candidate, e)
            return

        self._root = candidate

    @staticmethod
    def _resolve_cache_dir(cache_dir_name: str) -> Path | None:
        for base_dir in (user_cache_dir(), user_data_dir()):
            if base_dir is not None:
                return base_dir / cache_dir_name
        return None

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def operable(self) -> bool:
        return self._root is not None

    @staticmethod
    def _get_image_path(root: Path, image_id: str) -> Path:
        return root / f"{image_id}.png"

    def _delete_expired_files(self, directory: Path) -> None:
        """Delete every entry of directory modified before the cutoff."""
        cutoff = time.time() - self.amount * self.expiration_unit.seconds_per_unit

        try:
            entries = list(directory.iterdir())
        except OSError:
            return

        for entry in entries:
            try:
                if entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    logger.debug("Deleted expired cache entry %s", entry.name)
            except OSError as e:
                logger.debug("Skipping cache entry %s: %s", entry.name, e)

    def store(self, image_id: str, image: Image.Image | bytes) -> None:
        """Store an image as PNG, replacing any earlier entry for image_id."""
        if self._root is None:
            return

        data = _encode_png(image)
        if data is None:
            return

        image_path = self._get_image_path(self._root, image_id)
        try:
            with open(image_path, "wb") as f:
                f.write(data)
        except (OSError, ValueError) as e:
            logger.debug("Could not cache image %s: %s", image_id, e)

    def load(self, image_id: str) -> Image.Image | None:
        """Load a cached image, or None if it is missing or unreadable."""
        if self._root is None:
            return None

        image_path = self._get_image_path(self._root, image_id)
        try:
            if not image_path.exists():
                return None
            data = image_path.read_bytes()
        except (OSError, ValueError) as e:
            logger.debug("Could not read cached image %s: %s", image_id, e)
            return None

        return decode_image(data)

    def contains(self, image_id: str) -> bool:
        """Check whether an entry exists for image_id without decoding it."""
        if self._root is None:
            return False

        try:
            return self._get_image_path(self._root, image_id).is_file()
        except (OSError, ValueError):
            return False


def _encode_png(image: Image.Image | bytes) -> bytes | None:
    try:
        if isinstance(image, bytes):
            image = Image.open(io.BytesIO(image))
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
    except Exception as e:
        logger.debug("Could not encode image as PNG: %s", e)
        return None

    return buffer.getvalue()


def decode_image(data: bytes) -> Image.Image | None:
    """Decode encoded image bytes, or return None if they are not an image."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as e:
        logger.debug("Could not decode image: %s", e)
        return None

    return image
