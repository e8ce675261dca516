#!/usr/bin/env python3
"""Configuration management for PopcornVault."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from .image_cache import TimeUnit

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_URL_PREFIX = "https://image.tmdb.org/t/p/w500"


class ImageCacheSettings:
    """Settings passed to the disk image cache at startup."""

    def __init__(
        self,
        dir_name: str = "PopcornVault",
        expiration_unit: TimeUnit = TimeUnit.DAYS,
        expiration_amount: float = 1,
    ) -> None:
        self.dir_name = dir_name
        self.expiration_unit = expiration_unit
        self.expiration_amount = expiration_amount

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageCacheSettings":
        """Build settings from the [image_cache] table, validating values."""
        settings = cls()

        dir_name = data.get("dir_name", settings.dir_name)
        if not isinstance(dir_name, str) or not dir_name or "/" in dir_name:
            raise ValueError(f"invalid dir_name: {dir_name!r}")
        settings.dir_name = dir_name

        settings.expiration_unit = TimeUnit(
            data.get("expiration_unit", settings.expiration_unit)
        )

        amount = data.get("expiration_amount", settings.expiration_amount)
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount < 0:
            raise ValueError(f"invalid expiration_amount: {amount!r}")
        settings.expiration_amount = amount

        return settings


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        self.image_url_prefix = DEFAULT_IMAGE_URL_PREFIX
        self.image_cache = ImageCacheSettings()

    @staticmethod
    def get_config_path() -> Path:
        """Get the XDG config file path."""
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            config_dir = Path(xdg_config_home)
        else:
            config_dir = Path.home() / ".config"

        config_file = config_dir / "popcornvault" / "config.toml"
        return config_file

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from XDG config file."""
        config = cls()
        config_path = cls.get_config_path()

        if not config_path.exists():
            try:
                config_path.parent.mkdir(exist_ok=True, parents=True)
                config_path.write_text(Config.create_example_config())
            except OSError as e:
                logger.warning("Could not write example config to %s: %s", config_path, e)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)

            image_url_prefix = data.get("image_url_prefix", config.image_url_prefix)
            if not isinstance(image_url_prefix, str):
                raise ValueError(f"invalid image_url_prefix: {image_url_prefix!r}")
            config.image_url_prefix = image_url_prefix

            config.image_cache = ImageCacheSettings.from_dict(data.get("image_cache", {}))

        except Exception as e:
            logger.warning("Could not load config from %s: %s", config_path, e)
            config = cls()

        return config

    @staticmethod
    def create_example_config() -> str:
        """Create an example config file content."""
        return f"""# PopcornVault Configuration File
# Location: ~/.config/popcornvault/config.toml (or $XDG_CONFIG_HOME/popcornvault/config.toml)

# Prefix prepended to image paths returned by the movie API
image_url_prefix = "{DEFAULT_IMAGE_URL_PREFIX}"

[image_cache]
# Directory created under ~/.cache (or ~/.local/share if there is no cache dir)
dir_name = "PopcornVault"
# Cached images older than this are deleted on startup
# expiration_unit is one of: seconds, minutes, hours, days
expiration_unit = "days"
expiration_amount = 1
"""
