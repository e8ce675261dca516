#!/usr/bin/env python3
"""Command line tool to fill the image cache."""

import argparse
import asyncio
import logging

from .config import Config
from .image_cache import DiskImageCache
from .images import ImageLoader, strip_file_type


def build_loader(config: Config) -> ImageLoader:
    """Create the image cache and loader described by config."""
    settings = config.image_cache
    cache = DiskImageCache(
        settings.dir_name, settings.expiration_unit, settings.expiration_amount
    )
    return ImageLoader(cache, config.image_url_prefix)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the application."""
    parser = argparse.ArgumentParser(
        prog="popcornvault-images",
        description="Download movie images into the local cache.",
    )
    parser.add_argument("paths", nargs="+", help="image paths, e.g. /abc123.jpg")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    loader = build_loader(Config.load())
    already_cached = {
        path for path in args.paths if loader.cache.contains(strip_file_type(path))
    }
    images = asyncio.run(loader.get_many(args.paths))

    failed = False
    for path in args.paths:
        if images[path] is None:
            status = "failed"
            failed = True
        elif path in already_cached:
            status = "cached"
        else:
            status = "fetched"
        print(f"{status:8} {path}")

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
