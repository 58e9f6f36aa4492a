"""End-to-end gallery build."""

from __future__ import annotations

from loguru import logger

from snig import VERSION
from snig.collection import Collection, ensure_directory
from snig.config import GalleryConfig
from snig.errors import InputNotFound
from snig.render import PageRenderer


def build_gallery(config: GalleryConfig, renderer: PageRenderer | None = None) -> Collection:
    """Run every step for one gallery and return the collection it built."""
    config.validate()

    input_dir = config.input_dir.resolve()
    if not input_dir.is_dir():
        raise InputNotFound(f"Input directory {config.input_dir} not found")
    if not config.asset_dir.is_dir():
        raise InputNotFound(f"Asset directory {config.asset_dir} not found")

    ensure_directory(config.output_dir)
    output_dir = config.output_dir.resolve()
    renderer = renderer or PageRenderer()

    print("Step 1: Scanning images...")
    collection = Collection(input_dir, config.name, config.sort_by)
    print(f"  Found {len(collection)} images in {input_dir}")

    print("Step 2: Resizing images...")
    collection.resize_all(output_dir, config.thumbnail_size, config.detail_size, config.force_resize)

    print("Step 3: Writing pages...")
    collection.write_pages(output_dir, renderer, VERSION)

    print("Step 4: Writing index...")
    collection.write_index(output_dir, renderer, VERSION, config.asset_dir, config.force_zip)

    logger.info("Gallery {!r} written to {}", collection.name, output_dir)
    return collection
