"""Plain data handed to the page renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from snig.collection import Collection
    from snig.image import ImageAsset


def image_link(asset: ImageAsset) -> dict[str, Any]:
    return {
        "basename": asset.basename,
        "html_file": asset.html_file,
        "url_for": asset.url_for,
    }


def image_page_data(asset: ImageAsset, collection: Collection) -> dict[str, Any]:
    data = image_link(asset)
    data.update(
        position=asset.position,
        captured_display=asset.captured_display,
        camera_model=asset.camera_model,
        previous=image_link(collection.previous_of(asset)),
        next=image_link(collection.next_of(asset)),
    )
    return data


def page_data(asset: ImageAsset, collection: Collection, version: str) -> dict[str, Any]:
    """Template context for one image page."""
    return {
        "image": image_page_data(asset, collection),
        "collection": {"name": collection.name, "size": len(collection)},
        "version": version,
    }


def index_data(collection: Collection, archive_file: str, archive_size: str, version: str) -> dict[str, Any]:
    """Template context for index.html."""
    return {
        "collection": {
            "name": collection.name,
            "images": [image_link(a) for a in collection],
            "archive_file": archive_file,
            "archive_size": archive_size,
        },
        "version": version,
    }
