"""The ordered set of images that makes up one gallery."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterator

from loguru import logger

from snig.archive import archive_directory, format_bytes
from snig.config import DEFAULT_SORT_BY, STYLESHEET
from snig.errors import ArchiveError, InputNotFound, WriteError
from snig.image import ImageAsset, ImageRenderer
from snig.pages import index_data, page_data
from snig.render import PageRenderer

JPEG_EXTENSIONS = {".jpg", ".jpeg"}


def ensure_directory(path: Path) -> None:
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(f"Unable to create directory {path}: {e}") from e


class Collection:
    """All JPEGs of one input directory, sorted and linked in a circle.

    The order is fixed at construction. ``previous_index``/``next_index`` on
    each asset are indices into ``images``.
    """

    def __init__(self, input_dir: str | Path, name: str, sort_by: str = DEFAULT_SORT_BY) -> None:
        self.input_dir = Path(input_dir)
        if not self.input_dir.is_dir():
            raise InputNotFound(f"Input directory {input_dir} not found")
        self.name = name
        self.sort_by = sort_by.lower()

        self._by_basename = self._scan()
        self.images: list[ImageAsset] = sorted(self._by_basename.values(), key=self._sort_key)
        self._link()

    def _scan(self) -> dict[str, ImageAsset]:
        found: dict[str, ImageAsset] = {}
        try:
            for f in sorted(self.input_dir.iterdir()):
                if not f.is_file() or f.suffix.lower() not in JPEG_EXTENSIONS:
                    continue
                asset = ImageAsset.from_path(f)
                # Same basename twice: the later file replaces the earlier one
                found[asset.basename] = asset
        except OSError as e:
            raise InputNotFound(f"Unable to read input directory {self.input_dir}: {e}") from e
        logger.debug("Found {} images in {}", len(found), self.input_dir)
        return found

    def _sort_key(self, asset: ImageAsset) -> tuple[int, str]:
        if self.sort_by == "mtime":
            primary = asset.modified_time
        else:
            primary = asset.effective_timestamp
        return (primary, asset.basename.lower())

    def _link(self) -> None:
        count = len(self.images)
        for i, asset in enumerate(self.images):
            asset.position = i + 1
            asset.previous_index = (i - 1) % count
            asset.next_index = (i + 1) % count

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[ImageAsset]:
        return iter(self.images)

    def get(self, basename: str) -> ImageAsset | None:
        return self._by_basename.get(basename)

    def previous_of(self, asset: ImageAsset) -> ImageAsset:
        return self.images[asset.previous_index]

    def next_of(self, asset: ImageAsset) -> ImageAsset:
        return self.images[asset.next_index]

    def archive_path(self, output_dir: Path) -> Path:
        output_dir = Path(output_dir)
        stem = output_dir.name.lower() or "snig"
        return output_dir / f"{stem}.zip"

    # -----------------------------------------------------------------------
    # Bulk operations
    # -----------------------------------------------------------------------

    def resize_all(
        self,
        output_dir: Path,
        thumbnail_size: int,
        detail_size: int,
        force: bool = False,
        renderer: ImageRenderer | None = None,
    ) -> ImageRenderer:
        """Render every image; the first failure aborts the run."""
        output_dir = Path(output_dir)
        ensure_directory(output_dir)
        renderer = renderer or ImageRenderer()

        total = len(self.images)
        if total == 0:
            return renderer

        print(f"  Resizing {total} images")
        for i, asset in enumerate(self.images):
            renderer.render(asset, output_dir, thumbnail_size, detail_size, force)
            if (i + 1) % 100 == 0 or i + 1 == total:
                print(f"  [{i+1}/{total}] processed")
        logger.debug("{} decodes for {} images", renderer.decodes, total)
        return renderer

    def write_pages(self, output_dir: Path, renderer: PageRenderer, version: str) -> None:
        total = len(self.images)
        if total == 0:
            return

        output_dir = Path(output_dir)
        for asset in self.images:
            renderer.render_to_file("page", page_data(asset, self, version), output_dir / asset.html_file)
        print(f"  Wrote {total} html pages")

    def write_index(
        self,
        output_dir: Path,
        renderer: PageRenderer,
        version: str,
        asset_dir: Path,
        force_zip: bool = False,
    ) -> None:
        """Write the stylesheet, the archive (if needed) and index.html."""
        output_dir = Path(output_dir)
        ensure_directory(output_dir)
        copy_stylesheet(Path(asset_dir) / STYLESHEET, output_dir / STYLESHEET)

        zip_path = self.archive_path(output_dir)
        if force_zip or not zip_path.is_file():
            print(f"  Creating zip archive {zip_path.name}")
            self.write_archive(zip_path)

        zip_size = format_bytes(zip_path.stat().st_size) if zip_path.is_file() else "0 B"
        renderer.render_to_file(
            "index",
            index_data(self, zip_path.name, zip_size, version),
            output_dir / "index.html",
        )
        print(f"  Wrote index.html ({total_label(len(self))})")

    def write_archive(self, zip_path: Path) -> None:
        """Build the zip next to ``zip_path`` and move it into place when complete."""
        partial = zip_path.with_name(zip_path.name + ".part")
        try:
            partial.write_bytes(archive_directory(self.input_dir))
            os.replace(partial, zip_path)
        except (OSError, ValueError) as e:
            partial.unlink(missing_ok=True)
            raise ArchiveError(f"Unable to create zip archive {zip_path}: {e}") from e


def copy_stylesheet(source: Path, target: Path) -> None:
    """Copy ``source`` over ``target`` if the target is missing or older."""
    if not source.is_file():
        logger.warning("Stylesheet {} not found, skipping", source)
        return
    if target.is_file() and source.stat().st_mtime <= target.stat().st_mtime:
        return
    try:
        shutil.copyfile(source, target)
    except OSError as e:
        raise WriteError(f"Unable to copy stylesheet from {source} to {target}: {e}") from e


def total_label(count: int) -> str:
    return "1 image" if count == 1 else f"{count} images"
