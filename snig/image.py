"""A single gallery image and the renditions derived from it."""

from __future__ import annotations

import math
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from PIL import Image

from snig.errors import DecodeError, ScaleError, WriteError
from snig.metadata import extract_metadata

ORIGINAL = "orig"
THUMBNAIL = "thumbnail"
PREVIEW = "preview"

JPEG_QUALITY = 100

# Standard EXIF orientation table. Pillow's ROTATE_90 turns counter-clockwise.
ORIENTATION_OPS = {
    2: (Image.Transpose.FLIP_LEFT_RIGHT,),
    3: (Image.Transpose.ROTATE_180,),
    4: (Image.Transpose.FLIP_TOP_BOTTOM,),
    5: (Image.Transpose.FLIP_LEFT_RIGHT, Image.Transpose.ROTATE_90),
    6: (Image.Transpose.ROTATE_270,),
    7: (Image.Transpose.FLIP_LEFT_RIGHT, Image.Transpose.ROTATE_270),
    8: (Image.Transpose.ROTATE_90,),
}


def output_name(fmt: str, basename: str) -> str:
    """File name of the ``fmt`` rendition; pages link to exactly this name."""
    return f"{fmt}_{basename}"


def html_name(basename: str) -> str:
    stem, _ = os.path.splitext(basename.lower())
    return f"{stem}.html"


@dataclass(eq=False)
class ImageAsset:
    """One source JPEG.

    ``position``, ``previous_index`` and ``next_index`` are filled in once by
    the owning Collection; the indices point into its ordered image list.
    """

    path: Path
    modified_time: int
    captured_time: int | None = None
    captured_display: str | None = None
    camera_model: str | None = None
    orientation: int | None = None
    position: int = 0
    previous_index: int = 0
    next_index: int = 0

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageAsset":
        path = Path(path).resolve()
        meta = extract_metadata(path)
        return cls(
            path=path,
            modified_time=int(path.stat().st_mtime),
            captured_time=meta.captured_time,
            captured_display=meta.captured_display,
            camera_model=meta.camera_model,
            orientation=meta.orientation,
        )

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def effective_timestamp(self) -> int:
        if self.captured_time is not None:
            return self.captured_time
        return self.modified_time

    @property
    def html_file(self) -> str:
        return html_name(self.basename)

    def url_for(self, fmt: str) -> str:
        return output_name(fmt, self.basename)


def apply_orientation(img: Image.Image, orientation: int | None) -> Image.Image:
    """Turn ``img`` upright; intermediate images are closed, also on failure."""
    for op in ORIENTATION_OPS.get(orientation, ()):
        try:
            turned = img.transpose(op)
        finally:
            img.close()
        img = turned
    return img


def scale_dimensions(width: int, height: int, size: int) -> tuple[int, int]:
    """Fit the longer side to ``size``; the shorter side keeps the aspect ratio."""
    if width <= 0 or height <= 0 or size <= 0:
        raise ScaleError(f"Cannot scale {width}x{height} to {size}")
    if width >= height:
        target = (size, math.floor(height * size / width + 0.5))
    else:
        target = (math.floor(width * size / height + 0.5), size)
    if target[0] <= 0 or target[1] <= 0:
        raise ScaleError(f"Scaling {width}x{height} to {size} gives {target[0]}x{target[1]}")
    return target


class ImageRenderer:
    """Writes the original copy, thumbnail and preview for an ImageAsset.

    Existing files are kept unless ``force`` is set; originals are never
    re-copied. The source is decoded at most once per ``render`` call.
    """

    def __init__(self) -> None:
        self.decodes = 0

    def render(
        self,
        asset: ImageAsset,
        output_dir: Path,
        thumbnail_size: int,
        detail_size: int,
        force: bool = False,
    ) -> None:
        output_dir = Path(output_dir)
        self.copy_original(asset, output_dir)

        source = None
        try:
            for fmt, size in ((THUMBNAIL, thumbnail_size), (PREVIEW, detail_size)):
                target = output_dir / asset.url_for(fmt)
                if not force and target.exists():
                    continue
                if source is None:
                    source = self.decode(asset)
                self._write_scaled(asset, source, size, target)
        finally:
            if source is not None:
                source.close()

    def copy_original(self, asset: ImageAsset, output_dir: Path) -> None:
        target = output_dir / asset.url_for(ORIGINAL)
        if target.exists():
            return
        try:
            shutil.copyfile(asset.path, target)
        except OSError as e:
            raise WriteError(f"Unable to copy original image to {target}: {e}") from e

    def decode(self, asset: ImageAsset) -> Image.Image:
        """Load pixels as RGB, orientation already applied."""
        try:
            with Image.open(asset.path) as src:
                img = src.convert("RGB")
        except Image.DecompressionBombError as e:
            raise DecodeError(f"{asset.path} is larger than Image.MAX_IMAGE_PIXELS allows: {e}") from e
        except (OSError, ValueError) as e:
            raise DecodeError(f"Unable to read image file {asset.path}: {e}") from e
        self.decodes += 1
        return apply_orientation(img, asset.orientation)

    def _write_scaled(self, asset: ImageAsset, source: Image.Image, size: int, target: Path) -> None:
        try:
            width, height = scale_dimensions(source.width, source.height, size)
        except ScaleError as e:
            raise ScaleError(f"Image {asset.path} has invalid dimensions: {e}") from e

        scaled = source.resize((width, height), Image.LANCZOS)
        try:
            scaled.save(target, "JPEG", quality=JPEG_QUALITY)
        except (OSError, ValueError) as e:
            raise WriteError(f"Failed to write resized image {target}: {e}") from e
        finally:
            scaled.close()
        logger.debug("Wrote {} ({}x{})", target.name, width, height)
