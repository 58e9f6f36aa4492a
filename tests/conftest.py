from __future__ import annotations

import os
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image

DATETIME = 0x0132
MODEL = 0x0110
ORIENTATION = 0x0112
EXIF_IFD = 0x8769
DATETIME_ORIGINAL = 0x9003
DATETIME_DIGITIZED = 0x9004


def make_jpeg(
    path: Path,
    size: tuple[int, int] = (40, 30),
    color=(200, 40, 40),
    taken: str | None = None,
    model: str | None = None,
    orientation: int | None = None,
    mtime: int | None = None,
    exif_ifd: dict[int, object] | None = None,
) -> Path:
    """Write a small JPEG with optional EXIF tags and modification time.

    ``exif_ifd`` tags go into the Exif sub-IFD, the rest into IFD0.
    """
    exif = Image.Exif()
    if taken is not None:
        exif[DATETIME] = taken
    if model is not None:
        exif[MODEL] = model
    if orientation is not None:
        exif[ORIENTATION] = orientation
    if exif_ifd:
        sub = exif.get_ifd(EXIF_IFD)
        for tag, value in exif_ifd.items():
            sub[tag] = value

    img = Image.new("RGB", size, color)
    img.save(path, "JPEG", quality=95, exif=exif)
    img.close()
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def photos(tmp_path: Path) -> Path:
    d = tmp_path / "photos"
    d.mkdir()
    return d


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()
