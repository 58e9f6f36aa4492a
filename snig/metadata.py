"""EXIF metadata extraction: capture time, camera model, orientation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger
from PIL import ExifTags, Image

# "create date" in exiftool terms is DateTimeDigitized in the EXIF spec
CAPTURE_TAGS = ("DateTimeOriginal", "DateTimeDigitized", "DateTime")

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"

_EXIF_DATE = re.compile(r"^(\d{4}):(\d{2}):(\d{2}) (\d{2}):(\d{2}):(\d{2})$")

_GENERIC_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y:%m:%d %H:%M",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y:%m:%d",
    "%d.%m.%Y %H:%M:%S",
)


@dataclass(frozen=True)
class Metadata:
    captured_time: int | None = None
    captured_display: str | None = None
    camera_model: str | None = None
    orientation: int | None = None


def read_exif_tags(path: Path) -> dict[str, Any]:
    """Flatten IFD0 and the Exif sub-IFD into one name -> value mapping.

    A tag already present is never overwritten by a later section.
    """
    tags: dict[str, Any] = {}
    with Image.open(path) as img:
        exif = img.getexif()
        sections = [exif, exif.get_ifd(ExifTags.IFD.Exif)]
        for section in sections:
            for tag_id, value in section.items():
                name = ExifTags.TAGS.get(tag_id, str(tag_id))
                if name not in tags:
                    tags[name] = value
    return tags


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return str(value).strip("\x00 \t\r\n")


def pick_capture_value(tags: dict[str, Any]) -> str | None:
    """Return the first usable raw capture-time string, by tag priority."""
    for tag in CAPTURE_TAGS:
        if tag not in tags or tags[tag] is None:
            continue
        raw = _as_text(tags[tag])
        if raw and not raw.startswith("0000"):
            return raw
    return None


def normalize_date(raw: str) -> str:
    """Rewrite a date string into ``YYYY-MM-DD HH:MM:SS`` where possible.

    Unparseable values come back unchanged.
    """
    value = raw.strip()
    m = _EXIF_DATE.match(value)
    if m:
        return "{}-{}-{} {}:{}:{}".format(*m.groups())
    parsed = _parse_generic(value)
    if parsed is not None:
        return parsed.strftime(CANONICAL_FORMAT)
    return value


def _parse_generic(value: str) -> datetime | None:
    for fmt in _GENERIC_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    # Drop the offset so every timestamp is read as local wall-clock time
    return parsed.replace(tzinfo=None)


def to_timestamp(display: str) -> int | None:
    try:
        return int(datetime.strptime(display, CANONICAL_FORMAT).timestamp())
    except (ValueError, OverflowError, OSError):
        return None


def parse_orientation(value: Any) -> int | None:
    """Accept an int, a numeric string, or a description like "Rotate 90 CW"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 1 <= value <= 8 else None
    text = _as_text(value)
    if text.isdigit():
        code = int(text)
        return code if 1 <= code <= 8 else None

    lower = text.lower()
    if "90 cw" in lower:
        return 6
    if "90 ccw" in lower:
        return 8
    if "180" in lower:
        return 3
    m = re.search(r"[1-8]", text)
    if m:
        return int(m.group(0))
    return None


def metadata_from_tags(tags: dict[str, Any]) -> Metadata:
    captured_time = None
    captured_display = None
    raw = pick_capture_value(tags)
    if raw is not None:
        captured_display = normalize_date(raw)
        captured_time = to_timestamp(captured_display)

    model = tags.get("Model")
    camera_model = _as_text(model) if model is not None else ""

    return Metadata(
        captured_time=captured_time,
        captured_display=captured_display,
        camera_model=camera_model or None,
        orientation=parse_orientation(tags.get("Orientation")),
    )


def extract_metadata(path: str | Path) -> Metadata:
    """Read EXIF from ``path``; any failure yields an empty Metadata."""
    try:
        return metadata_from_tags(read_exif_tags(Path(path)))
    except Exception as e:
        logger.debug("No readable metadata in {}: {}", path, e)
        return Metadata()
