"""Zip bundling of the input directory."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB")


def archive_directory(source_dir: Path) -> bytes:
    """Zip every regular file below ``source_dir``, paths relative to it."""
    source_dir = Path(source_dir)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False) as z:
        for f in sorted(source_dir.rglob("*")):
            if f.is_file():
                z.write(f, f.relative_to(source_dir).as_posix())
    return buf.getvalue()


def format_bytes(size: int) -> str:
    """Human readable size with decimal (1000-based) units, e.g. ``1.5 MB``."""
    size = max(size, 0)
    if size == 0:
        return "0 B"
    power = 0
    while power < len(BYTE_UNITS) - 1 and size >= 1000 ** (power + 1):
        power += 1
    value = size / (1000 ** power)
    precision = 0 if power == 0 or value >= 10 else 1
    return f"{value:,.{precision}f} {BYTE_UNITS[power]}"
