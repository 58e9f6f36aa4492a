"""Run configuration: defaults and validation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from snig.errors import ConfigError

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_THUMBNAIL_SIZE = 200
DEFAULT_DETAIL_SIZE = 1000
DEFAULT_SORT_BY = "created"

SORT_KEYS = ("created", "mtime")
FORCE_KEYS = frozenset({"resize", "zip"})

ASSET_DIR = Path(__file__).parent / "assets"
STYLESHEET = "snig.css"


def parse_force(values: Iterable[str] | None) -> frozenset[str]:
    """Flatten repeated, comma or space separated --force values."""
    result: set[str] = set()
    for value in values or ():
        for part in re.split(r"[,\s]+", value):
            if part:
                result.add(part.lower())
    return frozenset(result)


def default_name(input_dir: str | Path) -> str:
    return Path(str(input_dir).rstrip("/\\")).name


@dataclass
class GalleryConfig:
    """Everything one gallery build needs."""

    input_dir: Path
    output_dir: Path
    name: str = ""
    thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE
    detail_size: int = DEFAULT_DETAIL_SIZE
    sort_by: str = DEFAULT_SORT_BY
    force: frozenset[str] = field(default_factory=frozenset)
    asset_dir: Path = ASSET_DIR

    def __post_init__(self) -> None:
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        self.asset_dir = Path(self.asset_dir)
        self.sort_by = self.sort_by.lower()
        self.force = frozenset(f.lower() for f in self.force)
        if not self.name:
            self.name = default_name(self.input_dir)

    @property
    def force_resize(self) -> bool:
        return "resize" in self.force

    @property
    def force_zip(self) -> bool:
        return "zip" in self.force

    def validate(self) -> None:
        if self.sort_by not in SORT_KEYS:
            raise ConfigError(f"Invalid sort key {self.sort_by!r}. Use 'created' or 'mtime'.")
        if self.thumbnail_size <= 0 or self.detail_size <= 0:
            raise ConfigError("Thumbnail and detail sizes must be positive integers")
        unknown = self.force - FORCE_KEYS
        if unknown:
            raise ConfigError(f"Unknown --force value(s): {', '.join(sorted(unknown))}")
