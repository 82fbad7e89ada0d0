"""Filesystem and font introspection helpers for the glyph build."""

import logging
import os
import shutil
from io import BytesIO
from pathlib import Path
from typing import FrozenSet, List

from fontTools.ttLib import TTFont

FONT_EXTENSIONS = (".ttf", ".otf")

logger = logging.getLogger(__name__)


def find_font_files(root: Path) -> List[Path]:
    """
    Recursively collect TrueType/OpenType files under ``root``.

    Extensions are matched case-insensitively. The result is sorted so a fixed
    tree always yields the same order.

    Raises:
        FileNotFoundError: ``root`` does not exist.
        NotADirectoryError: ``root`` is not a directory.
        PermissionError: ``root`` or a directory below it cannot be listed.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Source directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {root}")

    def _raise(error: OSError) -> None:
        raise error

    fonts = []
    for dirpath, _, filenames in os.walk(root, onerror=_raise):
        for name in filenames:
            if Path(name).suffix.lower() in FONT_EXTENSIONS:
                fonts.append(Path(dirpath) / name)
    return sorted(fonts)


def clean_dist(dest: Path) -> None:
    """Remove ``dest`` and everything below it, then recreate it empty."""
    dest = Path(dest)
    if dest.exists():
        logger.info(f"Cleaning existing output directory: {dest}")
        shutil.rmtree(dest)
    dest.mkdir(parents=True, exist_ok=True)


def read_codepoints(font_data: bytes) -> FrozenSet[int]:
    """
    Return the codepoints mapped by the font's best Unicode cmap.

    Only the first face of a collection is read. A font without a Unicode
    cmap yields an empty set.
    """
    font = TTFont(BytesIO(font_data), fontNumber=0, lazy=True)
    try:
        cmap = font.getBestCmap()
    finally:
        font.close()
    return frozenset(cmap) if cmap else frozenset()
