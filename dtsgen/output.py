"""Filesystem side of a generation run: cleaning, writing and patch copying."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, List

from .emitter.core import RAW_DECLARATION_FILES
from .emitter.paths import DTS_SUFFIX
from .logging import get_logger

PATCHES_DIRNAME = "patches"

logger = get_logger("output")


def clean_output(output_dir: Path, preserve: Iterable[str] = RAW_DECLARATION_FILES) -> List[Path]:
    """Delete generated ``.d.ts`` files below ``output_dir``.

    Files whose name appears in ``preserve`` are kept, as is anything that
    is not a declaration file.
    """
    if not output_dir.is_dir():
        return []

    keep = set(preserve)
    removed: List[Path] = []
    for path in sorted(output_dir.rglob(f"*{DTS_SUFFIX}")):
        if not path.is_file() or path.name in keep:
            continue
        path.unlink()
        removed.append(path)

    logger.info("Cleaned %d declaration file(s) from %s", len(removed), output_dir)
    return removed


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def copy_patches(patches_dir: Path, output_dir: Path) -> Path | None:
    """Mirror ``patches_dir`` into ``<output_dir>/patches``, replacing any previous copy."""
    if not patches_dir.is_dir():
        logger.warning("Patches directory not found: %s", patches_dir)
        return None

    target = output_dir / PATCHES_DIRNAME
    if target.exists():
        shutil.rmtree(target)
    shutil.copytree(patches_dir, target)
    logger.info("Copied patches from %s", patches_dir)
    return target


__all__ = ["PATCHES_DIRNAME", "clean_output", "copy_patches", "write_text"]
