"""Deterministic download filenames and image export.

Downloaded files are named ``<index:03d>_<DDMonYYYY>.png``, e.g.
``007_05Jun2024.png`` for the seventh image of a batch generated on
5 June 2024. Month abbreviations are fixed English names so the result does
not depend on the process locale.
"""

import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from .models import GenerationResult

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


def format_download_date(d: date) -> str:
    return f"{d.day:02d}{MONTH_ABBREVIATIONS[d.month - 1]}{d.year}"


def download_filename(index: int, d: date) -> str:
    return f"{index:03d}_{format_download_date(d)}.png"


def save_result(result: GenerationResult, out_dir: Path) -> Path:
    """Write a finished result as PNG under its download filename.

    Args:
        result: A succeeded generation result
        out_dir: Target directory (created if missing)

    Returns:
        Path of the written file

    Raises:
        ValueError: If the result has no image
    """
    if not result.has_image:
        raise ValueError(f"Result {result.index} has no image to download")

    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / download_filename(result.index, result.created_at.date())
    result.image.save(path, format="PNG")
    logger.info(f"Saved {path}")
    return path


def save_batch(results: Iterable[GenerationResult], out_dir: Path) -> list[Path]:
    """Write every finished result of a batch, skipping pending and failed ones."""
    return [save_result(result, out_dir) for result in results if result.has_image]
