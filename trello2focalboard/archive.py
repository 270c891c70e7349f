"""Focalboard archive writer.

An archive is a single JSON object::

    {"version": 1, "date": <epoch millis>, "blocks": [<block>, ...]}

with blocks in the order the converter produced them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from trello2focalboard.blocks import Block, now_millis
from trello2focalboard.exceptions import ArchiveWriteError

logger = logging.getLogger(__name__)

ARCHIVE_VERSION = 1
DEFAULT_ARCHIVE_NAME = "archive.focalboard"


def build_block_archive(blocks: Sequence[Block], date: int | None = None) -> str:
    """Serialize blocks into Focalboard archive JSON text"""
    archive = {
        "version": ARCHIVE_VERSION,
        "date": date if date is not None else now_millis(),
        "blocks": [block.to_dict() for block in blocks],
    }
    return json.dumps(archive)


def write_archive(blocks: Sequence[Block], output_path: str | Path) -> Path:
    """Write blocks to a .focalboard archive file

    Args:
        blocks: Blocks to write, in import order
        output_path: Destination file (parent directories are created)

    Returns:
        The path written

    Raises:
        ArchiveWriteError: If the file cannot be written
    """
    path = Path(output_path)
    content = build_block_archive(blocks)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ArchiveWriteError(f"Cannot write archive to {path}: {e}", path=path) from e

    logger.debug("Wrote %d blocks (%d bytes) to %s", len(blocks), len(content), path)
    return path
