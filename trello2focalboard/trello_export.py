"""Trello board export: source types and file loader.

Only the subset of the export that the converter reads is typed here.
Exports carry many more keys (labels, members, actions, ...); they pass
through untouched and are ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypedDict, cast

from trello2focalboard.exceptions import ExportNotFoundError, InvalidExportError

logger = logging.getLogger(__name__)


class TrelloList(TypedDict):
    id: str
    name: str


class TrelloCheckItem(TypedDict, total=False):
    id: str
    name: str
    state: str  # "complete" or "incomplete"


class TrelloChecklist(TypedDict, total=False):
    id: str
    name: str
    checkItems: list[TrelloCheckItem]


class TrelloAttachment(TypedDict, total=False):
    id: str
    name: str
    url: str


class TrelloCard(TypedDict, total=False):
    id: str
    name: str
    desc: str
    idList: str
    idChecklists: list[str]
    attachments: list[TrelloAttachment]


class TrelloBoard(TypedDict, total=False):
    id: str
    name: str
    desc: str
    lists: list[TrelloList]
    cards: list[TrelloCard]
    checklists: list[TrelloChecklist]


def load_trello_export(path: str | Path) -> TrelloBoard:
    """Load a Trello board export from a JSON file

    Args:
        path: Path to the JSON file downloaded from Trello

    Returns:
        The parsed board document

    Raises:
        ExportNotFoundError: If the file doesn't exist
        InvalidExportError: If the file isn't JSON or isn't a JSON object
    """
    export_path = Path(path)
    if not export_path.exists():
        raise ExportNotFoundError(f"File not found: {export_path}", path=export_path)

    try:
        with open(export_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidExportError(
            f"Invalid JSON in Trello export {export_path}: {e}", path=export_path
        ) from e

    if not isinstance(data, dict):
        raise InvalidExportError(
            f"Trello export must be a JSON object, got {type(data).__name__}", path=export_path
        )

    logger.debug("Loaded Trello export %s (%d keys)", export_path, len(data))
    return cast(TrelloBoard, data)
