"""Convert Trello board exports into Focalboard archives."""

from __future__ import annotations

# Import archive writer from extracted module
from trello2focalboard.archive import build_block_archive, write_archive

# Import attachment hook
from trello2focalboard.attachments import AttachmentFetcher, LoggingAttachmentFetcher

# Import block model
from trello2focalboard.blocks import (
    BLOCK_TYPES,
    Block,
    Board,
    BoardView,
    Card,
    CheckboxBlock,
    PropertyOption,
    PropertyTemplate,
    TextBlock,
    create_guid,
)

# Import CLI from extracted module
from trello2focalboard.cli import main

# Import converter from extracted module
from trello2focalboard.converter import TrelloToFocalboardConverter

# Import exceptions from extracted module
from trello2focalboard.exceptions import (
    ArchiveWriteError,
    ExportNotFoundError,
    InvalidExportError,
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloExportError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)

# Import logging configuration
from trello2focalboard.logging_config import setup_logging

# Import Trello client and export loader
from trello2focalboard.trello_client import TrelloReader, build_auth_url, prompt_for_token
from trello2focalboard.trello_export import load_trello_export

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "TrelloToFocalboardConverter",
    "TrelloReader",
    "LoggingAttachmentFetcher",
    "AttachmentFetcher",
    "load_trello_export",
    "build_block_archive",
    "write_archive",
    "build_auth_url",
    "prompt_for_token",
    "setup_logging",
    # Blocks
    "BLOCK_TYPES",
    "Block",
    "Board",
    "BoardView",
    "Card",
    "CheckboxBlock",
    "TextBlock",
    "PropertyOption",
    "PropertyTemplate",
    "create_guid",
    # Exceptions
    "TrelloAPIError",
    "TrelloAuthenticationError",
    "TrelloNotFoundError",
    "TrelloRateLimitError",
    "TrelloServerError",
    "TrelloExportError",
    "ExportNotFoundError",
    "InvalidExportError",
    "ArchiveWriteError",
    # CLI
    "main",
]
