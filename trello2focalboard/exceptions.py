"""Custom exception classes for trello2focalboard.

This module defines the exception hierarchy for reading Trello exports,
talking to the Trello API, and writing Focalboard archives. The converter
itself never raises these; they belong to the I/O around it.
"""

from __future__ import annotations

from pathlib import Path


class TrelloAPIError(Exception):
    """Base exception for Trello API errors"""

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class TrelloAuthenticationError(TrelloAPIError):
    """Raised when the app key or token is invalid or expired (401/403)"""

    pass


class TrelloNotFoundError(TrelloAPIError):
    """Raised when a board is not found (404)"""

    pass


class TrelloRateLimitError(TrelloAPIError):
    """Raised when rate limit is exceeded (429) after retries"""

    pass


class TrelloServerError(TrelloAPIError):
    """Raised when Trello's servers return an error (500/502/503/504)"""

    pass


class TrelloExportError(Exception):
    """Base exception for problems with a Trello export file.

    Attributes:
        path: The export file that could not be used (if known)
    """

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = str(path) if path is not None else None
        super().__init__(message)


class ExportNotFoundError(TrelloExportError):
    """Raised when the export file does not exist.

    Resolution:
        Export the board from Trello (Menu → Print, export, and share →
        Export as JSON) and pass the downloaded file with -i.
    """

    pass


class InvalidExportError(TrelloExportError):
    """Raised when the export file is not a JSON object.

    This can occur when:
    - The file is truncated or not JSON at all
    - The file holds a JSON array or scalar instead of a board object
    """

    pass


class ArchiveWriteError(Exception):
    """Raised when the Focalboard archive cannot be written.

    Attributes:
        path: The output path that failed
    """

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = str(path) if path is not None else None
        super().__init__(message)
