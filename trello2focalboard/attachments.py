"""Attachment retrieval hook.

Focalboard archives have nowhere to put binary files, so the default
fetcher only reports what it would download. Anything implementing
``AttachmentFetcher`` can be handed to the converter instead.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class AttachmentFetcher(Protocol):
    def fetch(self, url: str, token: str, app_key: str) -> None: ...


class LoggingAttachmentFetcher:
    """Default fetcher: logs each attachment URL and downloads nothing."""

    def fetch(self, url: str, token: str, app_key: str) -> None:
        # Credentials are accepted for interface parity but never logged
        logger.info(f"  📎 Attachment not imported: {url}")
