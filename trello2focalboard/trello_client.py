"""Trello authorization helpers and REST client with retry logic."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import Any, cast
from urllib.parse import urlencode

import requests

from trello2focalboard.exceptions import (
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)
from trello2focalboard.trello_export import TrelloBoard

logger = logging.getLogger(__name__)

TRELLO_CONNECT_URL = "https://trello.com/1/connect"


def build_auth_url(app_key: str, app_name: str = "trello-export") -> str:
    """Build the Trello authorization URL that hands out a read-only token

    The token expires after five minutes, which is plenty for one import.
    """
    params = {
        "key": app_key,
        "name": app_name,
        "response_type": "token",
        "scope": "account,read",
        "expiration": "5m",
    }
    return f"{TRELLO_CONNECT_URL}?{urlencode(params, safe=',')}"


def prompt_for_token(app_key: str, input_fn: Callable[[str], str] | None = None) -> str:
    """Ask the user to authorize the app in a browser and paste the token back"""
    logger.info(f"Follow link to get Token: {build_auth_url(app_key)}")
    return (input_fn or input)("Once you have the token, paste it here: ").strip()


class TrelloReader:
    """Download a board from the Trello REST API in export shape

    Used when no JSON export file is at hand. Only the pieces the converter
    reads are requested: board name and description, lists, cards (with
    attachments) and checklists.
    """

    def __init__(self, api_key: str, token: str, verify_ssl: bool = True):
        self.api_key = api_key
        self.token = token
        self.verify_ssl = verify_ssl
        self.base_url = "https://api.trello.com/1"

    @staticmethod
    def parse_board_url(url: str) -> str:
        """Extract board ID from Trello URL

        Supports formats:
        - https://trello.com/b/Bm0nnz1R/board-name
        - https://trello.com/b/Bm0nnz1R
        - trello.com/b/Bm0nnz1R/board-name

        Args:
            url: Trello board URL

        Returns:
            Board ID (8-character alphanumeric string)

        Raises:
            ValueError: If URL format is invalid or board ID cannot be extracted
        """
        if not url:
            raise ValueError("URL cannot be empty")

        match = re.search(r"trello\.com/b/([a-zA-Z0-9]+)", url)
        if match:
            return match.group(1)

        raise ValueError(f"Could not extract board ID from URL: {url}")

    @classmethod
    def resolve_board_id(cls, board: str) -> str:
        """Accept either a bare board ID or a board URL"""
        if "trello.com" in board:
            return cls.parse_board_url(board)
        if not board:
            raise ValueError("Board ID cannot be empty")
        return board

    def _request(self, endpoint: str, params: dict | None = None) -> Any:
        """Make authenticated request to Trello API with retry logic"""
        url = f"{self.base_url}/{endpoint}"
        auth_params = {"key": self.api_key, "token": self.token}
        if params:
            auth_params.update(params)

        # Retry logic with exponential backoff for transient failures
        max_retries = 3
        base_delay = 1.0
        retry_statuses = {429, 500, 502, 503, 504}

        last_exception: requests.RequestException | None = None
        for attempt in range(max_retries):
            try:
                response = requests.get(
                    url, params=auth_params, timeout=30, verify=self.verify_ssl
                )
                response.raise_for_status()
                return cast(Any, response.json())

            except requests.HTTPError as e:
                last_exception = e
                status_code = e.response.status_code if e.response is not None else 0
                response_text = e.response.text if e.response is not None else ""

                if status_code not in retry_statuses:
                    if status_code == 401:
                        raise TrelloAuthenticationError(
                            "Invalid API credentials. Check your app key and token.\n"
                            "Get an app key at: https://trello.com/power-ups/admin",
                            status_code=status_code,
                            response_text=response_text,
                        ) from e
                    elif status_code == 403:
                        raise TrelloAuthenticationError(
                            f"Access forbidden to resource: {endpoint}\n"
                            "Your token may not have permission to read this board.",
                            status_code=status_code,
                            response_text=response_text,
                        ) from e
                    elif status_code == 404:
                        raise TrelloNotFoundError(
                            f"Resource not found: {endpoint}\n"
                            "Check that your board ID is correct and the board exists.",
                            status_code=status_code,
                            response_text=response_text,
                        ) from e
                    else:
                        raise TrelloAPIError(
                            f"HTTP {status_code} error for {endpoint}: {response_text[:200]}",
                            status_code=status_code,
                            response_text=response_text,
                        ) from e

                # Don't delay after last attempt
                if attempt < max_retries - 1:
                    delay = base_delay * (2**attempt)  # 1s, 2s, 4s
                    logger.debug(f"HTTP {status_code} from {endpoint}, retrying in {delay:.0f}s")
                    time.sleep(delay)

            except requests.RequestException as e:
                last_exception = e
                if attempt < max_retries - 1:
                    delay = base_delay * (2**attempt)
                    time.sleep(delay)
                else:
                    raise TrelloAPIError(
                        f"Network error after {max_retries} attempts: {str(e)}\n"
                        "Check your internet connection and try again.",
                    ) from e

        # All retries exhausted for transient HTTP errors
        if isinstance(last_exception, requests.HTTPError):
            response = last_exception.response
            status_code = response.status_code if response is not None else 0
            response_text = response.text if response is not None else ""

            if status_code == 429:
                raise TrelloRateLimitError(
                    f"Rate limit exceeded after {max_retries} retry attempts.\n"
                    "Wait a few minutes and try again.",
                    status_code=status_code,
                    response_text=response_text,
                ) from last_exception
            raise TrelloServerError(
                f"Trello server error (HTTP {status_code}) persisted after "
                f"{max_retries} retries.\n"
                "Trello's servers may be experiencing issues. Try again later.",
                status_code=status_code,
                response_text=response_text,
            ) from last_exception

        raise TrelloAPIError(f"Request failed after {max_retries} retries: {last_exception}")

    def _paginated_request(self, endpoint: str, params: dict | None = None) -> list[dict]:
        """Make paginated requests to handle Trello's 1000-item limit

        Pages backwards using the ID of the last item as the 'before'
        parameter until a short page comes back.
        """
        all_items: list[dict] = []
        request_params = params.copy() if params else {}
        request_params["limit"] = 1000  # Maximum allowed by Trello

        while True:
            page_items = self._request(endpoint, request_params)

            if not isinstance(page_items, list):
                return cast(list[dict], page_items)

            all_items.extend(page_items)

            if len(page_items) < 1000:
                break

            last_item_id = page_items[-1].get("id")
            if not last_item_id:
                break

            request_params["before"] = last_item_id

        return all_items

    def get_board_export(self, board_id: str) -> TrelloBoard:
        """Fetch a board in the same shape as Trello's JSON export

        Args:
            board_id: Trello board ID

        Returns:
            Board dict with name, desc, lists, cards and checklists

        Raises:
            TrelloAPIError: (or a subclass) if any request fails
        """
        logger.info(f"🌐 Fetching board {board_id} from Trello API...")
        board = cast(dict, self._request(f"boards/{board_id}", {"fields": "name,desc,url"}))
        lists = self._request(f"boards/{board_id}/lists", {"fields": "id,name,pos,closed"})
        cards = self._paginated_request(
            f"boards/{board_id}/cards",
            {
                "fields": "id,name,desc,idList,idChecklists,pos",
                "attachments": "true",
                "attachment_fields": "id,name,url",
            },
        )
        checklists = self._request(
            f"boards/{board_id}/checklists", {"checkItem_fields": "id,name,state,pos"}
        )
        logger.info(
            f"✅ Fetched {len(lists)} lists, {len(cards)} cards, {len(checklists)} checklists"
        )

        export = {
            "id": board.get("id", board_id),
            "name": board.get("name", ""),
            "desc": board.get("desc", ""),
            "lists": lists,
            "cards": cards,
            "checklists": checklists,
        }
        return cast(TrelloBoard, export)
