"""
Unit tests for Trello authorization helpers and TrelloReader
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

# Add parent directory to path to import trello2focalboard module
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from trello2focalboard import (
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloReader,
    TrelloServerError,
    build_auth_url,
    prompt_for_token,
)


def ok_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def error_response(status_code, text="error"):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


class TestAuthorization:
    """Token exchange helpers"""

    def test_build_auth_url(self):
        assert build_auth_url("abc123") == (
            "https://trello.com/1/connect?key=abc123&name=trello-export"
            "&response_type=token&scope=account,read&expiration=5m"
        )

    def test_prompt_for_token_strips_input(self):
        prompts = []

        def fake_input(prompt):
            prompts.append(prompt)
            return "  pasted-token \n"

        token = prompt_for_token("abc123", input_fn=fake_input)

        assert token == "pasted-token"
        assert prompts == ["Once you have the token, paste it here: "]

    def test_prompt_for_token_uses_builtin_input_by_default(self):
        """input() is looked up at call time so patching builtins reaches it"""
        with patch("builtins.input", return_value="tok\n") as mock_input:
            token = prompt_for_token("abc123")

        assert token == "tok"
        mock_input.assert_called_once_with("Once you have the token, paste it here: ")


class TestBoardURLParsing:
    """Test parse_board_url() and resolve_board_id()"""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://trello.com/b/Bm0nnz1R/my-board-name", "Bm0nnz1R"),
            ("http://trello.com/b/ABC123XY/test-board", "ABC123XY"),
            ("trello.com/b/XYZ789AB/board", "XYZ789AB"),
            ("https://trello.com/b/12345678", "12345678"),
            ("https://trello.com/b/TEST123A/board?menu=filter", "TEST123A"),
        ],
    )
    def test_parse_board_url(self, url, expected):
        assert TrelloReader.parse_board_url(url) == expected

    def test_parse_invalid_url(self):
        with pytest.raises(ValueError, match="Could not extract board ID"):
            TrelloReader.parse_board_url("https://trello.com/c/abc123/card")

    def test_parse_empty_url(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            TrelloReader.parse_board_url("")

    def test_resolve_board_id_passes_plain_ids(self):
        assert TrelloReader.resolve_board_id("Bm0nnz1R") == "Bm0nnz1R"
        assert TrelloReader.resolve_board_id("https://trello.com/b/Bm0nnz1R/x") == "Bm0nnz1R"

    def test_resolve_board_id_rejects_empty(self):
        with pytest.raises(ValueError):
            TrelloReader.resolve_board_id("")


class TestRequest:
    """Retry logic and error mapping in _request()"""

    def test_sends_credentials_and_ssl_setting(self):
        reader = TrelloReader(api_key="k", token="t", verify_ssl=False)

        with patch("requests.get", return_value=ok_response({"id": "b"})) as mock_get:
            result = reader._request("boards/b", {"fields": "name"})

        assert result == {"id": "b"}
        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.trello.com/1/boards/b"
        assert kwargs["params"] == {"key": "k", "token": "t", "fields": "name"}
        assert kwargs["verify"] is False

    def test_retry_on_429_then_success(self):
        reader = TrelloReader(api_key="k", token="t")

        with (
            patch("requests.get") as mock_get,
            patch("time.sleep") as mock_sleep,
        ):
            mock_get.side_effect = [error_response(429), ok_response({"ok": True})]
            result = reader._request("boards/b")

        assert result == {"ok": True}
        assert mock_get.call_count == 2
        mock_sleep.assert_called_once_with(1.0)

    def test_429_exhausted_raises_rate_limit_error(self):
        reader = TrelloReader(api_key="k", token="t")

        with (
            patch("requests.get", return_value=error_response(429)) as mock_get,
            patch("time.sleep") as mock_sleep,
        ):
            with pytest.raises(TrelloRateLimitError) as exc_info:
                reader._request("boards/b")

        assert mock_get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]
        assert exc_info.value.status_code == 429

    def test_5xx_exhausted_raises_server_error(self):
        reader = TrelloReader(api_key="k", token="t")

        with (
            patch("requests.get", return_value=error_response(503)),
            patch("time.sleep"),
        ):
            with pytest.raises(TrelloServerError) as exc_info:
                reader._request("boards/b")

        assert exc_info.value.status_code == 503

    @pytest.mark.parametrize(
        "status,error_cls",
        [
            (401, TrelloAuthenticationError),
            (403, TrelloAuthenticationError),
            (404, TrelloNotFoundError),
            (400, TrelloAPIError),
        ],
    )
    def test_non_retryable_errors(self, status, error_cls):
        reader = TrelloReader(api_key="k", token="t")

        with (
            patch("requests.get", return_value=error_response(status, "nope")) as mock_get,
            patch("time.sleep") as mock_sleep,
        ):
            with pytest.raises(error_cls) as exc_info:
                reader._request("boards/b")

        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()
        assert exc_info.value.status_code == status
        assert exc_info.value.response_text == "nope"

    def test_network_error_after_retries(self):
        reader = TrelloReader(api_key="k", token="t")

        with (
            patch("requests.get", side_effect=requests.ConnectionError("down")) as mock_get,
            patch("time.sleep"),
        ):
            with pytest.raises(TrelloAPIError, match="Network error after 3 attempts"):
                reader._request("boards/b")

        assert mock_get.call_count == 3


class TestPagination:
    def test_follows_before_parameter(self):
        reader = TrelloReader(api_key="k", token="t")
        first_page = [{"id": f"c{i}"} for i in range(1000)]
        second_page = [{"id": "last"}]

        with patch.object(reader, "_request", side_effect=[first_page, second_page]) as mock_req:
            items = reader._paginated_request("boards/b/cards", {"fields": "id"})

        assert len(items) == 1001
        second_params = mock_req.call_args_list[1].args[1]
        assert second_params["before"] == "c999"
        assert second_params["limit"] == 1000

    def test_non_list_response_returned_as_is(self):
        reader = TrelloReader(api_key="k", token="t")

        with patch.object(reader, "_request", return_value={"id": "b"}):
            assert reader._paginated_request("boards/b") == {"id": "b"}


class TestGetBoardExport:
    def test_assembles_export_shape(self):
        reader = TrelloReader(api_key="k", token="t")
        responses_by_endpoint = {
            "boards/B1": {"id": "B1", "name": "Proj", "desc": "d", "url": "https://x"},
            "boards/B1/lists": [{"id": "L1", "name": "Todo"}],
            "boards/B1/cards": [{"id": "C1", "name": "Task", "idList": "L1"}],
            "boards/B1/checklists": [{"id": "CL1", "checkItems": []}],
        }

        def fake_request(endpoint, params=None):
            return responses_by_endpoint[endpoint]

        with patch.object(reader, "_request", side_effect=fake_request):
            export = reader.get_board_export("B1")

        assert export == {
            "id": "B1",
            "name": "Proj",
            "desc": "d",
            "lists": [{"id": "L1", "name": "Todo"}],
            "cards": [{"id": "C1", "name": "Task", "idList": "L1"}],
            "checklists": [{"id": "CL1", "checkItems": []}],
        }

    def test_card_request_includes_attachments_and_checklist_ids(self):
        reader = TrelloReader(api_key="k", token="t")
        seen = {}

        def fake_request(endpoint, params=None):
            seen[endpoint] = params
            return {} if endpoint == "boards/B1" else []

        with patch.object(reader, "_request", side_effect=fake_request):
            reader.get_board_export("B1")

        card_params = seen["boards/B1/cards"]
        assert card_params["attachments"] == "true"
        assert "idChecklists" in card_params["fields"]
        assert "idList" in card_params["fields"]
