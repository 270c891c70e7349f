"""CLI entry point for trello2focalboard converter."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from trello2focalboard.archive import DEFAULT_ARCHIVE_NAME, write_archive
from trello2focalboard.converter import TrelloToFocalboardConverter
from trello2focalboard.exceptions import (
    ArchiveWriteError,
    ExportNotFoundError,
    TrelloAPIError,
    TrelloExportError,
)
from trello2focalboard.logging_config import setup_logging
from trello2focalboard.trello_client import TrelloReader, prompt_for_token
from trello2focalboard.trello_export import TrelloBoard, load_trello_export

logger = logging.getLogger("trello2focalboard.cli")

# Module docstring for --help
__doc__ = """
trello2focalboard - Convert a Trello board export into a Focalboard archive

Usage:
    trello2focalboard -i <input.json> [-o output.focalboard] [-k trello-app-key]

    # Convert a JSON export (Trello: Menu → Print, export, and share → Export as JSON)
    trello2focalboard -i board.json -o board.focalboard

    # Authorize with an app key (prompts for a token unless TRELLO_TOKEN is set)
    trello2focalboard -i board.json -k <app-key>

    # Download the board from the Trello API instead of reading a file
    export TRELLO_API_KEY="your-key"
    export TRELLO_TOKEN="your-token"
    trello2focalboard --board https://trello.com/b/Bm0nnz1R/my-board

Options:
    -i, --input PATH      Trello JSON export to convert
    -o, --output PATH     Archive to write (default: archive.focalboard)
    -k, --key KEY         Trello app key (default: $TRELLO_API_KEY)
    --board ID|URL        Fetch the board from the Trello API instead of -i
    --no-verify-ssl       Disable SSL verification for --board
    -v, --verbose         Debug logging
    -q, --quiet           Errors only
    --log-level LEVEL     DEBUG, INFO, WARNING or ERROR
    --log-file PATH       Also write the log to PATH
"""


def _flag_value(*names: str) -> str | None:
    """Return the argument following the first of names present in sys.argv"""
    for name in names:
        if name in sys.argv:
            idx = sys.argv.index(name)
            if idx + 1 >= len(sys.argv) or sys.argv[idx + 1].startswith("-"):
                logger.error(f"❌ Error: {name} requires a value")
                sys.exit(1)
            return sys.argv[idx + 1]
    return None


def _load_env_file() -> None:
    """Load KEY=VALUE lines from .env without overriding the environment"""
    env_file = os.getenv("TRELLO_ENV_FILE", ".env")
    if not Path(env_file).exists():
        return
    with open(env_file) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                if key not in os.environ:
                    os.environ[key] = value


def show_help() -> None:
    print(__doc__)
    sys.exit(1)


def main() -> None:
    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    # Parse logging flags
    log_level = "INFO"
    if "--verbose" in sys.argv or "-v" in sys.argv:
        log_level = "DEBUG"
    elif "--quiet" in sys.argv or "-q" in sys.argv:
        log_level = "ERROR"
    elif "--log-level" in sys.argv:
        log_level = (_flag_value("--log-level") or log_level).upper()
    log_file = _flag_value("--log-file")

    try:
        setup_logging(log_level, log_file)
    except ValueError as e:
        setup_logging("INFO")
        logger.error(f"❌ Error: {e}")
        sys.exit(1)
    _load_env_file()

    input_file = _flag_value("-i", "--input")
    output_file = _flag_value("-o", "--output") or DEFAULT_ARCHIVE_NAME
    board = _flag_value("--board")
    key_flag = _flag_value("-k", "--key")
    app_key = key_flag or os.getenv("TRELLO_API_KEY", "")
    no_verify_ssl = "--no-verify-ssl" in sys.argv

    if not input_file and not board:
        show_help()

    if input_file and not Path(input_file).exists():
        logger.error(f"File not found: {input_file}")
        sys.exit(2)

    # Authenticate to Trello (token is only needed for attachments and --board).
    # Only an explicit -k asks interactively; a key from the environment never blocks.
    auth_token = os.getenv("TRELLO_TOKEN", "") if app_key else ""
    if key_flag and not auth_token:
        try:
            auth_token = prompt_for_token(key_flag)
        except (EOFError, KeyboardInterrupt):
            logger.error("❌ Error: no Trello token entered (set TRELLO_TOKEN to skip the prompt)")
            sys.exit(1)

    export: TrelloBoard
    try:
        if input_file:
            export = load_trello_export(input_file)
        else:
            assert board is not None
            if not app_key or not auth_token:
                logger.error("❌ Error: --board needs a Trello app key and token")
                logger.error("  Pass -k <app-key> (or set TRELLO_API_KEY) and paste the token")
                logger.error("  when prompted (or set TRELLO_TOKEN)")
                sys.exit(1)

            if no_verify_ssl:
                import urllib3

                urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
                logger.info("🔓 SSL verification disabled")

            reader = TrelloReader(app_key, auth_token, verify_ssl=not no_verify_ssl)
            export = reader.get_board_export(TrelloReader.resolve_board_id(board))
    except ExportNotFoundError as e:
        logger.error(str(e))
        sys.exit(2)
    except (TrelloExportError, TrelloAPIError, ValueError) as e:
        logger.error(f"❌ Could not read board: {e}")
        sys.exit(1)

    converter = TrelloToFocalboardConverter()
    try:
        blocks = converter.convert(export, auth_token, app_key)
    except (KeyError, TypeError, AttributeError) as e:
        logger.error(f"❌ Conversion failed, export is missing or has malformed data: {e!r}")
        sys.exit(1)

    try:
        written = write_archive(blocks, output_file)
    except ArchiveWriteError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    logger.info(f"Exported to {written}")


if __name__ == "__main__":
    main()
