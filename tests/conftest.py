"""
Shared pytest fixtures for trello2focalboard tests
"""
import json
import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees records in every test"""
    yield
    logger = logging.getLogger("trello2focalboard")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def simple_board_fixture(fixtures_dir):
    """Load simple board test fixture (one list, one card)"""
    with open(fixtures_dir / "simple_board.json") as f:
        return json.load(f)


@pytest.fixture
def board_with_checklists_fixture(fixtures_dir):
    """Load board with checklists, attachments and broken references"""
    with open(fixtures_dir / "board_with_checklists.json") as f:
        return json.load(f)


@pytest.fixture
def empty_board_fixture(fixtures_dir):
    """Load empty board test fixture"""
    with open(fixtures_dir / "empty_board.json") as f:
        return json.load(f)


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = [0]

    def factory():
        counter[0] += 1
        return f"id-{counter[0]}"

    return factory
