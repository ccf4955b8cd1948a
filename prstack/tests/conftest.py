"""Configuration for pytest."""

import logging
from typing import Generator

import pytest

from prstack.github import RecordStore
from prstack.tests.fake_github import FakeRepository

@pytest.fixture
def repo() -> FakeRepository:
    """An empty fake repository."""
    return FakeRepository()

@pytest.fixture
def store(repo: FakeRepository) -> RecordStore:
    """A record store over the fake repository."""
    return RecordStore(repo)

@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
