from __future__ import annotations

import pytest

from fakes import FakeIndex, FakeIndexer, FakeStore


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def indexer() -> FakeIndexer:
    return FakeIndexer()
