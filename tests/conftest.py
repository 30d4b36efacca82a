"""Shared test fixtures."""

import pytest

from helpers import FakeSearchIndex, make_talk
from talks_indexer.models import Conference, Talk


@pytest.fixture
def conference() -> Conference:
    return Conference(id="conf-1", name="JavaZone 2024", slug="javazone2024")


@pytest.fixture
def sample_talk() -> Talk:
    """An approved talk with both public and private fields."""
    return make_talk(
        "talk-1",
        data={"title": "Introduction to Go", "abstract": "Goroutines for everyone"},
        private_data={"postedBy": "speaker@example.com", "infoToProgramCommittee": "Please pick me"},
    )


@pytest.fixture
def search_index() -> FakeSearchIndex:
    return FakeSearchIndex()


