"""In-memory gateway doubles and talk builders shared by the unit tests."""

from datetime import datetime, timezone
from typing import Any, Optional

from talks_indexer.errors import TalkNotFoundError
from talks_indexer.models import Conference, Speaker, Talk
from talks_indexer.pipeline import IndexerService

PRIVATE_INDEX = "private"
PUBLIC_INDEX = "public"
PRIVATE_MAPPING = {"mappings": {"private": True}}
PUBLIC_MAPPING = {"mappings": {"public": True}}


def make_talk(
    talk_id: str,
    status: str = "APPROVED",
    conference_id: str = "conf-1",
    data: Optional[dict] = None,
    private_data: Optional[dict] = None,
) -> Talk:
    return Talk(
        id=talk_id,
        conference_id=conference_id,
        conference_slug="javazone2024",
        conference_name="JavaZone 2024",
        status=status,
        data=data if data is not None else {"title": f"Talk {talk_id}"},
        private_data=private_data if private_data is not None else {"postedBy": "speaker@example.com"},
        speakers=[
            Speaker(
                id=f"speaker-{talk_id}",
                name="John Doe",
                data={"bio": "Expert Go developer"},
                private_data={"email": "john@example.com"},
            )
        ],
        created=datetime(2024, 3, 1, tzinfo=timezone.utc),
        last_updated=datetime(2024, 4, 1, tzinfo=timezone.utc),
    )


class FakeTalkSource:
    """Talk source backed by dicts; values that are exceptions get raised."""

    def __init__(
        self,
        conferences: Any = None,
        talks_by_conference: Optional[dict[str, Any]] = None,
        talks_by_id: Optional[dict[str, Any]] = None,
    ):
        self.conferences = conferences if conferences is not None else []
        self.talks_by_conference = talks_by_conference or {}
        self.talks_by_id = talks_by_id or {}
        self.get_talks_calls: list[str] = []

    async def get_conferences(self) -> list[Conference]:
        if isinstance(self.conferences, Exception):
            raise self.conferences
        return list(self.conferences)

    async def get_talks(self, conference_id: str) -> list[Talk]:
        self.get_talks_calls.append(conference_id)
        talks = self.talks_by_conference.get(conference_id, [])
        if isinstance(talks, Exception):
            raise talks
        return list(talks)

    async def get_talk(self, talk_id: str) -> Talk:
        talk = self.talks_by_id.get(talk_id)
        if isinstance(talk, Exception):
            raise talk
        if talk is None:
            raise TalkNotFoundError(f"talk not found: {talk_id}", identifier=talk_id)
        return talk


class FakeSearchIndex:
    """Records every call; `errors` maps a method name to the error it raises."""

    def __init__(self, existing: Optional[set[str]] = None, errors: Optional[dict] = None):
        self.existing = set(existing or ())
        self.errors = errors or {}
        self.calls: list[tuple] = []
        self.documents: dict[str, dict[str, Talk]] = {}

    def _maybe_fail(self, method: str, index_name: str) -> None:
        error = self.errors.get((method, index_name)) or self.errors.get(method)
        if error is not None:
            raise error

    async def bulk_index(self, index_name: str, talks: list[Talk]) -> None:
        self.calls.append(("bulk_index", index_name, [t.id for t in talks]))
        self._maybe_fail("bulk_index", index_name)
        docs = self.documents.setdefault(index_name, {})
        for talk in talks:
            docs[talk.id] = talk

    async def delete_index(self, index_name: str) -> None:
        self.calls.append(("delete_index", index_name))
        self._maybe_fail("delete_index", index_name)
        self.existing.discard(index_name)
        self.documents.pop(index_name, None)

    async def create_index(self, index_name: str, mapping: dict) -> None:
        self.calls.append(("create_index", index_name, mapping))
        self._maybe_fail("create_index", index_name)
        self.existing.add(index_name)

    async def index_exists(self, index_name: str) -> bool:
        self.calls.append(("index_exists", index_name))
        self._maybe_fail("index_exists", index_name)
        return index_name in self.existing

    def calls_named(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]


def build_service(source: FakeTalkSource, search_index: FakeSearchIndex) -> IndexerService:
    return IndexerService(
        source,
        search_index,
        private_index=PRIVATE_INDEX,
        public_index=PUBLIC_INDEX,
        private_mapping=PRIVATE_MAPPING,
        public_mapping=PUBLIC_MAPPING,
    )
