"""moresleep API client: the talk source for all conferences."""

from datetime import datetime
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.console import Console

from talks_indexer.config import ServiceCredentials
from talks_indexer.errors import NotFoundError, SourceError, TalkNotFoundError
from talks_indexer.models import Conference, Speaker, Talk

console = Console()

DEFAULT_TIMEOUT = 30.0


class RawDataValue(BaseModel):
    """One field of a session or speaker, flagged public or private."""

    value: Any = None
    private_data: bool = Field(default=False, alias="privateData")


class RawConference(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    slug: str = ""


class RawSpeaker(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    email: Optional[str] = None
    data: dict[str, RawDataValue] = Field(default_factory=dict)


class RawSession(BaseModel):
    """Raw session record from the moresleep API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    conference_id: str = Field(alias="conferenceId")
    status: str = ""
    posted_by: Optional[str] = Field(default=None, alias="postedBy")
    data: dict[str, RawDataValue] = Field(default_factory=dict)
    speakers: list[RawSpeaker] = Field(default_factory=list)
    created: Optional[datetime] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")

    @field_validator("created", "last_updated", mode="before")
    @classmethod
    def blank_time_is_none(cls, v):
        # moresleep sends "" for sessions that were never updated
        return v or None


def split_data(fields: dict[str, RawDataValue]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split flagged fields into (public, private) mappings."""
    public: dict[str, Any] = {}
    private: dict[str, Any] = {}
    for key, field in fields.items():
        if field.private_data:
            private[key] = field.value
        else:
            public[key] = field.value
    return public, private


def transform_speaker(raw: RawSpeaker) -> Speaker:
    data, private_data = split_data(raw.data)
    if raw.email:
        private_data["email"] = raw.email
    return Speaker(id=raw.id, name=raw.name, data=data, private_data=private_data)


def transform_session(raw: RawSession, conference_slug: str, conference_name: str) -> Talk:
    """Transform a raw moresleep session into our Talk model."""
    data, private_data = split_data(raw.data)
    if raw.posted_by:
        private_data["postedBy"] = raw.posted_by

    return Talk(
        id=raw.id,
        conference_id=raw.conference_id,
        conference_slug=conference_slug,
        conference_name=conference_name,
        status=raw.status,
        data=data,
        private_data=private_data,
        speakers=[transform_speaker(s) for s in raw.speakers],
        created=raw.created,
        last_updated=raw.last_updated,
    )


def _unwrap_list(payload: Any, key: str) -> list:
    # The API returns {"<key>": [...]}; older deployments return a bare list
    if isinstance(payload, dict):
        return payload.get(key) or []
    if isinstance(payload, list):
        return payload
    raise SourceError(f"unexpected {key} payload: {type(payload).__name__}")


class MoresleepClient:
    """Read-only client for conferences and sessions in moresleep.

    `auth` is a (user, password) pair for HTTP Basic auth, or None.
    """

    def __init__(
        self,
        base_url: str,
        auth: Optional[tuple[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            timeout=DEFAULT_TIMEOUT,
        )

    @classmethod
    def from_config(cls, config: ServiceCredentials) -> "MoresleepClient":
        return cls(config.url, auth=config.auth)

    async def __aenter__(self) -> "MoresleepClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(
        self, path: str, what: str, not_found: Optional[NotFoundError] = None
    ) -> Any:
        """GET `path` and decode the JSON body.

        Any non-200 answer is a SourceError, except a 404 when `not_found`
        is given: that error is raised instead.
        """
        try:
            response = await self._client.get(path, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise SourceError(f"failed to execute request for {what}: {e}") from e

        if response.status_code == 404 and not_found is not None:
            raise not_found
        if response.status_code != 200:
            console.print(f"[red]moresleep request failed: {response.status_code} {path}[/red]")
            raise SourceError(
                f"unexpected status code: {response.status_code}, body: {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise SourceError(f"failed to unmarshal {what}: {e}") from e

    async def get_conferences(self) -> list[Conference]:
        """Fetch all conferences."""
        try:
            payload = await self._get("/data/conference", "conferences")
            raw = [RawConference.model_validate(c) for c in _unwrap_list(payload, "conferences")]
        except ValidationError as e:
            raise SourceError(f"failed to unmarshal conferences: {e}") from e

        conferences = [Conference(id=c.id, name=c.name, slug=c.slug) for c in raw]
        console.print(f"[dim]Fetched {len(conferences)} conferences from moresleep[/dim]")
        return conferences

    async def get_talks(self, conference_id: str) -> list[Talk]:
        """Fetch every session of one conference."""
        path = f"/data/conference/{conference_id}/session"
        try:
            payload = await self._get(path, "sessions")
            sessions = [RawSession.model_validate(s) for s in _unwrap_list(payload, "sessions")]
        except ValidationError as e:
            raise SourceError(f"failed to unmarshal sessions: {e}", identifier=conference_id) from e

        slug, name = await self._conference_details(conference_id)
        return [transform_session(s, slug, name) for s in sessions]

    async def get_talk(self, talk_id: str) -> Talk:
        """Fetch one session by id.

        Raises:
            TalkNotFoundError: if moresleep answers 404.
            SourceError: for any other failure.
        """
        not_found = TalkNotFoundError(f"talk not found: {talk_id}", identifier=talk_id)
        try:
            payload = await self._get(f"/data/session/{talk_id}", "session", not_found)
            session = RawSession.model_validate(payload)
        except ValidationError as e:
            raise SourceError(f"failed to unmarshal session: {e}", identifier=talk_id) from e

        slug, name = await self._conference_details(session.conference_id)
        return transform_session(session, slug, name)

    async def _conference_details(self, conference_id: str) -> tuple[str, str]:
        """Look up (slug, name) for a conference id; blanks if unknown."""
        try:
            conferences = await self.get_conferences()
        except SourceError as e:
            raise e.wrap("failed to fetch conferences to get details") from e

        for conf in conferences:
            if conf.id == conference_id:
                return conf.slug, conf.name

        console.print(f"[yellow]Conference {conference_id} not found, using empty slug/name[/yellow]")
        return "", ""
