"""Error classification for reindex operations."""

from typing import Optional


class IndexerError(Exception):
    """Base error for all reindex failures."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier

    def wrap(self, context: str) -> "IndexerError":
        """Return an error of the same kind with `context` prefixed."""
        return type(self)(f"{context}: {self}", identifier=self.identifier)


class ConfigError(IndexerError):
    """Invalid or incomplete configuration."""


class SourceError(IndexerError):
    """Fetching from the upstream talk source failed."""


class NotFoundError(SourceError):
    """The requested conference or talk does not exist upstream."""


class ConferenceNotFoundError(NotFoundError):
    pass


class TalkNotFoundError(NotFoundError):
    pass


class SearchIndexError(IndexerError):
    """An index lifecycle call (delete/create/exists) failed."""


class BulkIndexError(SearchIndexError):
    """A bulk write failed, fully or for some documents."""
