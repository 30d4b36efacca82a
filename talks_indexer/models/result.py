"""Outcome of a reindex operation."""

from pydantic import BaseModel, Field


class ReindexResult(BaseModel):
    """Counts reported back to the API/CLI after a successful reindex."""

    scope: str = Field(description="'all', 'conference:<slug>' or 'talk:<id>'")
    private_count: int = 0
    public_count: int = 0
    skipped_conferences: list[str] = Field(
        default_factory=list,
        description="Conference ids whose talks could not be fetched",
    )
