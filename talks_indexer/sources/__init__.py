"""Talk sources."""

from talks_indexer.sources.moresleep import MoresleepClient

__all__ = ["MoresleepClient"]
