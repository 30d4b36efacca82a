"""Sync conference talks into private and public search indexes."""

__version__ = "0.1.0"
