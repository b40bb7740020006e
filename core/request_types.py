"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Asset:
    """A bundled static file."""

    content: bytes
    content_type: str
