"""Shared protocol definitions."""

from typing import Protocol

from core.request_types import Asset


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, AccessLog)."""

    def log_proxy(self, method: str, target: str, status: int, user_agent: str) -> None: ...
    def log_static(self, path: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...


class AssetStore(Protocol):
    """Key-value store of bundled static assets."""

    def get(self, path: str) -> Asset: ...
