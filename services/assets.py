"""Directory-backed store for the bundled web application."""

import json
import mimetypes
from pathlib import Path

from core.exceptions import AssetNotFound, ConfigurationError
from core.request_types import Asset

_TEXT_TYPES = ("text/", "application/javascript", "application/json", "image/svg+xml")


def load_manifest(path: Path) -> dict[str, str]:
    """Load a JSON manifest mapping logical asset paths to stored file names."""
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read static manifest {path}: {e}") from e
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError(f"Static manifest {path} must be a JSON object of strings")
    return data


class DirectoryAssetStore:
    """Serve files below ``root``, optionally renamed through a manifest."""

    def __init__(self, root: Path, manifest: dict[str, str] | None = None) -> None:
        self.root = root.resolve()
        self.manifest = manifest or {}

    def get(self, path: str) -> Asset:
        key = path.lstrip("/")
        key = self.manifest.get(key, key)
        file_path = (self.root / key).resolve()
        if not file_path.is_relative_to(self.root) or not file_path.is_file():
            raise AssetNotFound(path)
        return Asset(content=file_path.read_bytes(), content_type=_content_type(path))


def _content_type(path: str) -> str:
    guessed, _ = mimetypes.guess_type(path)
    if guessed is None:
        return "application/octet-stream"
    if guessed.startswith(_TEXT_TYPES):
        return f"{guessed}; charset=utf-8"
    return guessed
