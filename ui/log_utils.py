"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "gateway.log"

_SENSITIVE_HEADERS = ("cookie", "authorization")
_SENSITIVE_PARAMS = ("auth",)


def write_proxy_log(
    method: str,
    target: str,
    headers: list[tuple[str, str]],
    *,
    log_root: Path | None = None,
) -> Path:
    """Write a single proxied request log entry."""
    log_root = log_root or LOG_ROOT
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "target": redact_url(target),
        "headers": _redact_headers(headers),
    }
    return _write_json(log_root / "proxy" / _host_folder(target), payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def redact_url(url: str) -> str:
    """Mask auth tokens carried in a URL query string."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, _mask(value) if key.lower() in _SENSITIVE_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*.")))


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _host_folder(target: str) -> str:
    host = urlsplit(target).hostname or "unknown"
    return host.replace(":", "_")


def _redact_headers(headers: list[tuple[str, str]]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers:
        key_lower = key.lower()
        if "key" in key_lower or any(name in key_lower for name in _SENSITIVE_HEADERS):
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
