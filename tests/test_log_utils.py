"""Tests for log file helpers."""

import json

from rich.console import Console

from core.config import Config
from ui.access_log import AccessLog
from ui.dashboard import Dashboard
from ui.log_utils import redact_url, write_cli_log, write_proxy_log


def test_redact_url_masks_auth_param():
    token = "a" * 64
    redacted = redact_url(f"https://example.com/v.mp4?auth={token}&t=1")

    assert token not in redacted
    assert "t=1" in redacted


def test_redact_url_without_query_is_unchanged():
    assert redact_url("https://example.com/v.mp4") == "https://example.com/v.mp4"


def test_write_proxy_log_redacts_headers(tmp_path):
    path = write_proxy_log(
        "GET",
        "https://cdn.example.com/seg.ts",
        [("Authorization", "Bearer abcdefghijklmnop"), ("Range", "bytes=0-")],
        log_root=tmp_path,
    )

    assert path.parent == tmp_path / "proxy" / "cdn.example.com"
    payload = json.loads(path.read_text())
    assert payload["method"] == "GET"
    assert payload["headers"]["Range"] == "bytes=0-"
    assert payload["headers"]["Authorization"] == "Bearer...mnop"


def test_write_cli_log_appends_lines(tmp_path):
    log_file = tmp_path / "gateway.log"
    write_cli_log("PROXY", "first", log_file=log_file, status=200)
    write_cli_log("ERROR", "second", log_file=log_file)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("PROXY: first status=200")
    assert lines[1].endswith("ERROR: second")


def test_write_proxy_log_defaults_to_module_root(tmp_path, monkeypatch):
    monkeypatch.setattr("ui.log_utils.LOG_ROOT", tmp_path)

    path = write_proxy_log("GET", "https://cdn.example.com/a.mp4", [])

    assert path.parent == tmp_path / "proxy" / "cdn.example.com"


def test_access_log_records_user_agent(tmp_path, monkeypatch):
    log_file = tmp_path / "gateway.log"
    monkeypatch.setattr("ui.log_utils.CLI_LOG_FILE", log_file)

    AccessLog().log_proxy("GET", "https://cdn.example.com/a.mp4?auth=abcdef0123456789", 206, "UA/1")

    line = log_file.read_text()
    assert "ua='UA/1'" in line
    assert "abcdef0123456789" not in line


def test_dashboard_shows_user_agent(tmp_path, monkeypatch):
    monkeypatch.setattr("ui.log_utils.CLI_LOG_FILE", tmp_path / "gateway.log")
    dashboard = Dashboard(Config())

    dashboard.log_proxy("GET", "https://cdn.example.com/a.mp4", 206, "UA/[bold]1")

    console = Console(width=200, record=True)
    console.print(dashboard._build_proxy_panel())
    assert "UA/[bold]1" in console.export_text()
