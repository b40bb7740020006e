"""Plain line-per-request console logger for non-interactive runs."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from ui.log_utils import redact_url, write_cli_log

console = Console()


class AccessLog:
    """Print one line per request instead of a live dashboard."""

    def log_proxy(self, method: str, target: str, status: int, user_agent: str) -> None:
        target = redact_url(target)
        style = "green" if status < 400 else "red"
        console.print(
            f"{_now()} [magenta]PROXY[/magenta] {method} [{style}]{status}[/{style}] "
            f"{escape(target)} [dim]{escape(user_agent)}[/dim]"
        )
        write_cli_log("PROXY", target, method=method, status=status, ua=repr(user_agent))

    def log_static(self, path: str, status: int) -> None:
        if status != 200:
            console.print(f"{_now()} [blue]STATIC[/blue] [red]{status}[/red] {escape(path)}")
            write_cli_log("STATIC", path, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        console.print(f"{_now()} [red][ERROR][/red] {route} {status}: {escape(message)}")
        write_cli_log("ERROR", message[:200], route=route, status=status)


def _now() -> str:
    return datetime.now().strftime("%H:%M:%S")
