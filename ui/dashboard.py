"""Real-time CLI dashboard for gateway monitoring."""

from datetime import datetime
from threading import Lock
from urllib.parse import urlsplit

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import redact_url, write_cli_log

console = Console()


class ProxyInfo:
    """Info about a single proxied request."""

    def __init__(self, method: str, target: str, status: int, user_agent: str, timestamp: datetime):
        self.method = method
        self.target = target[:80] + "..." if len(target) > 80 else target
        self.host = urlsplit(target).hostname or "?"
        self.status = status
        self.user_agent = user_agent
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing proxied media requests and static traffic."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._proxied: list[ProxyInfo] = []
        self._max_proxied = 10
        self._request_count = {"proxy": 0, "static": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_proxy(self, method: str, target: str, status: int, user_agent: str) -> None:
        """Log a request forwarded to a third-party origin."""
        with self._lock:
            self._request_count["proxy"] += 1
            target = redact_url(target)
            info = ProxyInfo(method, target, status, user_agent, datetime.now())
            self._proxied.insert(0, info)
            self._proxied = self._proxied[: self._max_proxied]
            self._refresh()
            write_cli_log("PROXY", target, method=method, status=status, ua=repr(user_agent))

    def log_static(self, path: str, status: int) -> None:
        """Log a static asset request."""
        with self._lock:
            self._request_count["static"] += 1
            self._refresh()
            if status != 200:
                write_cli_log("STATIC", path, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_proxy_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Media Edge Gateway", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Proxied: {self._request_count['proxy']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Static: {self._request_count['static']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.port}", style="dim")
        if not self.config.proxy_enabled:
            stats.append("  |  ")
            stats.append("proxy disabled (no PASSWORD)", style="yellow")

        return Panel(stats, style="cyan")

    def _build_proxy_panel(self) -> Panel:
        """Build the recent proxy requests panel."""
        if self._proxied:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Status", width=6)
            table.add_column("Host", width=24)
            table.add_column("Target", ratio=2)
            table.add_column("User-Agent", ratio=1, style="dim")

            for info in self._proxied:
                style = "green" if info.status < 400 else "red"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    Text(str(info.status), style=style),
                    info.host[:24],
                    Text(info.target),
                    Text(info.user_agent[:40]),
                )

            content = table
        else:
            content = Text("Waiting for proxy requests...", style="dim")

        return Panel(content, title="[magenta]Proxied Requests[/magenta]", border_style="magenta")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Serving {self.config.static_dir} on http://{self.config.host}:{self.config.port}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
