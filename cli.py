"""CLI entry point for media-edge-gateway."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.auth import password_hash
from core.config import ENV_FIELDS, Config, load_config
from core.exceptions import ConfigurationError
from ui.access_log import AccessLog
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    plain = False
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            _print_config(config)
            return

        if arg == "--hash":
            if not config.secret:
                console.print("[red][ERROR][/red] PASSWORD is not set")
                sys.exit(1)
            console.print(password_hash(config.secret), highlight=False)
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--plain":
            plain = True
        else:
            console.print(f"[red][ERROR][/red] Unknown option: {arg}")
            _print_help()
            sys.exit(2)

    if not config.proxy_enabled:
        console.print("[yellow]Warning:[/yellow] PASSWORD not set, /proxy/ requests will be rejected")
    if not config.static_dir.is_dir():
        console.print(f"[yellow]Warning:[/yellow] static directory {config.static_dir} does not exist")

    import uvicorn

    dashboard = None if plain else Dashboard(config)
    logger = AccessLog() if plain else dashboard
    try:
        app = create_app(config, logger)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Gateway started", host=config.host, port=config.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Gateway stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_config(config: Config):
    """Print the effective configuration with the secret masked."""
    values = config.model_dump()
    for env_name, field_name in ENV_FIELDS.items():
        value = values[field_name]
        if field_name == "secret":
            value = "(set)" if value else "(not set)"
        elif field_name == "user_agents":
            value = f"{len(value)} configured"
        console.print(f"[bold]{env_name}:[/bold] {value}", highlight=False)
    console.print(f"[bold]Log file:[/bold] {CLI_LOG_FILE}")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Media Edge Gateway[/bold cyan]

Serves the bundled web app and proxies media requests for it.

[bold]Usage:[/bold]
    media-edge-gateway              Start with live dashboard
    media-edge-gateway --plain      Start with one log line per request
    media-edge-gateway --config     Show effective configuration
    media-edge-gateway --hash       Print the auth token clients must send
    media-edge-gateway --help       Show this help

[bold]Proxy requests:[/bold]
    /proxy/<url-encoded target>?auth=<sha256 of PASSWORD>&t=<epoch millis>
    Configure with PASSWORD, CACHE_TTL, USER_AGENTS_JSON, STATIC_DIR, PORT.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
