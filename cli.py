"""CLI entry point for fidex-proxy."""

import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from app import create_app
from core.config import Config, load_config
from core.exceptions import ConfigurationError
from core.routes import HEALTH_PATH, ROUTE_FAMILY
from ui.console_logger import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        _print_help()
        return

    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    if "--config" in args:
        _print_config(config)
        return

    if "--routes" in args:
        _print_routes()
        return

    log_file = config.logging.log_file
    clear_logs(log_file)

    if "--plain" in args:
        logger = ConsoleLogger(config, console)
        dashboard = None
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    else:
        console.print(
            f"[bold cyan]Fidex Proxy[/bold cyan] on http://{config.proxy.host}:{config.proxy.port}"
            f" -> {config.backend.base_url}"
        )
    start_time = datetime.now()
    write_cli_log(
        "STARTUP",
        "Proxy started",
        log_file=log_file,
        port=config.proxy.port,
        backend=config.backend.base_url,
    )
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", log_file=log_file, duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_config(config: Config):
    """Print the resolved configuration."""
    console.print(f"[bold]Backend:[/bold] {config.backend.base_url}")
    console.print(f"[bold]Timeout:[/bold] {config.backend.timeout}s")
    console.print(f"[bold]Listen:[/bold] {config.proxy.host}:{config.proxy.port}")
    console.print(f"[bold]Credentials:[/bold] {'forwarded' if config.proxy.forward_credentials else 'stripped'}")
    console.print(f"[bold]Log:[/bold] {config.logging.log_file}")
    console.print(f"[bold]Debug:[/bold] {config.proxy.debug}")


def _print_routes():
    """Print the relayed route family."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Route")
    table.add_column("Method")
    table.add_column("Path")
    for route in ROUTE_FAMILY:
        table.add_row(route.name, route.method, route.path)
    table.add_row("health", "GET", f"{HEALTH_PATH} [dim](local)[/dim]")
    console.print(table)


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Fidex Proxy[/bold cyan]

Relays session-bound browser requests (passkeys, profile, auth) to the backend.

[bold]Usage:[/bold]
    fidex-proxy              Start with live dashboard
    fidex-proxy --plain      Start with one log line per request
    fidex-proxy --config     Show resolved configuration
    fidex-proxy --routes     List relayed routes
    fidex-proxy --help       Show this help

[bold]Environment:[/bold]
    BACKEND_URL                  Backend origin (default http://localhost:3001)
                                 NEXT_PUBLIC_BACKEND_URL is also accepted
    BACKEND_TIMEOUT              Backend timeout in seconds (default 10)
    PROXY_HOST / PROXY_PORT      Listen address (default 127.0.0.1:3000)
    PROXY_FORWARD_CREDENTIALS    Forward cookies and authorization (default true)
    PROXY_LOG_DIR                Log directory (default ./logs)
    PROXY_DEBUG                  Log outbound headers (credentials masked)
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
