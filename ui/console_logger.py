"""Plain line-per-request logger for running without the dashboard."""

from rich.console import Console
from rich.markup import escape

from core.config import Config
from ui.log_utils import write_cli_log


class ConsoleLogger:
    """Print one line per relayed request and mirror it to the log file."""

    def __init__(self, config: Config, console: Console | None = None):
        self._console = console or Console()
        self._log_file = config.logging.log_file

    def log_forward(
        self,
        route: str,
        method: str,
        path: str,
        status: int,
        *,
        elapsed_ms: float,
    ) -> None:
        style = "green" if status < 400 else "yellow"
        self._console.print(
            f"[dim]{route}[/dim] {method} {path} [{style}]{status}[/{style}] "
            f"[dim]{elapsed_ms:.0f}ms[/dim]"
        )
        write_cli_log(
            "FORWARD",
            f"{method} {path}",
            log_file=self._log_file,
            route=route,
            status=status,
            elapsed_ms=f"{elapsed_ms:.1f}",
        )

    def log_error(self, route: str, status: int, message: str) -> None:
        self._console.print(f"[red][ERROR][/red] {route} {status}: {escape(message)}")
        write_cli_log("ERROR", message[:200], log_file=self._log_file, route=route, status=status)
