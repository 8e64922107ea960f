"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import truncate, write_cli_log

console = Console()


class ForwardInfo:
    """Info about a single relayed request."""

    def __init__(self, route: str, method: str, status: int, elapsed_ms: float, timestamp: datetime):
        self.route = route
        self.method = method
        self.status = status
        self.elapsed_ms = elapsed_ms
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing relayed requests and backend failures."""

    def __init__(self, config: Config):
        self.config = config
        self._log_file = config.logging.log_file
        self._lock = Lock()
        self._recent: list[ForwardInfo] = []
        self._max_recent = 8
        self._request_count = {"forwarded": 0, "unavailable": 0}
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

    def log_forward(
        self,
        route: str,
        method: str,
        path: str,
        status: int,
        *,
        elapsed_ms: float,
    ) -> None:
        """Log a request the backend answered."""
        with self._lock:
            self._request_count["forwarded"] += 1
            info = ForwardInfo(route, method, status, elapsed_ms, datetime.now())
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]
            self._refresh()

            write_cli_log(
                "FORWARD",
                f"{method} {path}",
                log_file=self._log_file,
                route=route,
                status=status,
                elapsed_ms=f"{elapsed_ms:.1f}",
            )

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log a backend failure."""
        with self._lock:
            self._request_count["unavailable"] += 1
            self._errors.insert(0, f"{route} {status}: {truncate(message, 50)}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log(
                "ERROR", message[:200], log_file=self._log_file, route=route, status=status
            )

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
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Fidex Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._request_count['forwarded']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Unavailable: {self._request_count['unavailable']}", style="red")
        stats.append("  |  ")
        stats.append(f"Backend: {self.config.backend.base_url}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build the recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Route", ratio=2)
            table.add_column("Status", width=6)
            table.add_column("ms", width=8, justify="right")

            for info in self._recent:
                status_style = "green" if info.status < 400 else "yellow"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    info.route,
                    f"[{status_style}]{info.status}[/{status_style}]",
                    f"{info.elapsed_ms:.0f}",
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

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
                f"Listening on http://{self.config.proxy.host}:{self.config.proxy.port}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
