"""Shared logging utilities."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"
SENSITIVE_MARKERS = ("cookie", "authorization", "key", "token")


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path = CLI_LOG_FILE,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_file: Path = CLI_LOG_FILE) -> None:
    """Truncate the rolling log at startup."""
    if log_file.exists():
        log_file.write_text("")


def truncate(message: str, limit: int) -> str:
    return message[:limit] + "..." if len(message) > limit else message


def redact_headers(headers: list[tuple[bytes, bytes]]) -> dict[str, str]:
    """Decode raw headers for logging, masking credential-bearing values."""
    redacted: dict[str, str] = {}
    for raw_key, raw_value in headers:
        key = raw_key.decode("latin-1").lower()
        value = raw_value.decode("latin-1")
        if any(marker in key for marker in SENSITIVE_MARKERS):
            value = _mask(value)
        redacted[key] = f"{redacted[key]}, {value}" if key in redacted else value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]
