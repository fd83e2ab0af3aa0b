"""Shared utilities: colors, stderr logging, terminal tables, timestamps."""

import io
import os
import sys
from datetime import datetime, timezone

# Force UTF-8 output on Windows so component names with non-ASCII chars survive
if sys.platform == "win32" and hasattr(sys.stdout, "buffer"):
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}


def _no_color() -> bool:
    return os.environ.get("NO_COLOR") is not None


def c(text: str, color: str) -> str:
    if _no_color() or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def log(msg: str):
    """Progress/diagnostic line on stderr, so stdout stays machine-readable."""
    print(c(msg, "dim"), file=sys.stderr)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def print_table(headers: list[str], rows: list[list[str]], widths: list[int] | None = None):
    if not rows:
        return
    if not widths:
        widths = [max(len(str(h)), *(len(str(r[i])) for r in rows)) for i, h in enumerate(headers)]
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    print(c(header_line, "bold"))
    try:
        print(c("─" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    except UnicodeEncodeError:
        print(c("-" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in rows:
        print("  ".join(str(v).ljust(w) for v, w in zip(row, widths)))


def print_box(lines: list[str], width: int = 45):
    """Print a box around lines of text."""
    try:
        print("┌" + "─" * width + "┐")
        for line in lines:
            padded = line.ljust(width - 2)[:width - 2]
            print(f"│ {padded} │")
        print("└" + "─" * width + "┘")
    except UnicodeEncodeError:
        print("+" + "-" * width + "+")
        for line in lines:
            padded = line.ljust(width - 2)[:width - 2]
            print(f"| {padded} |")
        print("+" + "-" * width + "+")
