"""Shared utility functions for create-project.

Provides async command execution, JSON output, Rich-based console reporting,
package-manager detection and byte-size formatting.  Functions
here know nothing about presets or features; the scaffolder builds on them.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    The command runs without a shell and without a timeout.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.

    Raises:
        FileNotFoundError: If the executable is missing.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )
    stdout_bytes, stderr_bytes = await process.communicate()

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


def format_command(cmd: list[str]) -> str:
    """Return a printable form of a command."""
    return " ".join(cmd)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON (two-space indent).

    Parent directories are created automatically and the write runs in a
    worker thread.  An existing file is overwritten.
    """
    file_path = Path(path)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    await asyncio.to_thread(write_text, file_path, content)


def write_text(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

INSTALL_COMMANDS: dict[str, list[str]] = {
    "npm": ["npm", "install"],
    "yarn": ["yarn"],
    "pnpm": ["pnpm", "install"],
    "bun": ["bun", "install"],
}


def get_package_manager(user_agent: str | None = None) -> str:
    """Detect the package manager that launched us.

    Reads ``npm_config_user_agent`` (set by npm, yarn, pnpm and bun when they
    run a package binary) unless *user_agent* is given.  Falls back to npm.
    """
    if user_agent is None:
        user_agent = os.environ.get("npm_config_user_agent", "")

    for manager in ("yarn", "pnpm", "bun"):
        if user_agent.startswith(manager):
            return manager
    return "npm"


def get_install_command(package_manager: str = "npm") -> list[str]:
    """Return the install command for *package_manager* (npm if unknown)."""
    return list(INSTALL_COMMANDS.get(package_manager, INSTALL_COMMANDS["npm"]))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_file_size(size_bytes: float) -> str:
    """Format a byte count as ``"1.5 KB"`` style text (B, KB, MB, GB)."""
    units = ["B", "KB", "MB", "GB"]
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.1f} {units[unit_index]}"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_note(body: str, title: str) -> None:
    """Print *body* inside a titled panel.

    *body* is Rich markup; callers escape any interpolated values.
    """
    console.print(Panel(body, title=title, border_style="cyan", expand=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message.  Brackets in *message* are shown as-is."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich spinner for the scaffolding run.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
