"""Shared utility functions for appgen.

Provides async command execution against the host environment, file-system
helpers and Rich-based console reporting.  Library modules stay silent; the
dependency checker, the orchestrator and the CLI are the only callers of the
printing helpers.
"""

from __future__ import annotations

import asyncio
import os
import stat
import sys
from collections.abc import Mapping
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

console = Console()

# Variables that point a child process at the interpreter appgen itself runs in.
_VENV_VARIABLES = ("VIRTUAL_ENV", "PYTHONHOME", "PYTHONPATH", "__PYVENV_LAUNCHER__")

# ---------------------------------------------------------------------------
# Host environment
# ---------------------------------------------------------------------------


def host_environment(base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the environment a user's own shell would see.

    When appgen is installed inside a virtual environment, ``PATH`` starts with
    that environment's ``bin`` directory.  Probes and generators must detect
    system-wide installations instead, so the virtual environment is removed
    from ``PATH`` and the interpreter-specific variables are dropped.

    Args:
        base: Environment to clean.  Defaults to ``os.environ``.

    Returns:
        A new dictionary; *base* is never modified.
    """
    env = dict(os.environ if base is None else base)

    venv_bins: set[str] = set()
    if env.get("VIRTUAL_ENV"):
        venv_bins.add(str(Path(env["VIRTUAL_ENV"]) / _bin_dir_name()))
    if base is None and sys.prefix != sys.base_prefix:
        venv_bins.add(str(Path(sys.prefix) / _bin_dir_name()))

    for name in _VENV_VARIABLES:
        env.pop(name, None)

    if venv_bins and "PATH" in env:
        entries = env["PATH"].split(os.pathsep)
        env["PATH"] = os.pathsep.join(
            entry for entry in entries if entry.rstrip("/\\") not in venv_bins
        )

    return env


def _bin_dir_name() -> str:
    return "Scripts" if os.name == "nt" else "bin"


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
    host: bool = False,
) -> tuple[int, str, str]:
    """Run a shell command asynchronously and wait for it to exit.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits forever.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of the base
            environment.
        host: Use :func:`host_environment` as the base environment instead of
            ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.
    """
    merged_env: dict[str, str] | None = None
    if host:
        merged_env = {**host_environment(), **(env or {})}
    elif env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    if isinstance(cmd, list):
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    else:
        process = await asyncio.create_subprocess_shell(
            cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (
            -1,
            "",
            f"Command timed out after {timeout}s: {cmd if isinstance(cmd, str) else ' '.join(cmd)}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def make_executable(path: str | Path) -> None:
    """Set the executable bits on a file."""
    file_path = Path(path)
    current = file_path.stat().st_mode
    file_path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

# Messages are plain text; markup characters in them are printed literally.


def print_header(title: str, color: str = "bright_green") -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold {color}] {escape(title)} [/bold {color}]", style=color))
    console.print()


def print_step(message: str) -> None:
    """Print a dimmed progress line for a pipeline step."""
    console.print(f"  [cyan]>[/cyan] {escape(message)}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
