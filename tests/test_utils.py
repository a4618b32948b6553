"""Unit tests for utility functions (appgen.utils).

Tests cover:
- run_command (success, failure, list vs string, env vars, host env, capture=False)
- host_environment (virtualenv stripping)
- make_executable
- Rich output helpers
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from appgen.utils import (
    host_environment,
    make_executable,
    print_error,
    print_header,
    print_step,
    print_success,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command_list(self):
        returncode, stdout, stderr = await run_command(["echo", "hello"])
        assert returncode == 0
        assert "hello" in stdout

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command_string(self):
        returncode, stdout, stderr = await run_command("echo hello")
        assert returncode == 0
        assert "hello" in stdout

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.exit(3)"]
        )
        assert returncode == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout.strip()).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_timeout(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_env(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['TEST_VAR'])"],
            env={"TEST_VAR": "test_value"},
        )
        assert returncode == 0
        assert "test_value" in stdout

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_host_mode_drops_virtualenv(self, monkeypatch):
        monkeypatch.setenv("VIRTUAL_ENV", "/tmp/some-venv")
        returncode, stdout, stderr = await run_command(
            "echo \"venv=${VIRTUAL_ENV:-none}\"", host=True
        )
        assert returncode == 0
        assert "venv=none" in stdout

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_nonexistent_shell(self):
        returncode, stdout, stderr = await run_command("nonexistent-binary-12345-xyz")
        assert returncode != 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_returns_stderr(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('error_msg\\n')"],
        )
        assert "error_msg" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_capture_false_returns_empty_strings(self):
        returncode, stdout, stderr = await run_command("true", capture=False)
        assert (returncode, stdout, stderr) == (0, "", "")


# ---------------------------------------------------------------------------
# host_environment
# ---------------------------------------------------------------------------


class TestHostEnvironment:
    @pytest.mark.unit
    def test_strips_virtualenv_bin_from_path(self):
        base = {
            "VIRTUAL_ENV": "/home/dev/.venvs/appgen",
            "PATH": os.pathsep.join(["/home/dev/.venvs/appgen/bin", "/usr/local/bin", "/usr/bin"]),
            "HOME": "/home/dev",
        }
        env = host_environment(base)
        assert env["PATH"] == os.pathsep.join(["/usr/local/bin", "/usr/bin"])
        assert "VIRTUAL_ENV" not in env
        assert env["HOME"] == "/home/dev"

    @pytest.mark.unit
    def test_drops_python_variables(self):
        env = host_environment({"PYTHONPATH": "/x", "PYTHONHOME": "/y", "PATH": "/usr/bin"})
        assert "PYTHONPATH" not in env
        assert "PYTHONHOME" not in env
        assert env["PATH"] == "/usr/bin"

    @pytest.mark.unit
    def test_base_not_modified(self):
        base = {"VIRTUAL_ENV": "/venv", "PATH": "/venv/bin"}
        host_environment(base)
        assert base == {"VIRTUAL_ENV": "/venv", "PATH": "/venv/bin"}

    @pytest.mark.unit
    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.setenv("APPGEN_TEST_MARKER", "1")
        assert host_environment()["APPGEN_TEST_MARKER"] == "1"

    @pytest.mark.unit
    def test_running_interpreter_prefix_removed(self, monkeypatch, tmp_path):
        venv = tmp_path / "venv"
        monkeypatch.delenv("VIRTUAL_ENV", raising=False)
        monkeypatch.setenv("PATH", os.pathsep.join([str(venv / "bin"), "/usr/bin"]))
        with patch.object(sys, "prefix", str(venv)), patch.object(sys, "base_prefix", "/usr"):
            env = host_environment()
        assert str(venv / "bin") not in env["PATH"].split(os.pathsep)


# ---------------------------------------------------------------------------
# make_executable
# ---------------------------------------------------------------------------


class TestMakeExecutable:
    @pytest.mark.unit
    def test_sets_execute_bits(self, tmp_path: Path):
        script = tmp_path / "script.sh"
        script.write_text("#!/bin/sh\n", encoding="utf-8")
        script.chmod(0o644)
        make_executable(script)
        mode = script.stat().st_mode
        assert mode & stat.S_IXUSR
        assert mode & stat.S_IXGRP
        assert mode & stat.S_IXOTH


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers(self, capsys):
        print_success("done")
        print_error("broken")
        print_warning("careful")
        print_step("step one")
        out = capsys.readouterr().out
        for text in ("done", "broken", "careful", "step one"):
            assert text in out

    @pytest.mark.unit
    def test_print_header(self, capsys):
        print_header("Generating")
        assert "Generating" in capsys.readouterr().out

    @pytest.mark.unit
    def test_markup_in_messages_printed_literally(self, capsys):
        print_error("Invalid app name 'a[/b]'")
        print_warning("locale 'x[bold]y'")
        print_success("[green]ok")
        print_step("step [1]")
        out = capsys.readouterr().out
        assert "'a[/b]'" in out
        assert "'x[bold]y'" in out
        assert "[green]ok" in out
        assert "step [1]" in out
