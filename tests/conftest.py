"""Shared pytest fixtures for the appgen test suite.

Provides reusable fixtures for:
- Validated configurations rooted in a temporary directory
- A minimal Rails application skeleton, as ``rails new`` would leave it
- File toolkits bound to that skeleton
- Mock subprocess helpers
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from appgen.config import Configuration
from appgen.generators import FileToolkit, TemplateRenderer


# ---------------------------------------------------------------------------
# Sample manifest / config contents
# ---------------------------------------------------------------------------

SAMPLE_GEMFILE = textwrap.dedent(
    """\
    source "https://rubygems.org"

    gem "rails", "~> 8.0.1"
    gem "pg", "~> 1.1"
    gem "puma", ">= 5.0"
    gem "solid_cache"

    group :development do
      gem "web-console"
    end
    """
)

SAMPLE_APPLICATION_RB = textwrap.dedent(
    """\
    require_relative "boot"

    require "rails/all"

    module MyBlog
      class Application < Rails::Application
        config.load_defaults 8.0
      end
    end
    """
)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Configuration]:
    """Factory for configurations whose ``app_path`` lives under ``tmp_path``."""

    def factory(app_name: str = "my-blog", **overrides: Any) -> Configuration:
        overrides.setdefault("app_path", tmp_path / app_name)
        return Configuration(app_name=app_name, **overrides)

    return factory


@pytest.fixture
def config(make_config: Callable[..., Configuration]) -> Configuration:
    """Default configuration for ``my-blog``."""
    return make_config()


# ---------------------------------------------------------------------------
# Application skeleton & toolkit
# ---------------------------------------------------------------------------

@pytest.fixture
def rails_skeleton(config: Configuration) -> Path:
    """The files ``rails new`` produces that later generators touch."""
    write_rails_skeleton(config.app_path)
    return config.app_path


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def toolkit(config: Configuration, renderer: TemplateRenderer) -> FileToolkit:
    """Toolkit bound to the configuration's application directory."""
    config.app_path.mkdir(parents=True, exist_ok=True)
    return FileToolkit(config.app_path, renderer)


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def probe_outputs() -> dict[str, tuple[int, str, str]]:
    """``run_command`` results for a host where every dependency is fine."""
    return {
        "ruby --version": (0, "ruby 3.3.6 (2024-11-05 revision 75015d4c1f) [x86_64-linux]", ""),
        "rails --version": (0, "Rails 8.0.1", ""),
        "node --version": (0, "v22.11.0", ""),
        "yarn --version": (0, "4.5.3", ""),
        "git --version": (0, "git version 2.40.1", ""),
        "psql --version": (0, "psql (PostgreSQL) 16.2", ""),
    }


@pytest.fixture
def fake_run_command(probe_outputs: dict[str, tuple[int, str, str]]) -> AsyncMock:
    """AsyncMock standing in for ``run_command``, answering from ``probe_outputs``."""

    async def _run(cmd: str, *args: Any, **kwargs: Any) -> tuple[int, str, str]:
        return probe_outputs.get(cmd, (127, "", f"sh: 1: {cmd.split()[0]}: not found"))

    return AsyncMock(side_effect=_run)


# ---------------------------------------------------------------------------
# Fake ``rails new``
# ---------------------------------------------------------------------------

def write_rails_skeleton(root: Path) -> None:
    """Write the subset of a fresh Rails app that the generators edit."""
    (root / "config").mkdir(parents=True)
    (root / "db").mkdir()
    (root / "app" / "assets" / "stylesheets").mkdir(parents=True)
    (root / "Gemfile").write_text(SAMPLE_GEMFILE, encoding="utf-8")
    (root / "config" / "application.rb").write_text(SAMPLE_APPLICATION_RB, encoding="utf-8")
    (root / "db" / "schema.rb").write_text("ActiveRecord::Schema.define {}\n", encoding="utf-8")
    (root / "db" / "cache_schema.rb").write_text("# cache\n", encoding="utf-8")
    (root / "app" / "assets" / "stylesheets" / "application.css").write_text(
        "/* default */\n", encoding="utf-8"
    )


@pytest.fixture
def fake_rails_new() -> AsyncMock:
    """AsyncMock for ``run_command`` that behaves like a successful ``rails new``."""

    async def _run(cmd: str, cwd: Path | None = None, **kwargs: Any) -> tuple[int, str, str]:
        app_name = cmd.split()[2]
        write_rails_skeleton(Path(cwd) / app_name)
        return 0, "", ""

    return AsyncMock(side_effect=_run)
