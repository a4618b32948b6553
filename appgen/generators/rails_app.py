"""Base Rails application generation.

Runs ``rails new`` with every optional framework and tool switched off, then
prepares the database layout used by the Solid Cache/Queue/Cable stack.
"""

from __future__ import annotations

from ..errors import ProjectGenerationError
from ..utils import run_command
from .base import Generator

SKIP_FLAGS: tuple[str, ...] = (
    "--skip-git",
    "--skip-docker",
    "--skip-action-mailbox",
    "--skip-action-text",
    "--skip-active-storage",
    "--skip-test",
    "--skip-thruster",
    "--skip-ci",
    "--skip-kamal",
    "--skip-devcontainer",
    "--skip-jbuilder",
    "--skip-javascript",
    "--skip-asset-pipeline",
    "--database=postgresql",
)

MIGRATION_DIRECTORIES: tuple[str, ...] = (
    "db/migrate",
    "db/cache_migrate",
    "db/queue_migrate",
    "db/cable_migrate",
)


class RailsAppGenerator(Generator):
    """Creates the base Rails application."""

    name = "rails application"

    def command(self) -> str:
        return " ".join(["rails", "new", self.app_path.name, *SKIP_FLAGS])

    async def generate(self) -> None:
        await self._create_rails_app()
        self._cleanup_schema_files()
        for directory in MIGRATION_DIRECTORIES:
            self.toolkit.mkdir(directory)

    async def _create_rails_app(self) -> None:
        command = self.command()
        # Output goes straight to the terminal; only the exit status matters.
        returncode, _, _ = await run_command(
            command, cwd=self.app_path.parent, capture=False, host=True
        )
        if returncode != 0:
            raise ProjectGenerationError(command, returncode)

    def _cleanup_schema_files(self) -> None:
        """Remove ``schema.rb`` files; the app uses ``structure.sql`` dumps."""
        for relative in self.toolkit.glob("db/*schema.rb"):
            self.toolkit.remove(relative)
