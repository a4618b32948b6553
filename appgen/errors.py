"""Exception hierarchy for appgen.

Every error the scaffolder raises on purpose derives from :class:`AppgenError`
so the CLI can turn it into a red message and exit code 1.  Anything else is a
bug and is allowed to surface with a traceback.
"""

from __future__ import annotations

from pathlib import Path


class AppgenError(Exception):
    """Base class for all appgen errors."""


class ConfigurationError(AppgenError, ValueError):
    """Raised when user supplied options fail validation."""


class InvalidAppNameError(ConfigurationError):
    """Raised when the application name is not a valid identifier."""

    def __init__(self, app_name: object) -> None:
        self.app_name = app_name
        super().__init__(
            f"Invalid app name '{app_name}'. App name must start with a letter and "
            "contain only letters, numbers, hyphens, and underscores."
        )


class DependencyError(AppgenError):
    """Raised when one or more required system dependencies are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required dependencies: {', '.join(self.missing)}")


class UnknownDependencyError(AppgenError):
    """Raised when a dependency name is not declared in the checker table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown dependency: {name}")


class DirectoryExistsError(AppgenError):
    """Raised when the target directory for a new application already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Directory '{self.path}' already exists. Please choose a different "
            "name or remove the existing directory."
        )


class TemplateNotFoundError(AppgenError):
    """Raised when a packaged template file is missing."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Template file not found: {template}")


class CommandFailedError(AppgenError):
    """Raised when a shell command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int | None) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"Command '{command}' failed with exit code {exit_code}")


class ProjectGenerationError(CommandFailedError):
    """Raised when the external ``rails new`` command fails."""


class ManifestMergeError(AppgenError):
    """Raised when an existing manifest cannot be parsed or merged."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot merge manifest '{self.path}': {reason}")
