"""appgen orchestrator.

Drives a single scaffolding run:

1. refuse to touch an existing target directory,
2. gate on the system dependency check (all missing tools reported at once),
3. run the generators strictly in order,
4. hand back the application path for the summary.

A failing generator aborts the run immediately.  Files already written are
left in place so the partial application can be inspected.
"""

from __future__ import annotations

from pathlib import Path

from .config import Configuration
from .dependency_checker import DependencyChecker
from .errors import DependencyError, DirectoryExistsError
from .generators import (
    DockerGenerator,
    FileToolkit,
    Generator,
    LocaleGenerator,
    RailsAppGenerator,
    SimpleFormGenerator,
    StackGenerator,
    TemplateRenderer,
    ViteGenerator,
)
from .utils import print_header, print_step


class AppGenerator:
    """Runs the generator pipeline for one :class:`Configuration`.

    Attributes:
        config: Validated, frozen configuration for this run.
        checker: Dependency checker used as the pre-generation gate.
        toolkit: File toolkit bound to ``config.app_path``.
    """

    def __init__(
        self,
        config: Configuration,
        checker: DependencyChecker | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.checker = checker or DependencyChecker()
        self.renderer = renderer or TemplateRenderer()
        self.toolkit = FileToolkit(config.app_path, self.renderer)

    def build_pipeline(self) -> list[Generator]:
        """Return the generators for this configuration, in execution order."""
        steps: list[type[Generator]] = [
            RailsAppGenerator,
            StackGenerator,
            ViteGenerator,
            LocaleGenerator,
        ]
        if not self.config.skip_docker:
            steps.append(DockerGenerator)
        if self.config.with_simple_form:
            steps.append(SimpleFormGenerator)
        return [step(self.config, self.toolkit, self.renderer) for step in steps]

    async def run(self, check_dependencies: bool = True) -> Path:
        """Generate the application.

        Raises:
            DirectoryExistsError: The target directory already exists.
            DependencyError: One or more system dependencies are missing.
            ProjectGenerationError: ``rails new`` failed.
        """
        if self.config.app_path.exists():
            raise DirectoryExistsError(self.config.app_path)

        if check_dependencies and not await self.checker.check_all():
            raise DependencyError(self.checker.missing_dependencies())

        print_header(f"Generating Rails 8 application: {self.config.app_name}")
        for generator in self.build_pipeline():
            print_step(f"Running {generator.name} generator")
            await generator.generate()

        return self.config.app_path

    def next_steps(self) -> list[str]:
        """Instructions printed after a successful run."""
        steps = [f"cd {self.config.app_name}"]
        if self.config.skip_docker:
            steps += [
                "bundle install",
                "yarn install",
                "rails db:create db:schema:load",
                "bin/dev              # Start Rails + Vite",
            ]
        else:
            steps += [
                "script/dc-up         # Start Docker containers",
                "script/dc-shell      # Open shell in Rails container",
                "rails db:create      # Create databases",
                "rails db:schema:load # Load schema",
                "exit                 # Exit shell",
                "script/dc-down && script/dc-up  # Restart containers",
            ]
        return steps

    def locale_warning(self) -> str | None:
        """Return a note when the chosen locale ships no translation files."""
        if self.config.has_locale_templates:
            return None
        return (
            f"Note: Locale '{self.config.locale}' does not include translation files.\n"
            "You may want to add translations from the rails-i18n gem:\n"
            "  https://github.com/svenfuchs/rails-i18n"
        )
