"""System dependency checks.

Probes the host for the tools a generated Rails application needs (Ruby,
Rails, Node, Yarn, Git, PostgreSQL client) and compares the reported versions
against declared minimums.  Probes run through the host environment so that a
virtual environment appgen happens to be installed in does not hide or shadow
system-wide installs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from .errors import UnknownDependencyError
from .utils import console, run_command
from .versions import extract_version, satisfies

# name -> probe command and optional minimum version
REQUIRED_DEPENDENCIES: dict[str, dict[str, Optional[str]]] = {
    "ruby": {"command": "ruby --version", "min_version": "3.2.0"},
    "rails": {"command": "rails --version", "min_version": "8.0.0"},
    "node": {"command": "node --version", "min_version": "20.0.0"},
    "yarn": {"command": "yarn --version", "min_version": "4.0.0"},
    "git": {"command": "git --version", "min_version": None},
    "psql": {"command": "psql --version", "min_version": None},
}


@dataclass(frozen=True)
class DependencyResult:
    """Outcome of probing a single dependency."""

    satisfied: bool
    installed: bool
    version: Optional[str] = None
    min_version: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def format_dependency_result(name: str, result: DependencyResult) -> str:
    """Return a one-line, Rich-marked-up status for *result*."""
    if result.satisfied:
        version_info = f" ({result.version})" if result.version else ""
        return f"  [green]OK[/green] {name}{version_info}"
    if result.installed and result.min_version:
        return (
            f"  [red]MISSING[/red] {name} - version {result.version} "
            f"< {result.min_version} required"
        )
    return f"  [red]MISSING[/red] {name}"


class DependencyChecker:
    """Checks that required system dependencies are installed.

    Attributes:
        dependencies: The declaration table being checked.
        results: Result of the most recent probe for each dependency name.
        formatter: Turns a result into a display line for verbose output.
    """

    def __init__(
        self,
        dependencies: dict[str, dict[str, Optional[str]]] | None = None,
        formatter: Callable[[str, DependencyResult], str] = format_dependency_result,
    ) -> None:
        self.dependencies = dict(REQUIRED_DEPENDENCIES if dependencies is None else dependencies)
        self.formatter = formatter
        self.results: dict[str, DependencyResult] = {}

    async def check_all(self, verbose: bool = False) -> bool:
        """Probe every declared dependency, one at a time.

        All dependencies are checked even after a failure so the caller can
        report the complete list of missing tools at once.

        Returns:
            ``True`` if every dependency is satisfied.
        """
        missing: list[str] = []

        for name, declaration in self.dependencies.items():
            result = await self._probe(declaration)
            self.results[name] = result
            if verbose:
                console.print(self.formatter(name, result))
            if not result.satisfied:
                missing.append(name)

        if verbose:
            console.print()
            if missing:
                console.print(f"[red]Missing dependencies: {', '.join(missing)}[/red]")
            else:
                console.print("[green]All dependencies satisfied![/green]")

        return not missing

    async def check(self, name: str) -> bool:
        """Probe a single dependency and return whether it is satisfied."""
        declaration = self.dependencies.get(str(name))
        if declaration is None:
            raise UnknownDependencyError(str(name))
        result = await self._probe(declaration)
        self.results[str(name)] = result
        return result.satisfied

    def missing_dependencies(self) -> list[str]:
        """Names of the dependencies that were unsatisfied on the last run."""
        return [name for name, result in self.results.items() if not result.satisfied]

    # -- Internals ---------------------------------------------------------

    async def _probe(self, declaration: dict[str, Optional[str]]) -> DependencyResult:
        command = declaration["command"] or ""
        min_version = declaration.get("min_version")

        try:
            returncode, stdout, stderr = await run_command(command, host=True)
        except OSError:
            return DependencyResult(
                satisfied=False, installed=False, version=None, min_version=min_version
            )

        installed = returncode == 0
        if not installed:
            return DependencyResult(
                satisfied=False, installed=False, version=None, min_version=min_version
            )

        version = extract_version("\n".join(part for part in (stdout, stderr) if part))
        return DependencyResult(
            satisfied=min_version is None or satisfies(version, min_version),
            installed=True,
            version=version,
            min_version=min_version,
        )
