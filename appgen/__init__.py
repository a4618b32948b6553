"""appgen -- scaffold Rails 8 applications with an opinionated stack.

The package combines a validated :class:`Configuration`, a system
:class:`DependencyChecker` and an ordered pipeline of generators that write
and merge files into the new application directory.

Quick usage::

    import asyncio

    from appgen import AppGenerator, Configuration

    config = Configuration(app_name="my-blog", locale="it")
    asyncio.run(AppGenerator(config).run())
"""

__version__ = "0.1.0"

from appgen.config import Configuration, Defaults
from appgen.dependency_checker import DependencyChecker, DependencyResult
from appgen.pipeline import AppGenerator
from appgen.versions import extract_version, satisfies

__all__ = [
    "AppGenerator",
    "Configuration",
    "Defaults",
    "DependencyChecker",
    "DependencyResult",
    "__version__",
    "extract_version",
    "satisfies",
]
