"""Base class for pipeline generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..config import Configuration
from .templates import TemplateRenderer
from .toolkit import FileToolkit


class Generator(ABC):
    """One step of the generation pipeline.

    A generator materialises a single concern (the base Rails skeleton, the
    asset bundler, Docker files, ...) inside the application directory.  It
    may rely on files written by generators that run before it.
    """

    #: Short label shown while the pipeline runs.
    name: str = "generator"

    def __init__(
        self,
        config: Configuration,
        toolkit: FileToolkit | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or (toolkit.renderer if toolkit else TemplateRenderer())
        self.toolkit = toolkit or FileToolkit(config.app_path, self.renderer)

    @abstractmethod
    async def generate(self) -> None:
        """Apply this generator to the application directory."""

    @property
    def app_path(self) -> Path:
        return self.config.app_path

    def render_file(self, relative_path: str, template_path: str) -> Path:
        """Render *template_path* with the configuration context into *relative_path*."""
        return self.toolkit.render(relative_path, template_path, self.config.context())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(app_path={str(self.app_path)!r})"
