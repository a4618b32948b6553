"""File mutation primitives shared by every generator.

A :class:`FileToolkit` is bound to the root of the application being
generated and addresses files by paths relative to it.  Apart from
:meth:`FileToolkit.write`, which always produces a fresh file, every mutation
is safe to repeat: appends and insertions check whether their content is
already present, and manifest merges skip entries that are already declared.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..utils import make_executable
from .manifests import (
    DEFAULT_ANCHOR,
    dump_structured_manifest,
    load_structured_manifest,
    merge_manifest_list,
    merge_structured_manifest,
)
from .templates import TemplateRenderer


class FileToolkit:
    """Idempotent file operations rooted at :attr:`root`."""

    def __init__(self, root: str | Path, renderer: TemplateRenderer | None = None) -> None:
        self.root = Path(root)
        self.renderer = renderer or TemplateRenderer()

    # -- Paths -------------------------------------------------------------

    def path(self, relative_path: str) -> Path:
        return self.root / relative_path

    def exists(self, relative_path: str) -> bool:
        return self.path(relative_path).exists()

    def read(self, relative_path: str) -> str:
        return self.path(relative_path).read_text(encoding="utf-8")

    # -- Whole-file operations ---------------------------------------------

    def write(self, relative_path: str, content: str) -> Path:
        """Write *content*, replacing any existing file.

        Parent directories are created automatically.
        """
        out = self.path(relative_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        return out

    def render(self, relative_path: str, template_path: str, context: dict[str, Any]) -> Path:
        """Render *template_path* and write the result to *relative_path*."""
        return self.write(relative_path, self.renderer.render(template_path, context))

    def append_if_absent(self, relative_path: str, content: str) -> bool:
        """Append *content* unless the file already contains it.

        Returns:
            ``True`` if the file changed.
        """
        current = self.read(relative_path) if self.exists(relative_path) else ""
        if content in current:
            return False
        self.write(relative_path, current + content)
        return True

    # -- Pattern-anchored edits --------------------------------------------

    def insert_before(
        self,
        relative_path: str,
        pattern: str | re.Pattern[str],
        content: str,
        *,
        marker: str | None = None,
        every: bool = False,
    ) -> bool:
        """Insert *content* immediately before the first match of *pattern*.

        The edit is skipped when *marker* (or *content* itself when no marker
        is given) already appears in the file, which makes repeated calls
        harmless.  ``every=True`` inserts before every match instead.

        Returns:
            ``True`` if the file changed.
        """
        return self._insert(relative_path, pattern, content, marker, every, before=True)

    def insert_after(
        self,
        relative_path: str,
        pattern: str | re.Pattern[str],
        content: str,
        *,
        marker: str | None = None,
        every: bool = False,
    ) -> bool:
        """Insert *content* immediately after the first match of *pattern*.

        See :meth:`insert_before` for the idempotence rules.
        """
        return self._insert(relative_path, pattern, content, marker, every, before=False)

    def _insert(
        self,
        relative_path: str,
        pattern: str | re.Pattern[str],
        content: str,
        marker: str | None,
        every: bool,
        *,
        before: bool,
    ) -> bool:
        current = self.read(relative_path)
        if (marker or content) in current:
            return False

        def splice(match: re.Match[str]) -> str:
            return content + match.group(0) if before else match.group(0) + content

        updated = re.sub(pattern, splice, current, count=0 if every else 1)
        if updated == current:
            return False
        self.write(relative_path, updated)
        return True

    def replace(
        self,
        relative_path: str,
        pattern: str | re.Pattern[str],
        replacement: str,
    ) -> bool:
        """Substitute every match of *pattern* in a single pass.

        Returns:
            ``True`` if the file changed.
        """
        current = self.read(relative_path)
        updated = re.sub(pattern, replacement, current)
        if updated == current:
            return False
        self.write(relative_path, updated)
        return True

    # -- Manifests ---------------------------------------------------------

    def merge_manifest_list(
        self,
        relative_path: str,
        entries: Iterable[str],
        anchor: str = DEFAULT_ANCHOR,
    ) -> bool:
        """Add ``gem`` declarations that the manifest does not declare yet.

        Returns:
            ``True`` if the file changed.
        """
        current = self.read(relative_path)
        updated = merge_manifest_list(current, entries, anchor, source=str(self.path(relative_path)))
        if updated == current:
            return False
        self.write(relative_path, updated)
        return True

    def merge_structured_manifest(
        self,
        relative_path: str,
        *,
        dependencies: Mapping[str, str] | None = None,
        dev_dependencies: Mapping[str, str] | None = None,
        scripts: Mapping[str, str] | None = None,
        extra: Mapping[str, Any] | None = None,
        skeleton: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Merge maps into a JSON manifest, creating it from *skeleton* if absent.

        Raises:
            ManifestMergeError: If the existing file is not a JSON object.
        """
        source = str(self.path(relative_path))
        if self.exists(relative_path):
            document = load_structured_manifest(self.read(relative_path), source=source)
        else:
            document = dict(skeleton or {})

        merged = merge_structured_manifest(
            document,
            dependencies=dependencies,
            dev_dependencies=dev_dependencies,
            scripts=scripts,
            extra=extra,
            source=source,
        )
        self.write(relative_path, dump_structured_manifest(merged))
        return merged

    # -- Directories and files ---------------------------------------------

    def mkdir(self, relative_path: str) -> Path:
        directory = self.path(relative_path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def copy(self, source_path: str, destination_path: str) -> Path:
        destination = self.path(destination_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.path(source_path), destination)
        return destination

    def remove(self, relative_path: str) -> None:
        """Remove a file or directory tree; missing paths are ignored."""
        target = self.path(relative_path)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()

    def glob(self, pattern: str) -> list[str]:
        return sorted(p.relative_to(self.root).as_posix() for p in self.root.glob(pattern))

    def make_executable(self, relative_path: str) -> None:
        make_executable(self.path(relative_path))
