"""Manifest parsing and merging.

Two kinds of manifest are merged into a generated application:

* the ``Gemfile``, a line-oriented list of ``gem "name"`` declarations that
  may be grouped in ``group ... do`` blocks, and
* ``package.json``, a JSON document with ``dependencies``,
  ``devDependencies`` and ``scripts`` maps plus free-form top-level fields.

The functions here are pure (text or dict in, text or dict out); reading and
writing files is left to :class:`appgen.generators.toolkit.FileToolkit`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from ..errors import ManifestMergeError

DEFAULT_ANCHOR = "group :development do"

_DECLARATION_KEYWORD = "gem"
_QUOTES = ("'", '"')


@dataclass(frozen=True)
class ManifestEntry:
    """A single declared package: its name and the raw declaration line."""

    name: str
    line: str


def parse_entry(line: str) -> ManifestEntry | None:
    """Parse a ``gem "name"`` declaration.

    Leading whitespace is allowed and anything after the closing quote
    (version constraints, options, comments) is kept in :attr:`line` but
    ignored for the name.  Returns ``None`` for lines that declare nothing.

    Examples::

        parse_entry('gem "solid_cache"')          -> ManifestEntry("solid_cache", ...)
        parse_entry("  gem 'pg', '~> 1.1'")       -> ManifestEntry("pg", ...)
        parse_entry('# gem "commented_out"')      -> None
    """
    text = line.strip()
    if not text.startswith(_DECLARATION_KEYWORD):
        return None

    rest = text[len(_DECLARATION_KEYWORD):]
    if not rest or not (rest[0].isspace() or rest[0] == "("):
        return None
    rest = rest.lstrip(" \t(")

    if not rest or rest[0] not in _QUOTES:
        return None
    quote = rest[0]
    end = rest.find(quote, 1)
    if end <= 1:
        return None

    return ManifestEntry(name=rest[1:end], line=line.rstrip("\n"))


def parse_manifest(text: str) -> list[ManifestEntry]:
    """Return every declared entry in *text*, in file order."""
    entries: list[ManifestEntry] = []
    for line in text.splitlines():
        entry = parse_entry(line)
        if entry is not None:
            entries.append(entry)
    return entries


def merge_manifest_list(
    text: str,
    lines: Iterable[str],
    anchor: str = DEFAULT_ANCHOR,
    *,
    source: str = "Gemfile",
) -> str:
    """Merge declaration *lines* into manifest *text* without duplicates.

    Each candidate is skipped when a declaration with the same name already
    exists anywhere in the file, including entries inserted earlier in the
    same call.  New entries go on their own line right before the first line
    equal to *anchor*; without an anchor they are appended to the end.

    Raises:
        ManifestMergeError: If a candidate line declares nothing.
    """
    declared = {entry.name for entry in parse_manifest(text)}
    merged = text

    for raw in lines:
        entry = parse_entry(raw)
        if entry is None:
            raise ManifestMergeError(source, f"cannot find a package name in {raw!r}")
        if entry.name in declared:
            continue

        merged = _insert_entry(merged, entry.line.strip(), anchor)
        declared.add(entry.name)

    return merged


def _insert_entry(text: str, line: str, anchor: str) -> str:
    lines = text.splitlines(keepends=True)
    for index, existing in enumerate(lines):
        if existing.strip() == anchor:
            lines.insert(index, f"{line}\n")
            return "".join(lines)
    return f"{text}\n{line}\n"


# ---------------------------------------------------------------------------
# Structured (package.json) manifests
# ---------------------------------------------------------------------------

STRUCTURED_SECTIONS = ("dependencies", "devDependencies", "scripts")


def load_structured_manifest(text: str, *, source: str = "package.json") -> dict[str, Any]:
    """Parse *text* as a JSON object.

    Raises:
        ManifestMergeError: If the text is not valid JSON or not an object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestMergeError(source, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise ManifestMergeError(source, "top-level value must be an object")
    return data


def merge_structured_manifest(
    document: Mapping[str, Any],
    dependencies: Mapping[str, str] | None = None,
    dev_dependencies: Mapping[str, str] | None = None,
    scripts: Mapping[str, str] | None = None,
    extra: Mapping[str, Any] | None = None,
    *,
    source: str = "package.json",
) -> dict[str, Any]:
    """Shallow-merge the given maps into a copy of *document*.

    New keys overwrite same-named existing keys; keys not mentioned are kept
    as they are.  Running the same merge twice yields the same document.
    """
    merged = dict(document)
    updates = {
        "dependencies": dependencies,
        "devDependencies": dev_dependencies,
        "scripts": scripts,
    }
    for section in STRUCTURED_SECTIONS:
        current = merged.get(section)
        if current is None:
            current = {}
        if not isinstance(current, dict):
            raise ManifestMergeError(source, f"'{section}' must be an object")
        merged[section] = {**current, **(updates[section] or {})}

    for key, value in (extra or {}).items():
        merged[key] = value

    return merged


def dump_structured_manifest(document: Mapping[str, Any]) -> str:
    """Serialise *document* as indented JSON with a trailing newline."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
