"""Minimum-version comparison for dependency probes."""

from __future__ import annotations

import re

__all__ = ["extract_version", "satisfies"]

# "3.2.0", "v20.11.1", "ruby 3.3.0p0", "psql (PostgreSQL) 16.2"
_VERSION_PATTERN = re.compile(r"v?(\d+\.\d+(?:\.\d+)?)", re.IGNORECASE)


def extract_version(output: str | None) -> str | None:
    """Return the first dotted version number found in *output*.

    A leading ``v`` is tolerated and stripped.  Two and three part versions are
    recognised; ``None`` is returned when nothing looks like a version.
    """
    if not output:
        return None
    match = _VERSION_PATTERN.search(output)
    return match.group(1) if match else None


def _components(version: str) -> list[int]:
    parts: list[int] = []
    for piece in version.strip().split("."):
        digits = re.match(r"\d+", piece)
        parts.append(int(digits.group(0)) if digits else 0)
    return parts


def satisfies(current: str | None, required: str | None) -> bool:
    """Return ``True`` if *current* is at least *required*.

    Components are compared left to right over the length of *required*;
    components missing on either side count as ``0``, so ``"3.3"`` satisfies
    ``"3.2.0"`` and ``"3.2"`` satisfies ``"3.2.0"``.

    Examples::

        satisfies("3.2.0", "3.2.0")  -> True
        satisfies("3.1.9", "3.2.0")  -> False
        satisfies("1.0.0", None)     -> True
        satisfies(None, "1.0.0")     -> False
    """
    if required is None:
        return True
    if current is None:
        return False

    current_parts = _components(current)
    for index, required_part in enumerate(_components(required)):
        current_part = current_parts[index] if index < len(current_parts) else 0
        if current_part > required_part:
            return True
        if current_part < required_part:
            return False
    return True
