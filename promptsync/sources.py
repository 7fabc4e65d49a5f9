"""Parsing, validation and bookkeeping of Promptsfile source entries."""

from __future__ import annotations

import os
from typing import Any, Iterable, Mapping


class InvalidSourceError(ValueError):
    """Raised when a source string is not a usable repository reference."""


class DuplicateSourceError(ValueError):
    """Raised when a source is already listed in the Promptsfile."""


def base_url(source: str) -> str:
    """Return the repository part of ``source``, without any ``#ref``."""
    return source.split("#")[0]


def split_source(source: str) -> tuple[str, str]:
    """Split ``source`` into its repository URL and ref (empty if none)."""
    parts = source.split("#")
    return parts[0], parts[1] if len(parts) > 1 else ""


def validate_source_url(source: str) -> None:
    """Check that ``source`` looks like ``host/org/repo[#ref]``.

    Raises InvalidSourceError describing the first problem found.
    """
    if not source:
        raise InvalidSourceError("source URL cannot be empty")
    url = base_url(source)
    if "/" not in url:
        raise InvalidSourceError("invalid repository format")
    if url.endswith("/"):
        raise InvalidSourceError("URL should not end with /")
    if url.startswith(("http://", "https://")):
        raise InvalidSourceError(
            "please use repository path format (e.g., github.com/org/repo) "
            "instead of full URL"
        )


def matches_source(source: str, target: str) -> bool:
    """Tell whether two sources name the same repository, ignoring refs."""
    return base_url(source) == base_url(target)


def remove_source(sources: Iterable[str], target: str) -> tuple[bool, list[str]]:
    """Drop every entry naming the same repository as ``target``.

    Returns whether anything matched and the remaining sources in order.
    """
    remaining = []
    found = False
    for source in sources:
        if matches_source(source, target):
            found = True
        else:
            remaining.append(source)
    return found, remaining


def _overlay_field(overlay: Any, name: str) -> str:
    if isinstance(overlay, Mapping):
        return str(overlay.get(name, ""))
    return str(getattr(overlay, name, ""))


def check_duplicate(
    sources: Iterable[str], overlays: Iterable[Any], source: str
) -> None:
    """Raise DuplicateSourceError if ``source`` is already configured.

    ``overlays`` holds mappings or objects with ``scope`` and ``source``.
    """
    source_base = base_url(source)
    for existing in sources:
        if existing == source:
            raise DuplicateSourceError(
                f"source '{source}' already exists in Promptsfile"
            )
        if base_url(existing) == source_base:
            raise DuplicateSourceError(
                f"source '{source_base}' already exists (as '{existing}')"
            )
    for overlay in overlays:
        if _overlay_field(overlay, "source") == source:
            scope = _overlay_field(overlay, "scope")
            raise DuplicateSourceError(
                f"source '{source}' already exists as {scope} overlay"
            )


def cleanup_empty_dirs(
    work_dir: str | os.PathLike[str], paths: Iterable[str]
) -> list[str]:
    """Remove directories left empty after deleting ``paths``.

    Every directory between each path and ``work_dir`` is tried, deepest
    first; non-empty ones are left alone. Returns the directories removed.
    """
    root = os.path.normpath(os.fspath(work_dir))
    candidates: set[str] = set()
    for path in paths:
        directory = os.path.dirname(os.path.normpath(os.path.join(root, path)))
        while directory not in ("", ".", root):
            candidates.add(directory)
            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

    removed = []
    for directory in sorted(candidates, key=lambda d: (-d.count(os.sep), d)):
        try:
            os.rmdir(directory)
        except OSError:
            continue
        removed.append(directory)
    return removed