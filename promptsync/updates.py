"""Selecting prompt sources for update and describing pending updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .sources import matches_source

UNPINNED_BRANCHES = frozenset({"main", "master", "develop", "dev"})


class UpdateSelectionError(ValueError):
    """Raised when the requested sources cannot be selected for update."""


@dataclass(frozen=True)
class SourceUpdate:
    """An update that is available for one configured source."""

    url: str
    current_ref: str = ""
    current_hash: str = ""
    new_ref: str = ""
    new_hash: str = ""
    is_pinned: bool = False


def is_pinned_source(source: str) -> bool:
    """Tell whether ``source`` is pinned to a specific tag or commit.

    A source without a ``#ref``, or whose ref is a common branch name such
    as ``main`` or ``master``, is not pinned.
    """
    parts = source.split("#")
    if len(parts) < 2:
        return False
    return parts[1] not in UNPINNED_BRANCHES


def determine_sources_to_update(
    sources: Sequence[str], args: Sequence[str] = (), force: bool = False
) -> list[str]:
    """Choose which configured sources to update.

    With no ``args`` every unpinned source is chosen (all of them when
    ``force`` is set). Otherwise each argument must name a configured
    source; a pinned one is refused unless ``force`` is set.
    """
    if not args:
        return [s for s in sources if force or not is_pinned_source(s)]

    selected = []
    for arg in args:
        match = next((s for s in sources if matches_source(s, arg)), None)
        if match is None:
            raise UpdateSelectionError(f"source '{arg}' not found in Promptsfile")
        if not force and is_pinned_source(match):
            raise UpdateSelectionError(
                f"source '{match}' is pinned to a specific version. "
                "Use --force to update"
            )
        selected.append(match)
    return selected


def check_for_updates(sources: Iterable[str]) -> list[SourceUpdate]:
    """Return the updates available for ``sources``.

    Every source is reported as having an update; the install step that
    follows fetches and re-renders whatever has actually changed.
    """
    return [SourceUpdate(url=s, is_pinned=is_pinned_source(s)) for s in sources]


def format_updates(updates: Iterable[SourceUpdate], force: bool = False) -> str:
    """Render the list of available updates for display."""
    lines = ["", "Available updates:"]
    for update in updates:
        if update.is_pinned and force:
            lines.append(f"  {update.url} (force update pinned source)")
        else:
            lines.append(f"  {update.url}")
    return "\n".join(lines) + "\n"