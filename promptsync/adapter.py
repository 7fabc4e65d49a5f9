"""Core types shared by the agent adapters."""

from __future__ import annotations

import hashlib
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown", ".mdc"})


class Scope(str, Enum):
    """Precedence level of a prompt pack."""

    ORG = "org"
    PROJECT = "project"
    PERSONAL = "personal"


class Strictness(str, Enum):
    """Verification mode."""

    NORMAL = "normal"
    STRICT = "strict"


@dataclass(frozen=True)
class PromptPack:
    """A resolved prompt pack checked out on the local filesystem."""

    name: str
    path: str
    source: str = ""
    ref: str = ""


@dataclass(frozen=True)
class RenderedFile:
    """A file produced by an adapter, relative to its target directory."""

    path: str
    content: bytes
    hash: str


@dataclass(frozen=True)
class AdapterConfig:
    """Per-adapter settings from the Promptsfile."""

    enabled: bool = False
    prefix: str = ""


class VerificationError(Exception):
    """Raised when rendered files do not match their recorded hashes."""


def hash_content(content: bytes) -> str:
    """Return the hex SHA-256 digest of ``content``."""
    return hashlib.sha256(content).hexdigest()


def is_markdown_file(path: str | os.PathLike[str]) -> bool:
    """Tell whether ``path`` has a markdown extension."""
    return os.path.splitext(os.fspath(path))[1].lower() in MARKDOWN_EXTENSIONS


def verify_hashes(
    files: Iterable[RenderedFile], mode: Strictness | str = Strictness.NORMAL
) -> list[str]:
    """Check each file's content against its hash.

    Returns the mismatch messages when they are only warnings. Raises
    VerificationError in strict mode, or when every file mismatches.
    """
    files = list(files)
    mismatches = [
        f"hash mismatch for {f.path}: expected {f.hash}, got {actual}"
        for f in files
        if (actual := hash_content(f.content)) != f.hash
    ]
    if mismatches and (
        Strictness(mode) is Strictness.STRICT or len(mismatches) == len(files)
    ):
        raise VerificationError("verification failed: " + "; ".join(mismatches))
    return mismatches


class AgentAdapter(ABC):
    """Renders prompt packs into an agent-specific layout."""

    @abstractmethod
    def name(self) -> str:
        """Return the adapter name."""

    @abstractmethod
    def detect(self) -> bool:
        """Tell whether the agent appears to be configured here."""

    @abstractmethod
    def target_dir(self, scope: Scope) -> str:
        """Return the directory rendered files go to."""

    @abstractmethod
    def render(self, pack: PromptPack, scope: Scope) -> list[RenderedFile]:
        """Render a prompt pack into files."""

    def verify(
        self, files: Iterable[RenderedFile], mode: Strictness | str = Strictness.NORMAL
    ) -> list[str]:
        """Check rendered files against their hashes."""
        return verify_hashes(files, mode)


class Adapter(ABC):
    """Per-file adapter used by the install workflow."""

    @abstractmethod
    def discover_files(self, source_dir: str | os.PathLike[str]) -> list[str]:
        """Return prompt files under ``source_dir``, relative to it."""

    @abstractmethod
    def render_file(
        self, file_path: str, content: bytes, config: AdapterConfig
    ) -> bytes:
        """Return the rendered content of one prompt file."""

    @abstractmethod
    def output_path(self, input_path: str, config: AdapterConfig) -> str:
        """Return where the rendered form of ``input_path`` is written."""

    @abstractmethod
    def gitignore_patterns(self, config: AdapterConfig) -> list[str]:
        """Return the .gitignore patterns covering this adapter's output."""

    @abstractmethod
    def base_output_dir(self, config: AdapterConfig) -> str:
        """Return the base directory of this adapter's output."""