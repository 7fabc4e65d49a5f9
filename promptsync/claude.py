"""Adapters that render prompt packs as Claude slash commands."""

from __future__ import annotations

import os
import posixpath
import re
import stat
from pathlib import Path
from typing import Iterable, Iterator

from .adapter import (
    Adapter,
    AdapterConfig,
    AgentAdapter,
    PromptPack,
    RenderedFile,
    Scope,
    Strictness,
    hash_content,
    is_markdown_file,
    verify_hashes,
)

_COMMANDS_PARTS = (".claude", "commands")
COMMANDS_DIR = posixpath.join(*_COMMANDS_PARTS)

_NON_WORD = re.compile(r"[^a-zA-Z0-9\-]+")
_DASHES = re.compile(r"-+")


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield files under ``root`` in lexical order, without following links."""
    if not stat.S_ISDIR(os.lstat(root).st_mode):
        yield root
        return
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(path)
        else:
            yield path


def resolve_prefix(source_prefix: str, config_prefix: str, source_name: str) -> str:
    """Pick the command prefix: source prefix, then config prefix, then name."""
    return source_prefix or config_prefix or to_kebab_case(source_name)


def generate_file_name(prefix: str, file_path: str) -> str:
    """Build the prefixed command file name from a prompt path."""
    name = os.path.basename(os.path.normpath(file_path))
    name = name.replace(" ", "-").replace("_", "-")
    return f"{prefix}-{name}"


def to_kebab_case(s: str) -> str:
    """Convert ``s`` to kebab-case."""
    s = _NON_WORD.sub("-", s.strip())
    if not s:
        return ""
    chars = []
    last = len(s) - 1
    for i, ch in enumerate(s):
        if 0 < i < last and "A" <= ch <= "Z":
            if "a" <= s[i - 1] <= "z" or "a" <= s[i + 1] <= "z":
                chars.append("-")
        chars.append(ch.lower())
    return _DASHES.sub("-", "".join(chars)).strip("-")


class ClaudeAdapter(AgentAdapter):
    """Renders a pack's markdown prompts as prefixed Claude commands."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def name(self) -> str:
        return "claude"

    def detect(self) -> bool:
        return os.path.exists(".claude")

    def target_dir(self, scope: Scope) -> str:
        # Every scope shares the single commands directory.
        return posixpath.join(*_COMMANDS_PARTS)

    def render(self, pack: PromptPack, scope: Scope) -> list[RenderedFile]:
        prompts_dir = Path(pack.path) / "prompts"
        if not prompts_dir.exists():
            raise FileNotFoundError(f"prompts directory not found: {prompts_dir}")
        files = []
        for path in _walk_files(prompts_dir):
            if not is_markdown_file(path) or path.name == "metadata.yaml":
                continue
            content = path.read_bytes()
            rel = os.path.relpath(path, prompts_dir)
            files.append(
                RenderedFile(
                    path=generate_file_name(self.prefix, rel),
                    content=content,
                    hash=hash_content(content),
                )
            )
        return files

    def verify(
        self, files: Iterable[RenderedFile], mode: Strictness | str = Strictness.NORMAL
    ) -> list[str]:
        return verify_hashes(files, mode)


class ClaudeSimpleAdapter(Adapter):
    """Workflow adapter that copies prompts into .claude/commands."""

    def discover_files(self, source_dir: str | os.PathLike[str]) -> list[str]:
        source = Path(source_dir)
        prompts_dir = source / "prompts"
        if not prompts_dir.exists():
            commands_dir = source / "commands"
            if not commands_dir.exists():
                return []
            prompts_dir = commands_dir
        return [
            os.path.relpath(path, source)
            for path in _walk_files(prompts_dir)
            if is_markdown_file(path)
        ]

    def render_file(
        self, file_path: str, content: bytes, config: AdapterConfig
    ) -> bytes:
        # Claude commands are plain markdown; the content is copied as is.
        return bytes(content)

    def output_path(self, input_path: str, config: AdapterConfig) -> str:
        name = os.path.basename(os.path.normpath(input_path))
        if config.prefix:
            name = f"{config.prefix}-{name}"
        return os.path.join(COMMANDS_DIR, name)

    def gitignore_patterns(self, config: AdapterConfig) -> list[str]:
        if config.prefix:
            return [f"{COMMANDS_DIR}/{config.prefix}-*"]
        return [f"{COMMANDS_DIR}/*"]

    def base_output_dir(self, config: AdapterConfig) -> str:
        return posixpath.join(*_COMMANDS_PARTS)