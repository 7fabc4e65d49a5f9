"""Adapters that render prompt packs as Cursor rules."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

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
from .claude import _walk_files

_ACTIVE_RULES_PARTS = (".cursor", "rules", "_active")
ACTIVE_RULES_DIR = posixpath.join(*_ACTIVE_RULES_PARTS)
METADATA_FILE = "metadata.yaml"

_FENCE = b"---"


@dataclass
class Metadata:
    """Contents of a pack's metadata.yaml: defaults and per-file overrides."""

    defaults: dict[str, Any] = field(default_factory=dict)
    files: dict[str, dict[str, Any]] = field(default_factory=dict)


def load_metadata_file(path: str | os.PathLike[str]) -> Metadata:
    """Load a metadata.yaml file; a missing file gives empty metadata."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return Metadata()

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"parse metadata.yaml: {exc}") from exc

    if data is None:
        return Metadata()
    if not isinstance(data, dict):
        raise ValueError("parse metadata.yaml: expected a mapping")

    defaults = data.get("defaults") or {}
    files = data.get("files") or {}
    if not isinstance(defaults, dict) or not isinstance(files, dict):
        raise ValueError("parse metadata.yaml: defaults and files must be mappings")

    overrides: dict[str, dict[str, Any]] = {}
    for name, override in files.items():
        if override is None:
            override = {}
        if not isinstance(override, dict):
            raise ValueError(f"parse metadata.yaml: override for {name} must be a mapping")
        overrides[str(name)] = override
    return Metadata(defaults=dict(defaults), files=overrides)


def parse_front_matter(content: bytes) -> tuple[dict[str, Any], bytes]:
    """Split markdown ``content`` into its YAML front-matter and body.

    Content without an opening and closing ``---`` fence is returned
    unchanged with empty front-matter. Raises ValueError on bad YAML.
    """
    if not (content.startswith(b"---\n") or content.startswith(b"---\r\n")):
        return {}, content

    lines = content.split(b"\n")
    end = next(
        (i for i, line in enumerate(lines[1:], start=1) if line.strip() == _FENCE),
        None,
    )
    if end is None:
        return {}, content

    raw = b"\n".join(lines[1:end])
    try:
        data = yaml.safe_load(raw.decode("utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ValueError(f"parse YAML front-matter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("parse YAML front-matter: expected a mapping")

    body = b"\n".join(lines[end + 1 :]).lstrip(b"\n\r")
    return data, body


def merge_metadata(
    defaults: Mapping[str, Any] | None,
    file_override: Mapping[str, Any] | None,
    front_matter: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge defaults, file overrides and front-matter, later layers winning.

    A None value in an override layer removes the key.
    """
    result = dict(defaults or {})
    for layer in (file_override, front_matter):
        for key, value in (layer or {}).items():
            if value is None:
                result.pop(key, None)
            else:
                result[key] = value
    return result


def render_cursor_rule(metadata: Mapping[str, Any], body: bytes) -> bytes:
    """Render a rule file: metadata as YAML front-matter, then the body."""
    if not metadata:
        return bytes(body)
    dumped = yaml.safe_dump(
        dict(metadata), sort_keys=True, default_flow_style=False, allow_unicode=True
    )
    return b"---\n" + dumped.encode("utf-8") + b"---\n\n" + bytes(body)


class CursorAdapter(AgentAdapter):
    """Renders a pack's markdown prompts as Cursor rules with merged metadata."""

    def name(self) -> str:
        return "cursor"

    def detect(self) -> bool:
        return os.path.exists(".cursor")

    def target_dir(self, scope: Scope) -> str:
        # Every scope shares the single active rules directory.
        return posixpath.join(*_ACTIVE_RULES_PARTS)

    def render(self, pack: PromptPack, scope: Scope) -> list[RenderedFile]:
        prompts_dir = Path(pack.path) / "prompts"
        if not prompts_dir.exists():
            raise FileNotFoundError(f"prompts directory not found: {prompts_dir}")

        try:
            metadata = load_metadata_file(prompts_dir / METADATA_FILE)
        except (OSError, ValueError):
            metadata = Metadata()

        files = []
        for path in _walk_files(prompts_dir):
            if not is_markdown_file(path) or path.name == METADATA_FILE:
                continue
            content = path.read_bytes()
            try:
                front_matter, body = parse_front_matter(content)
            except ValueError as exc:
                raise ValueError(f"parse front-matter in {path}: {exc}") from exc
            effective = merge_metadata(
                metadata.defaults, metadata.files.get(path.name), front_matter
            )
            rendered = render_cursor_rule(effective, body)
            files.append(
                RenderedFile(
                    path=os.path.relpath(path, prompts_dir),
                    content=rendered,
                    hash=hash_content(rendered),
                )
            )
        return files

    def verify(
        self, files: Iterable[RenderedFile], mode: Strictness | str = Strictness.NORMAL
    ) -> list[str]:
        return verify_hashes(files, mode)


class CursorSimpleAdapter(Adapter):
    """Workflow adapter that copies prompts into .cursor/rules/_active."""

    def discover_files(self, source_dir: str | os.PathLike[str]) -> list[str]:
        source = Path(source_dir)
        prompts_dir = source / "prompts"
        if not prompts_dir.exists():
            rules_dir = source / "rules"
            if not rules_dir.exists():
                return []
            prompts_dir = rules_dir
        return [
            os.path.relpath(path, source)
            for path in _walk_files(prompts_dir)
            if is_markdown_file(path)
        ]

    def render_file(
        self, file_path: str, content: bytes, config: AdapterConfig
    ) -> bytes:
        # Rules are copied verbatim; metadata merging is the full adapter's job.
        return bytes(content)

    def output_path(self, input_path: str, config: AdapterConfig) -> str:
        name = os.path.basename(os.path.normpath(input_path))
        return os.path.join(ACTIVE_RULES_DIR, name)

    def gitignore_patterns(self, config: AdapterConfig) -> list[str]:
        return [f"{ACTIVE_RULES_DIR}/"]

    def base_output_dir(self, config: AdapterConfig) -> str:
        return posixpath.join(*_ACTIVE_RULES_PARTS)