"""Project initialisation and the command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

PROMPTSFILE_NAME = "Promptsfile"
GITIGNORE_NAME = ".gitignore"

MANAGED_BEGIN = "# BEGIN prompt-sync managed\n"
MANAGED_END = "# END prompt-sync managed\n"

PROMPTSFILE_TEMPLATE = """# Promptsfile – managed by prompt-sync

# Define your prompt sources here. Example:
# sources:
#   - name: myteam/common-prompts
#     url:  git@example.com:myteam/common-prompts.git
#     ref:  main
#"""


def create_promptsfile(
    directory: str | os.PathLike[str] = ".", force: bool = False
) -> Path:
    """Write a template Promptsfile into ``directory`` and return its path.

    Raises FileExistsError if one is already there and ``force`` is false.
    """
    path = Path(directory) / PROMPTSFILE_NAME
    if path.exists() and not force:
        raise FileExistsError(
            f"{PROMPTSFILE_NAME} already exists (use --force to overwrite)"
        )
    path.write_text(PROMPTSFILE_TEMPLATE, encoding="utf-8")
    return path


def ensure_gitignore_block(directory: str | os.PathLike[str] = ".") -> bool:
    """Append the managed block to .gitignore unless it is already there.

    Returns True if the file was written.
    """
    path = Path(directory) / GITIGNORE_NAME
    try:
        existing = path.read_bytes()
    except FileNotFoundError:
        existing = b""
    if MANAGED_BEGIN.encode("utf-8") in existing:
        return False
    block = MANAGED_BEGIN + ".cursor/rules/\n" + MANAGED_END
    try:
        path.write_bytes(existing + block.encode("utf-8"))
    except OSError as exc:
        raise OSError(f"write .gitignore: {exc}") from exc
    return True


def init_project(directory: str | os.PathLike[str] = ".", force: bool = False) -> None:
    """Create the Promptsfile and the managed .gitignore block."""
    create_promptsfile(directory, force)
    ensure_gitignore_block(directory)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-sync",
        description="Prompt-Sync CLI – AI prompt package manager",
    )
    commands = parser.add_subparsers(dest="command")
    init = commands.add_parser(
        "init", help="Initialize Prompt-Sync in the current project"
    )
    init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="overwrite existing Promptsfile if present",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    try:
        if args.command == "init":
            init_project(Path.cwd(), args.force)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())