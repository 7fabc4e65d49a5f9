# promptsync

Tools for keeping the AI prompts of a project in order. Prompt packs are
directories of markdown files; promptsync renders them into the places where
coding agents look for them:

- Cursor rules under `.cursor/rules/_active/`
- Claude commands under `.claude/commands/`

It also has helpers for the source entries of a `Promptsfile`
(`host/org/repo#ref` strings).

## Installation

```
pip install promptsync
```

## Starting a project

In the root of your project:

```
prompt-sync init
```

This writes a commented `Promptsfile` template and appends a managed block
(`# BEGIN prompt-sync managed` … `# END prompt-sync managed`, listing
`.cursor/rules/`) to `.gitignore`. If a `Promptsfile` already exists the
command stops with an error; replace it with:

```
prompt-sync init --force
```

The `.gitignore` block is added only once, so running `init` again does not
duplicate it. The same steps are available as `promptsync.project.init_project`,
`create_promptsfile` and `ensure_gitignore_block`.

## Rendering prompt packs

`promptsync.adapter` holds the shared types: `Scope`, `Strictness`,
`PromptPack`, `RenderedFile`, `AdapterConfig`, and the abstract `AgentAdapter`
and `Adapter` classes.

### Claude commands

`ClaudeAdapter(prefix).render(pack, scope)` reads every markdown file
(`.md`, `.markdown`, `.mdc`) under the pack's `prompts/` directory and returns
it unchanged, under a prefixed file name:

```python
from promptsync.claude import generate_file_name, resolve_prefix, to_kebab_case

to_kebab_case("MyCompany")                   # "my-company"
resolve_prefix("", "", "user@host/repo")     # "user-host-repo"
generate_file_name("app", "test_utils.md")   # "app-test-utils.md"
```

An explicit source prefix wins over the configured one, which in turn wins
over the kebab-cased source name.

### Cursor rules

`CursorAdapter().render(pack, scope)` reads the markdown files under
`prompts/` and writes each with YAML front-matter. Metadata is merged from
three layers, lowest precedence first: the `defaults` of the pack's
`prompts/metadata.yaml`, its per-file entries under `files` (keyed by file
name), and the front-matter of the rule itself. A `null` value in a higher
layer removes the field.

```python
from promptsync.cursor import merge_metadata, parse_front_matter, render_cursor_rule

meta, body = parse_front_matter(b"---\ntitle: Test Rule\n---\n\nBody.")
merged = merge_metadata({"alwaysApply": True}, {}, meta)
render_cursor_rule(merged, body)
```

### Per-file adapters

`ClaudeSimpleAdapter` and `CursorSimpleAdapter` work one file at a time.
`discover_files` looks in `prompts/`, falling back to `commands/` (Claude) or
`rules/` (Cursor); `render_file` returns the content unchanged;
`output_path`, `gitignore_patterns` and `base_output_dir` say where output
goes. Claude output names get `<prefix>-` when `AdapterConfig.prefix` is set.

### Integrity

Every `RenderedFile` records the SHA-256 of its content (`hash_content`).
`verify_hashes(files, mode)` — also each adapter's `verify` — returns the
mismatch messages as warnings in `Strictness.NORMAL` mode, and raises
`VerificationError` in `Strictness.STRICT` mode or when every file mismatches.

## Sources

```python
from promptsync.sources import validate_source_url, remove_source
from promptsync.updates import is_pinned_source

validate_source_url("github.com/org/prompts#v1.0.0")   # passes
is_pinned_source("github.com/org/prompts#main")        # False
is_pinned_source("github.com/org/prompts#v1.0.0")      # True
```

- `validate_source_url` rejects empty strings, full URLs (`http://`,
  `https://`), paths without a `/` and paths ending in `/` with
  `InvalidSourceError`.
- `check_duplicate` raises `DuplicateSourceError` if a source, or another ref
  of the same repository, or an identical overlay source is already listed.
- `remove_source` drops every entry for the same repository, whatever its
  ref; `cleanup_empty_dirs` removes directories left empty after deleting
  rendered files.
- `determine_sources_to_update` picks unpinned sources (or those named,
  refusing pinned ones without `force`) and raises `UpdateSelectionError`;
  `check_for_updates` reports every given source as a `SourceUpdate`, and
  `format_updates` formats them for display. Branches named `main`,
  `master`, `develop` and `dev` are not treated as pinned.

## What it does not do

The only command is `prompt-sync init`. promptsync does not clone or fetch
Git repositories, does not read or write a `Promptsfile.lock`, and has no
`install`, `add`, `remove`, `list`, `update` or `verify` commands; the
helpers above work on lists of source strings and on prompt packs that are
already on disk.

## Running the tests

```
pip install -e ".[test]"
pytest
```