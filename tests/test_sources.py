import os

import pytest

from promptsync.sources import (
    DuplicateSourceError,
    InvalidSourceError,
    base_url,
    check_duplicate,
    cleanup_empty_dirs,
    matches_source,
    remove_source,
    split_source,
    validate_source_url,
)


def test_base_url_strips_ref():
    assert base_url("github.com/org/prompts#v1.0.0") == "github.com/org/prompts"
    assert base_url("github.com/org/prompts") == "github.com/org/prompts"


@pytest.mark.parametrize(
    "source, expected",
    [
        ("github.com/org/prompts#v1.0.0", ("github.com/org/prompts", "v1.0.0")),
        ("github.com/org/prompts", ("github.com/org/prompts", "")),
        ("github.com/org/prompts#main#extra", ("github.com/org/prompts", "main")),
    ],
)
def test_split_source(source, expected):
    assert split_source(source) == expected


@pytest.mark.parametrize(
    "source",
    ["github.com/org/prompts", "github.com/org/prompts#v1.0.0", "file:///tmp/repo#master"],
)
def test_validate_accepts_repository_paths(source):
    assert validate_source_url(source) is None


@pytest.mark.parametrize(
    "source, message",
    [
        ("", "cannot be empty"),
        ("prompts", "invalid repository format"),
        ("github.com/org/prompts/", "should not end with /"),
        ("https://github.com/org/prompts", "repository path format"),
        ("http://github.com/org/prompts#main", "repository path format"),
    ],
)
def test_validate_rejects_bad_sources(source, message):
    with pytest.raises(InvalidSourceError, match=message):
        validate_source_url(source)


def test_matches_source_ignores_refs():
    assert matches_source("github.com/org/prompts#v1.0.0", "github.com/org/prompts")
    assert not matches_source("github.com/org/prompts-utils", "github.com/org/prompts")


def test_remove_middle_source():
    found, remaining = remove_source(
        ["github.com/org/prompts1", "github.com/org/prompts2", "github.com/org/prompts3"],
        "github.com/org/prompts2",
    )
    assert found is True
    assert remaining == ["github.com/org/prompts1", "github.com/org/prompts3"]


def test_remove_source_with_version_specification():
    found, remaining = remove_source(
        ["github.com/org/prompts#v1.0.0", "github.com/org/other-prompts"],
        "github.com/org/prompts",
    )
    assert found is True
    assert remaining == ["github.com/org/other-prompts"]


def test_remove_non_existent_source():
    found, remaining = remove_source(["github.com/org/prompts"], "github.com/org/nonexistent")
    assert found is False
    assert remaining == ["github.com/org/prompts"]


def test_remove_last_source():
    found, remaining = remove_source(["github.com/org/prompts"], "github.com/org/prompts")
    assert found is True
    assert remaining == []


def test_remove_partial_url_matching():
    found, remaining = remove_source(
        ["github.com/org/prompts#v1.0.0", "github.com/org/prompts-utils"],
        "github.com/org/prompts",
    )
    assert found is True
    assert remaining == ["github.com/org/prompts-utils"]


def test_overlay_source_is_not_removed_from_sources():
    found, remaining = remove_source(["github.com/org/prompts"], "github.com/personal/prompts")
    assert found is False
    assert remaining == ["github.com/org/prompts"]
    assert matches_source("github.com/personal/prompts", "github.com/personal/prompts")


def test_check_duplicate_exact():
    with pytest.raises(DuplicateSourceError, match="already exists in Promptsfile"):
        check_duplicate(["github.com/org/prompts"], [], "github.com/org/prompts")


def test_check_duplicate_different_ref():
    with pytest.raises(DuplicateSourceError) as info:
        check_duplicate(["github.com/org/prompts#v1.0.0"], [], "github.com/org/prompts#main")
    assert str(info.value) == (
        "source 'github.com/org/prompts' already exists (as 'github.com/org/prompts#v1.0.0')"
    )


def test_check_duplicate_overlay():
    overlays = [{"scope": "personal", "source": "github.com/personal/prompts"}]
    with pytest.raises(DuplicateSourceError) as info:
        check_duplicate([], overlays, "github.com/personal/prompts")
    assert str(info.value) == (
        "source 'github.com/personal/prompts' already exists as personal overlay"
    )


def test_check_duplicate_accepts_new_source():
    overlays = [{"scope": "personal", "source": "github.com/personal/prompts"}]
    assert check_duplicate(["github.com/org/prompts"], overlays, "github.com/org/other") is None


def test_cleanup_empty_dirs(tmp_path):
    cursor_dir = tmp_path / ".cursor" / "rules" / "_active"
    claude_dir = tmp_path / ".claude" / "commands"
    cursor_dir.mkdir(parents=True)
    claude_dir.mkdir(parents=True)
    (claude_dir / "other.md").write_text("keep")

    removed = cleanup_empty_dirs(
        tmp_path,
        [
            ".cursor/rules/_active/rule1.md",
            ".cursor/rules/_active/rule2.md",
            ".claude/commands/test-cmd1.md",
        ],
    )

    assert not (tmp_path / ".cursor").exists()
    assert claude_dir.is_dir()
    assert tmp_path.is_dir()
    assert os.path.normpath(str(cursor_dir)) in removed
    assert os.path.normpath(str(tmp_path / ".cursor")) in removed
    assert len(removed) == 3