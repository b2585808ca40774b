import pytest

from conftest import write_note
from vault_navigator.core.vault_operations import (
    classify_entry,
    ensure_folder,
    ensure_note_extension,
    find_similar_paths,
    list_markdown_files,
    resolve_note_path,
    validate_vault_path,
)
from vault_navigator.data_models import EntryKind
from vault_navigator.errors import FolderCreateError, InvalidPathError, MissingParameterError


def test_validate_preserves_dots_in_basename():
    """Dots within the note name are not traversal segments."""
    path = "v1.4 Release Changelog.md"
    assert validate_vault_path(path) == path


def test_validate_normalizes_backslashes():
    assert validate_vault_path("Projects\\Roadmap.md") == "Projects/Roadmap.md"


@pytest.mark.parametrize(
    "path",
    ["../outside.md", "Projects/../../x.md", "./note.md", "/etc/passwd", "C:/Users/me/note.md", "c:\\note.md"],
)
def test_validate_rejects_unsafe_paths(path):
    with pytest.raises(InvalidPathError):
        validate_vault_path(path)


def test_validate_rejects_empty_path():
    with pytest.raises(MissingParameterError):
        validate_vault_path("   ")


def test_ensure_note_extension_is_case_insensitive():
    assert ensure_note_extension("Roadmap") == "Roadmap.md"
    assert ensure_note_extension("Roadmap.MD") == "Roadmap.MD"


def test_resolve_note_path_rejects_symlink_escape(vault, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (vault.path / "link").symlink_to(outside, target_is_directory=True)
    with pytest.raises(InvalidPathError):
        resolve_note_path(vault, "link/secret.md")


def test_classify_entry(vault):
    write_note(vault.path, "Projects/Roadmap.md", "x")
    assert classify_entry(vault, "Projects/Roadmap.md") is EntryKind.FILE
    assert classify_entry(vault, "Projects") is EntryKind.FOLDER
    assert classify_entry(vault, "Projects/Missing.md") is EntryKind.MISSING


def test_list_markdown_files_skips_hidden_folders(vault):
    write_note(vault.path, "b.md", "")
    write_note(vault.path, "Projects/a.md", "")
    write_note(vault.path, ".obsidian/workspace.md", "")
    write_note(vault.path, ".trash/old.md", "")
    write_note(vault.path, "image.png", "")
    assert list_markdown_files(vault) == ["Projects/a.md", "b.md"]


def test_list_markdown_files_skips_notes_resolving_outside_vault(vault, tmp_path):
    write_note(vault.path, "Good.md", "")
    outside = write_note(tmp_path, "elsewhere/Linked.md", "")
    (vault.path / "Linked.md").symlink_to(outside)
    assert list_markdown_files(vault) == ["Good.md"]


def test_ensure_folder_creates_nested_folders(vault):
    assert ensure_folder(vault, "Projects/2025/Q1") is True
    assert (vault.path / "Projects" / "2025" / "Q1").is_dir()
    assert ensure_folder(vault, "Projects/2025/Q1") is False


def test_ensure_folder_fails_when_file_is_in_the_way(vault):
    write_note(vault.path, "Projects", "not a folder")
    with pytest.raises(FolderCreateError):
        ensure_folder(vault, "Projects")


def test_find_similar_paths_prefers_closest_match(vault):
    write_note(vault.path, "Projects/Roadmap.md", "")
    write_note(vault.path, "Archive/Old Roadmap.md", "")
    write_note(vault.path, "Zebra.md", "")
    write_note(vault.path, "Daily/2025-01-15.md", "")

    suggestions = find_similar_paths(vault, "Projects/Roadmap")
    assert suggestions[0] == "Projects/Roadmap.md"
    assert len(suggestions) <= 3


def test_find_similar_paths_with_empty_target(vault):
    write_note(vault.path, "a.md", "")
    assert find_similar_paths(vault, "") == []
