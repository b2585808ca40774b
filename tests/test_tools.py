"""Tool-level tests: every call returns the response envelope."""

import asyncio

from conftest import write_note
from vault_navigator.tools.graph_tools import get_related_notes
from vault_navigator.tools.note_tools import append_to_note, create_note, get_note
from vault_navigator.tools.search_tools import search_notes

ENVELOPE_FIELDS = {"success", "timestamp", "execution_time_ms"}


def test_search_notes_tool(configured_vault):
    write_note(configured_vault.path, "Roadmap.md", "The roadmap for Q1.")
    response = asyncio.run(search_notes(query="roadmap"))

    assert set(response) == ENVELOPE_FIELDS | {"data"}
    assert response["success"] is True
    assert response["data"]["results"][0]["path"] == "Roadmap.md"


def test_search_notes_tool_rejects_bad_sort(configured_vault):
    response = asyncio.run(search_notes(query="roadmap", sort_by="size"))
    assert set(response) == ENVELOPE_FIELDS | {"error"}
    assert response["error"]["code"] == "INVALID_PARAMETER"


def test_get_note_tool_not_found(configured_vault):
    write_note(configured_vault.path, "Projects/Roadmap.md", "x")
    response = asyncio.run(get_note(path="Projects/Roadmap"))

    assert response["success"] is False
    assert response["error"]["code"] == "NOTE_NOT_FOUND"
    assert "Projects/Roadmap.md" in response["error"]["suggestions"]


def test_get_note_tool_folder(configured_vault):
    (configured_vault.path / "Projects").mkdir()
    response = asyncio.run(get_note(path="Projects"))
    assert response["error"]["code"] == "PATH_IS_FOLDER"


def test_get_note_tool_invalid_path(configured_vault):
    response = asyncio.run(get_note(path="../../etc/passwd"))
    assert response["error"]["code"] == "INVALID_PATH"


def test_create_note_tool_conflict_and_overwrite(configured_vault):
    first = asyncio.run(create_note(filename="foo", content="x"))
    assert first["success"] is True
    assert first["data"]["wikilink"] == "[[foo]]"

    conflict = asyncio.run(create_note(filename="foo", content="y"))
    assert conflict["error"]["code"] == "FILE_EXISTS"

    replaced = asyncio.run(create_note(filename="foo", content="y", overwrite=True))
    assert replaced["data"]["overwritten"] is True

    note = asyncio.run(get_note(path="foo.md"))
    assert note["data"]["content"] == "y"


def test_create_note_tool_missing_filename(configured_vault):
    response = asyncio.run(create_note(filename="", content="x"))
    assert response["error"]["code"] == "MISSING_PARAMETER"


def test_append_to_note_tool(configured_vault):
    write_note(configured_vault.path, "Note.md", "baz")
    response = asyncio.run(append_to_note(path="Note.md", content="bar", position="start"))

    assert response["success"] is True
    assert response["data"]["new_length"] == 7
    assert (configured_vault.path / "Note.md").read_text(encoding="utf-8") == "bar\nbaz"


def test_append_to_note_tool_invalid_position(configured_vault):
    write_note(configured_vault.path, "Note.md", "baz")
    response = asyncio.run(append_to_note(path="Note.md", content="bar", position="middle"))
    assert response["error"]["code"] == "INVALID_PARAMETER"
    assert (configured_vault.path / "Note.md").read_text(encoding="utf-8") == "baz"


def test_related_notes_tool(configured_vault):
    write_note(configured_vault.path, "A.md", "[[B]]")
    write_note(configured_vault.path, "B.md", "[[C]]")
    write_note(configured_vault.path, "C.md", "")

    response = asyncio.run(get_related_notes(path="A.md", depth=2))

    assert response["success"] is True
    data = response["data"]
    assert [note["path"] for note in data["direct_outlinks"]] == ["B.md"]
    assert [note["path"] for note in data["transitive_outlinks"]] == ["C.md"]
    assert data["total_related"] == 2


def test_related_notes_tool_depth_validation(configured_vault):
    write_note(configured_vault.path, "A.md", "")
    for depth in (0, 4):
        response = asyncio.run(get_related_notes(path="A.md", depth=depth))
        assert response["error"]["code"] == "INVALID_PARAMETER"
    for depth in (1, 2, 3):
        assert asyncio.run(get_related_notes(path="A.md", depth=depth))["success"] is True


def test_unknown_vault(configured_vault):
    response = asyncio.run(search_notes(query="x", vault="elsewhere"))
    assert response["error"]["code"] == "INVALID_PARAMETER"
