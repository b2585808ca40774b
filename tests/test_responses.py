from datetime import datetime

from vault_navigator.errors import NoteNotFoundError
from vault_navigator.models import GetNoteInput, RelatedNotesInput
from vault_navigator.responses import error_response, run_tool, success_response


def test_success_envelope():
    payload = success_response({"value": 1})
    assert set(payload) == {"success", "data", "timestamp", "execution_time_ms"}
    assert payload["success"] is True
    assert payload["data"] == {"value": 1}
    assert payload["timestamp"].endswith("Z")
    datetime.fromisoformat(payload["timestamp"].replace("Z", "+00:00"))
    assert payload["execution_time_ms"] >= 0


def test_error_envelope_without_suggestions():
    payload = error_response("INVALID_PATH", "bad path")
    assert set(payload) == {"success", "error", "timestamp", "execution_time_ms"}
    assert payload["success"] is False
    assert payload["error"] == {"code": "INVALID_PATH", "message": "bad path"}


def test_error_envelope_with_suggestions():
    payload = error_response("NOTE_NOT_FOUND", "missing", suggestions=["a.md", "b.md"])
    assert payload["error"]["suggestions"] == ["a.md", "b.md"]


def test_run_tool_success():
    payload = run_tool("demo", "DEMO_ERROR", lambda: {"ok": True})
    assert payload["success"] is True
    assert payload["data"] == {"ok": True}


def test_run_tool_maps_missing_field():
    payload = run_tool("demo", "DEMO_ERROR", lambda: GetNoteInput())
    assert payload["error"]["code"] == "MISSING_PARAMETER"
    assert payload["error"]["message"] == "Parameter 'path' is required"


def test_run_tool_maps_custom_validation_types():
    invalid_path = run_tool("demo", "DEMO_ERROR", lambda: GetNoteInput(path="../x.md"))
    assert invalid_path["error"]["code"] == "INVALID_PATH"
    assert "traversal" in invalid_path["error"]["message"]

    invalid_depth = run_tool("demo", "DEMO_ERROR", lambda: RelatedNotesInput(path="a.md", depth=9))
    assert invalid_depth["error"]["code"] == "INVALID_PARAMETER"


def test_run_tool_maps_vault_errors():
    def operation():
        raise NoteNotFoundError('Note not found: "x.md"', suggestions=["y.md"])

    payload = run_tool("demo", "DEMO_ERROR", operation)
    assert payload["error"] == {
        "code": "NOTE_NOT_FOUND",
        "message": 'Note not found: "x.md"',
        "suggestions": ["y.md"],
    }


def test_run_tool_uses_fallback_code_for_unexpected_errors(caplog):
    def operation():
        raise RuntimeError("boom")

    payload = run_tool("demo", "DEMO_ERROR", operation)
    assert payload["success"] is False
    assert payload["error"] == {"code": "DEMO_ERROR", "message": "demo failed: boom"}
    assert "[demo] failed" in caplog.text
