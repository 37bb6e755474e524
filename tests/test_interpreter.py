"""Tests for model response interpretation."""

import json

from dbchat.constants import TRUNCATION_MESSAGE
from dbchat.interpreter import InterpretedResponse, interpret
from dbchat.state import ConfirmAction, SuggestedAction, UiDirective


def test_fenced_json():
    """Test extracting a response from a fenced JSON block."""
    raw = (
        "Here you go:\n```json\n"
        '{"message": "Created table", "component": {"type": "Table", "props": {"rows": 3}},'
        ' "suggestedActions": [{"id": "a1", "text": "Show rows"}],'
        ' "requiresConfirmation": true,'
        ' "confirmAction": {"label": "Create", "variant": "primary", "action": "create-db"}}\n'
        "```\nThanks"
    )

    response = interpret(raw)

    assert response.message == "Created table"
    assert response.directive == UiDirective(kind="Table", attributes={"rows": 3})
    assert response.suggested_actions == [SuggestedAction(id="a1", label="Show rows")]
    assert response.requires_confirmation is True
    assert response.confirm_action.action == "create-db"
    assert response.confirm_action.params is None


def test_whole_text_json():
    """Test a completion that is a bare JSON object."""
    response = interpret('{"message": "Hi\\\\!", "suggestedActions": []}')

    assert response.message == "Hi!"
    assert response.suggested_actions == []
    assert response.directive is None


def test_json_without_message_is_plain_text():
    """Test that a bare JSON object without a message is shown as text."""
    response = interpret('{"foo": 1}')

    assert response.message == '{"foo": 1}'
    assert response.directive is None


def test_plain_text():
    """Test that plain text is sanitized and trimmed."""
    response = interpret("  Sure\\! Let me help.  ")

    assert response == InterpretedResponse(message="Sure! Let me help.")


def test_empty_text():
    """Test an empty completion."""
    assert interpret("").message == ""


def test_truncated_fence_returns_advisory():
    """Test that a truncated, unparseable fenced block yields the advisory."""
    raw = '```json\n{"message": "Here is the schema", "component": {"type": "CodeView", "pro\n```'

    response = interpret(raw, was_truncated=True)

    assert response.message == TRUNCATION_MESSAGE
    assert response.directive is None
    assert response.suggested_actions is None


def test_truncated_open_json_returns_advisory():
    """Test a truncated completion that never closed its JSON object."""
    response = interpret('{"message": "Here is a very long', was_truncated=True)

    assert response.message == TRUNCATION_MESSAGE


def test_truncated_plain_text_kept():
    """Test that truncated prose is shown as is."""
    response = interpret("A long answer that got cut", was_truncated=True)

    assert response.message == "A long answer that got cut"


def test_broken_json_not_truncated_is_text():
    """Test that invalid JSON without truncation falls back to text."""
    raw = '{"message": "oops"'

    assert interpret(raw).message == raw


def test_invalid_fields_dropped():
    """Test that malformed optional fields are dropped, keeping the message."""
    payload = {
        "message": "Partial",
        "component": "not-an-object",
        "suggestedActions": [{"id": "ok", "text": "Fine"}, {"id": "missing-text"}, 7],
        "requiresConfirmation": "yes",
        "confirmAction": {"label": "No action field"},
    }

    response = interpret(json.dumps(payload))

    assert response.message == "Partial"
    assert response.directive is None
    assert response.suggested_actions == [SuggestedAction(id="ok", label="Fine")]
    assert response.requires_confirmation is None
    assert response.confirm_action is None


def test_wire_form_round_trip():
    """Test that a response survives being serialized into a fenced block."""
    original = InterpretedResponse(
        message="Your database is ready",
        directive=UiDirective(kind="KeyValue", attributes={"items": [{"k": "Engine"}]}),
        suggested_actions=[SuggestedAction(id="connect", label="Connect")],
        requires_confirmation=True,
        confirm_action=ConfirmAction(
            label="Delete", action="delete-db", params={"id": "db-1", "force": None}
        ),
    )

    wire = original.to_wire()
    raw = "```json\n" + json.dumps(wire) + "\n```"

    assert wire["component"] == {"type": "KeyValue", "props": {"items": [{"k": "Engine"}]}}
    assert wire["suggestedActions"] == [{"id": "connect", "text": "Connect"}]
    assert interpret(raw) == original


def test_round_trip_with_code_block_in_message():
    """Test that a code fence inside the message does not end the JSON block."""
    original = InterpretedResponse(
        message="Run this:\n```sql\nSELECT 1;\n```\nDone",
        directive=UiDirective(kind="CodeView", attributes={"code": "```\nx\n```"}),
    )
    raw = "```json\n" + json.dumps(original.to_wire()) + "\n```"

    assert interpret(raw) == original


def test_fenced_json_with_trailing_text():
    """Test that text after the closing fence is ignored."""
    raw = 'Sure.\n```json\n{"message": "Hi"}\n```\nLet me know if you need more.'

    assert interpret(raw) == InterpretedResponse(message="Hi")


def test_wire_form_omits_unset_fields():
    """Test that unset optional fields are left out of the wire form."""
    wire = InterpretedResponse(
        message="Hi", confirm_action=ConfirmAction(label="Go", action="go")
    ).to_wire()

    assert wire == {
        "message": "Hi",
        "confirmAction": {"label": "Go", "variant": "primary", "action": "go"},
    }
