"""Interpretation of raw model completions into typed responses."""

import json
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from dbchat.constants import JSON_FENCE_OPENER, TRUNCATION_MESSAGE
from dbchat.state import ConfirmAction, SuggestedAction, UiDirective
from dbchat.utils.sanitize import sanitize

_DECODER = json.JSONDecoder()


class InterpretedResponse(BaseModel):
    """Typed form of a model completion."""

    message: str = ""
    directive: Optional[UiDirective] = None
    suggested_actions: Optional[list[SuggestedAction]] = None
    requires_confirmation: Optional[bool] = None
    confirm_action: Optional[ConfirmAction] = None

    def to_wire(self) -> dict[str, Any]:
        """Convert to the JSON shape the model is asked to produce.

        Returns:
            Dictionary with ``message`` and the optional ``component``,
            ``suggestedActions``, ``requiresConfirmation`` and ``confirmAction`` keys
        """
        wire: dict[str, Any] = {"message": self.message}

        if self.directive is not None:
            wire["component"] = self.directive.model_dump(by_alias=True)
        if self.suggested_actions is not None:
            wire["suggestedActions"] = [
                a.model_dump(by_alias=True) for a in self.suggested_actions
            ]
        if self.requires_confirmation is not None:
            wire["requiresConfirmation"] = self.requires_confirmation
        if self.confirm_action is not None:
            confirm = self.confirm_action.model_dump()
            if confirm["params"] is None:
                del confirm["params"]
            wire["confirmAction"] = confirm

        return wire


def interpret(raw_text: str, was_truncated: bool = False) -> InterpretedResponse:
    """Turn a raw completion into an InterpretedResponse.

    Tries a ```json fenced block first, then the whole text as JSON, then
    falls back to plain text. When the completion was truncated and JSON was
    expected but could not be parsed, a fixed advisory message is returned
    and any partial directive is discarded.

    Args:
        raw_text: Completion text as returned by the model
        was_truncated: Whether the model stopped on its token limit

    Returns:
        InterpretedResponse (never raises)
    """
    text = raw_text or ""

    opener = text.find(JSON_FENCE_OPENER)
    if opener != -1:
        payload = _decode_fenced(text[opener + len(JSON_FENCE_OPENER):])
        if payload is not None:
            return _from_payload(payload)
        if was_truncated:
            return InterpretedResponse(message=TRUNCATION_MESSAGE)

    payload = _load_object(text)
    if payload is not None:
        if "message" in payload:
            return _from_payload(payload)
    elif was_truncated and _looks_like_json(text):
        return InterpretedResponse(message=TRUNCATION_MESSAGE)

    return InterpretedResponse(message=sanitize(text.strip()))


def _load_object(text: str) -> Optional[dict]:
    """Parse text as a JSON object, or return None."""
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _decode_fenced(body: str) -> Optional[dict]:
    """Decode the JSON object that follows a fence opener.

    The object is decoded up to its own closing brace, so a closing fence
    inside a string value (e.g. a code block in the message) does not end it.
    """
    try:
        parsed, _ = _DECODER.raw_decode(body.lstrip())
    except (json.JSONDecodeError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _looks_like_json(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith("{") or stripped.startswith(JSON_FENCE_OPENER)


def _from_payload(payload: dict) -> InterpretedResponse:
    """Build a response from a decoded payload, dropping unusable fields."""
    message = payload.get("message")
    if message is None:
        message = ""
    elif not isinstance(message, str):
        message = str(message)

    requires_confirmation = payload.get("requiresConfirmation")
    if not isinstance(requires_confirmation, bool):
        requires_confirmation = None

    return InterpretedResponse(
        message=sanitize(message),
        directive=_validate(UiDirective, payload.get("component")),
        suggested_actions=_suggested_actions(payload.get("suggestedActions")),
        requires_confirmation=requires_confirmation,
        confirm_action=_validate(ConfirmAction, payload.get("confirmAction")),
    )


def _validate(model: type[BaseModel], value: Any) -> Optional[Any]:
    if not isinstance(value, dict):
        return None
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


def _suggested_actions(value: Any) -> Optional[list[SuggestedAction]]:
    if not isinstance(value, list):
        return None

    actions = []
    for item in value:
        action = _validate(SuggestedAction, item)
        if action is not None:
            actions.append(action)
    return actions
