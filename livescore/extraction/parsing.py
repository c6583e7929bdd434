from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from livescore.events.schema import BallEvent, EventKind, ExtraType
from livescore.extraction.errors import ExtractionFailure, MalformedEvent

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)

# Strings some models emit instead of a JSON null.
_ABSENT_EXTRA = {"", "null", "none"}


def strip_code_fences(raw: str) -> str:
    """Remove ``` / ```json fences the model may wrap around its answer."""
    return _FENCE_RE.sub("", raw).strip()


def _require(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise MalformedEvent(f"missing field {key!r}")
    return data[key]


def _as_bool(data: Dict[str, Any], key: str) -> bool:
    value = _require(data, key)
    if not isinstance(value, bool):
        raise MalformedEvent(f"{key!r} must be a boolean, got {value!r}")
    return value


def _as_count(data: Dict[str, Any], key: str) -> int:
    value = _require(data, key)
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedEvent(f"{key!r} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise MalformedEvent(f"{key!r} must be a whole number, got {value!r}")
    if value < 0:
        raise MalformedEvent(f"{key!r} must not be negative, got {value!r}")
    return int(value)


def _as_kind(data: Dict[str, Any]) -> EventKind:
    value = _require(data, "type")
    if not isinstance(value, str):
        raise MalformedEvent(f"'type' must be a string, got {value!r}")
    try:
        return EventKind(value.strip().upper())
    except ValueError:
        raise MalformedEvent(f"unknown event type {value!r}") from None


def _as_extra_type(data: Dict[str, Any]) -> Optional[ExtraType]:
    value = _require(data, "extra_type")
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedEvent(f"'extra_type' must be a string or null, got {value!r}")
    normalized = value.strip().lower()
    if normalized in _ABSENT_EXTRA:
        return None
    try:
        return ExtraType(normalized)
    except ValueError:
        raise MalformedEvent(f"unknown extra type {value!r}") from None


def ball_event_from_dict(data: Any) -> BallEvent:
    """
    Validate a decoded service response and build a BallEvent.

    Raises MalformedEvent for anything that does not match the schema. When
    `ignore` is true the remaining fields are not inspected.
    """
    if not isinstance(data, dict):
        raise MalformedEvent(f"expected a JSON object, got {type(data).__name__}")

    if _as_bool(data, "ignore"):
        return BallEvent.ignored()

    return BallEvent(
        kind=_as_kind(data),
        runs_off_bat=_as_count(data, "runs_off_bat"),
        extra_type=_as_extra_type(data),
        extra_runs=_as_count(data, "extra_runs"),
        free_hit=_as_bool(data, "free_hit"),
        wicket=_as_bool(data, "wicket"),
        ignore=False,
    )


def parse_ball_event(raw: Optional[str]) -> BallEvent:
    """
    Turn raw model output into a BallEvent.

    Raises ExtractionFailure if there is no text or it is not JSON, and
    MalformedEvent if the JSON does not match the schema.
    """
    if raw is None or not raw.strip():
        raise ExtractionFailure("empty response from classification service")

    text = strip_code_fences(raw)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionFailure(f"response is not valid JSON: {e}") from e

    return ball_event_from_dict(data)
