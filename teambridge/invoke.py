"""Decoding of Adaptive Card submissions carried in an activity's value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .cards import ACTION_KEY
from .types import Activity


class NotInvokeError(ValueError):
    """The activity carries no card submission; treat it as an ordinary message."""


@dataclass
class InvokeData:
    """A decoded card submission."""

    action: str
    thread: str = ""
    mode: str = ""
    model: str = ""


def _string_field(value: Mapping[str, Any], key: str) -> str:
    item = value.get(key)
    if item is None:
        return ""
    if not isinstance(item, str):
        raise ValueError(f"invoke field {key!r} must be a string")
    return item


def unmarshal_invoke_data(activity: Activity) -> InvokeData:
    """Decode ``activity.value``.

    Raises NotInvokeError when there is no value or it lacks an action, and
    ValueError when the value is not a JSON object or has mistyped fields.
    """
    value = activity.value
    if value is None:
        raise NotInvokeError("activity is not an invoke")
    if not isinstance(value, Mapping):
        raise ValueError("invoke value is not a JSON object")
    data = InvokeData(
        action=_string_field(value, ACTION_KEY),
        thread=_string_field(value, "thread"),
        mode=_string_field(value, "mode"),
        model=_string_field(value, "model"),
    )
    if not data.action:
        raise NotInvokeError("activity is not an invoke")
    return data


def is_switch_success(result: str) -> bool:
    """Whether a mode/model switch reply reports success."""
    return "✅" in result