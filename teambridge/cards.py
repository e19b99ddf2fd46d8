"""Adaptive Card models and the mode/model picker cards built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, List, Mapping

from .types import Attachment

CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
CARD_SCHEMA_URL = "http://adaptivecards.io/schemas/adaptive-card.json"
CARD_VERSION = "1.5"

# Key in SubmitAction.data naming what the card asks for.
ACTION_KEY = "quill.action"
ACTION_SWITCH_MODE = "switch_mode"
ACTION_SWITCH_MODEL = "switch_model"


def _put(out: dict, key: str, value: Any) -> None:
    if value:
        out[key] = value


@dataclass
class TextBlock:
    """A paragraph of (optionally markdown) text."""

    type: ClassVar[str] = "TextBlock"

    text: str
    wrap: bool = False
    weight: str = ""
    size: str = ""
    is_subtle: bool = False
    color: str = ""

    def to_dict(self) -> dict:
        out: dict = {"type": self.type, "text": self.text}
        _put(out, "wrap", self.wrap)
        _put(out, "weight", self.weight)
        _put(out, "size", self.size)
        _put(out, "isSubtle", self.is_subtle)
        _put(out, "color", self.color)
        return out


@dataclass
class Choice:
    """One entry of a ChoiceSet."""

    title: str
    value: str

    def to_dict(self) -> dict:
        return {"title": self.title, "value": self.value}


@dataclass
class ChoiceSet:
    """An Input.ChoiceSet, rendered as a dropdown."""

    type: ClassVar[str] = "Input.ChoiceSet"

    id: str
    choices: List[Choice] = field(default_factory=list)
    style: str = ""
    value: str = ""

    def to_dict(self) -> dict:
        out: dict = {"type": self.type, "id": self.id}
        _put(out, "style", self.style)
        _put(out, "value", self.value)
        out["choices"] = [choice.to_dict() for choice in self.choices]
        return out


@dataclass
class SubmitAction:
    """A silent Action.Submit carrying ``data`` back to the bot."""

    type: ClassVar[str] = "Action.Submit"

    title: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        out: dict = {"type": self.type, "title": self.title}
        if self.data:
            out["data"] = dict(self.data)
        return out


@dataclass
class AdaptiveCard:
    """The subset of the Adaptive Card 1.5 schema the bot sends."""

    type: ClassVar[str] = "AdaptiveCard"

    body: list = field(default_factory=list)
    actions: list = field(default_factory=list)
    schema: str = ""
    version: str = CARD_VERSION

    def to_dict(self) -> dict:
        out: dict = {"type": self.type}
        _put(out, "$schema", self.schema)
        out["version"] = self.version
        if self.body:
            out["body"] = [element.to_dict() for element in self.body]
        if self.actions:
            out["actions"] = [action.to_dict() for action in self.actions]
        return out


def adaptive_card_attachment(card: AdaptiveCard) -> Attachment:
    """Wrap a card into the attachment envelope of an activity."""
    return Attachment(content_type=CARD_CONTENT_TYPE, content=card)


def _field(item: Any, name: str) -> str:
    if isinstance(item, Mapping):
        value = item.get(name)
    else:
        value = getattr(item, name, "")
    return value if isinstance(value, str) else ""


def _choice_label(item: Any) -> str:
    item_id = _field(item, "id")
    description = _field(item, "description")
    return f"{item_id} — {description}" if description else item_id


def _build_picker(
    title: str, input_id: str, action: str, current: str, available: Iterable[Any], thread_key: str
) -> Attachment:
    choices = [Choice(title=_choice_label(item), value=_field(item, "id")) for item in available]
    card = AdaptiveCard(
        schema=CARD_SCHEMA_URL,
        body=[
            TextBlock(text=title, weight="Bolder", size="Medium"),
            TextBlock(text=f"Current: `{current}`", is_subtle=True, wrap=True),
            ChoiceSet(id=input_id, style="compact", value=current, choices=choices),
        ],
        actions=[SubmitAction(title="Switch", data={ACTION_KEY: action, "thread": thread_key})],
    )
    return adaptive_card_attachment(card)


def build_mode_card(current: str, available: Iterable[Any], thread_key: str) -> Attachment:
    """Build the agent-mode dropdown; each item needs an ``id`` and may have a ``description``."""
    return _build_picker(
        "Switch agent mode", "mode", ACTION_SWITCH_MODE, current, available, thread_key
    )


def build_model_card(current: str, available: Iterable[Any], thread_key: str) -> Attachment:
    """Build the LLM-model dropdown; each item needs an ``id`` and may have a ``description``."""
    return _build_picker(
        "Switch LLM model", "model", ACTION_SWITCH_MODEL, current, available, thread_key
    )


def _build_confirmation(label: str, prev: str, next_: str, error: str) -> Attachment:
    if not error:
        body = [
            TextBlock(text=f"✅ Switched {label}", weight="Bolder", size="Medium"),
            TextBlock(text=f"`{prev}` → `{next_}`", is_subtle=True, wrap=True),
        ]
    else:
        body = [
            TextBlock(
                text=f"❌ Failed to switch {label}",
                weight="Bolder",
                size="Medium",
                color="Attention",
            ),
            TextBlock(text=error, wrap=True),
        ]
    return adaptive_card_attachment(AdaptiveCard(schema=CARD_SCHEMA_URL, body=body))


def build_mode_confirmation(prev: str, next_: str, error: str = "") -> Attachment:
    """Card shown after a mode switch: success when ``error`` is empty, failure otherwise."""
    return _build_confirmation("agent mode", prev, next_, error)


def build_model_confirmation(prev: str, next_: str, error: str = "") -> Attachment:
    """Card shown after a model switch: success when ``error`` is empty, failure otherwise."""
    return _build_confirmation("LLM model", prev, next_, error)