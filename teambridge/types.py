"""Bot Framework activity payloads and their JSON wire format."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _jsonable(value: Any) -> Any:
    """Turn objects that know how to serialise themselves into plain JSON data."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Mapping):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _put(out: dict, key: str, value: str) -> None:
    if value:
        out[key] = value


@dataclass
class Account:
    """A Bot Framework channel account (user or bot)."""

    id: str = ""
    name: str = ""
    # Entra ID object ID; only populated on Teams channels.
    aad_object_id: str = ""

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "id", self.id)
        _put(out, "name", self.name)
        _put(out, "aadObjectId", self.aad_object_id)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Account":
        data = _mapping(data)
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            aad_object_id=_text(data, "aadObjectId"),
        )


@dataclass
class Conversation:
    """The conversation an activity belongs to."""

    id: str = ""

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "id", self.id)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Conversation":
        return cls(id=_text(_mapping(data), "id"))


@dataclass
class Attachment:
    """A file or card attached to an activity."""

    content_type: str = ""
    content_url: str = ""
    name: str = ""
    content: Any = None

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "contentType", self.content_type)
        _put(out, "contentUrl", self.content_url)
        _put(out, "name", self.name)
        if self.content is not None:
            out["content"] = _jsonable(self.content)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Attachment":
        data = _mapping(data)
        return cls(
            content_type=_text(data, "contentType"),
            content_url=_text(data, "contentUrl"),
            name=_text(data, "name"),
            content=data.get("content"),
        )


@dataclass
class Entity:
    """An activity entity, such as a mention."""

    type: str = ""
    mentioned: Optional[Account] = None
    text: str = ""

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "type", self.type)
        if self.mentioned is not None:
            out["mentioned"] = self.mentioned.to_dict()
        _put(out, "text", self.text)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Entity":
        data = _mapping(data)
        mentioned = data.get("mentioned")
        return cls(
            type=_text(data, "type"),
            mentioned=Account.from_dict(mentioned) if isinstance(mentioned, Mapping) else None,
            text=_text(data, "text"),
        )


@dataclass
class Activity:
    """A Bot Framework activity, inbound or outbound."""

    type: str = ""
    id: str = ""
    timestamp: str = ""
    service_url: str = ""
    channel_id: str = ""
    from_: Account = field(default_factory=Account)
    conversation: Conversation = field(default_factory=Conversation)
    recipient: Account = field(default_factory=Account)
    text: str = ""
    text_format: str = ""
    attachments: list = field(default_factory=list)
    entities: list = field(default_factory=list)
    reply_to_id: str = ""
    # Decoded JSON of the "value" field; None when absent.
    value: Any = None

    def to_dict(self) -> dict:
        out: dict = {"type": self.type}
        _put(out, "id", self.id)
        _put(out, "timestamp", self.timestamp)
        _put(out, "serviceUrl", self.service_url)
        _put(out, "channelId", self.channel_id)
        out["from"] = self.from_.to_dict()
        out["conversation"] = self.conversation.to_dict()
        out["recipient"] = self.recipient.to_dict()
        _put(out, "text", self.text)
        _put(out, "textFormat", self.text_format)
        if self.attachments:
            out["attachments"] = [attachment.to_dict() for attachment in self.attachments]
        if self.entities:
            out["entities"] = [entity.to_dict() for entity in self.entities]
        _put(out, "replyToId", self.reply_to_id)
        if self.value is not None:
            out["value"] = _jsonable(self.value)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Activity":
        data = _mapping(data)
        attachments = data.get("attachments")
        entities = data.get("entities")
        return cls(
            type=_text(data, "type"),
            id=_text(data, "id"),
            timestamp=_text(data, "timestamp"),
            service_url=_text(data, "serviceUrl"),
            channel_id=_text(data, "channelId"),
            from_=Account.from_dict(data.get("from")),
            conversation=Conversation.from_dict(data.get("conversation")),
            recipient=Account.from_dict(data.get("recipient")),
            text=_text(data, "text"),
            text_format=_text(data, "textFormat"),
            attachments=[Attachment.from_dict(item) for item in attachments]
            if isinstance(attachments, list)
            else [],
            entities=[Entity.from_dict(item) for item in entities]
            if isinstance(entities, list)
            else [],
            reply_to_id=_text(data, "replyToId"),
            value=data.get("value"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: "str | bytes") -> "Activity":
        """Parse an activity; raises ValueError on malformed JSON or a non-object."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("activity JSON must be an object")
        return cls.from_dict(data)