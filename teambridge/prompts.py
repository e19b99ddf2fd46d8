"""Turning an inbound Teams message into the prompt text sent to the agent."""

from __future__ import annotations

import json
from typing import Iterable

from .types import Activity, Entity

SESSION_KEY_PREFIX = "teams:"
SENDER_SCHEMA = "quill.sender.v1"
CHANNEL_NAME = "teams"

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _mentions_bot(entity: Entity, bot_id: str) -> bool:
    return (
        entity.type == "mention"
        and entity.mentioned is not None
        and entity.mentioned.id == bot_id
    )


def is_bot_mentioned(bot_id: str, entities: Iterable[Entity]) -> bool:
    """Whether any mention entity names the bot."""
    return any(_mentions_bot(entity, bot_id) for entity in entities or ())


def strip_bot_mention(text: str, bot_id: str, entities: Iterable[Entity]) -> str:
    """Remove the bot's own mention tags from ``text`` and trim the result."""
    for entity in entities or ():
        if _mentions_bot(entity, bot_id) and entity.text:
            text = text.replace(entity.text, "", 1)
    return text.strip()


def build_session_key(conversation_id: str) -> str:
    """Key identifying the agent session that serves a conversation."""
    return f"{SESSION_KEY_PREFIX}{conversation_id}"


def parse_session_key(key: str) -> str:
    """Return the conversation id inside a session key; ValueError if it is not a Teams key."""
    if not key.startswith(SESSION_KEY_PREFIX):
        raise ValueError(f"bad thread key {key!r}")
    return key[len(SESSION_KEY_PREFIX):]


def build_prompt_content(
    base: str,
    image_paths: Iterable[str] = (),
    transcriptions: Iterable[str] = (),
) -> str:
    """Append attached-image and voice-transcription blocks to ``base``."""
    parts = [base]
    images = list(image_paths or ())
    if images:
        parts.append("\n\n<attached_images>\n")
        parts.extend(f"- {path}\n" for path in images)
        parts.append("</attached_images>\nPlease read and analyze the above image(s).")
    texts = list(transcriptions or ())
    if texts:
        parts.append("\n\n<voice_transcription>\n")
        parts.extend(f"{text}\n" for text in texts)
        parts.append(
            "</voice_transcription>\n"
            "The above is a transcription of the user's voice message. Please respond to it."
        )
    return "".join(parts)


def _encode(data: dict) -> str:
    encoded = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def build_sender_context(activity: Activity) -> str:
    """Render the structured <sender_context> block describing who sent ``activity``."""
    context = {
        "schema": SENDER_SCHEMA,
        "sender_id": activity.from_.id,
        "sender_name": activity.from_.name,
        "display_name": activity.from_.name,
        "channel": CHANNEL_NAME,
        "channel_id": activity.conversation.id,
    }
    return f"<sender_context>\n{_encode(context)}\n</sender_context>"