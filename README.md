# teambridge

`teambridge` is a set of building blocks for a chat agent that talks to
users in Microsoft Teams through the Bot Framework. It uses only the Python
standard library.

## What is in it

- **`teambridge.types`**: the Bot Framework activity payload as dataclasses.
  These are `Activity`, `Account`, `Conversation`, `Attachment` and `Entity`.
  Each has `to_dict` / `from_dict` for the wire format, which uses camelCase
  keys and leaves out empty fields. `Activity` also has `to_json` and
  `from_json`. `from_json` raises `ValueError` on malformed JSON or on JSON
  that is not an object.
- **`teambridge.access`**: `AccessGate` decides whether the bot answers an
  activity. `AccessGate.from_lists(allowed_channels, allowed_user_ids)`
  builds a gate, and `"*"` among the user ids allows anyone. A user
  allow-list takes precedence over the channel list. A user matches by
  Entra object id first, then by Bot Framework channel id. `allows(activity)`
  logs a warning for every activity it rejects.
- **`teambridge.prompts`**: helpers that turn a message into prompt text.
  - `is_bot_mentioned` and `strip_bot_mention` detect the bot's own
    mention and remove it.
  - `build_session_key` and `parse_session_key` convert between a
    conversation id and a `teams:<conversation id>` key.
  - `build_sender_context` renders a `<sender_context>` JSON block.
  - `build_prompt_content` appends `<attached_images>` and
    `<voice_transcription>` blocks.
- **`teambridge.attachments`**: helpers for attachments.
  - `is_downloadable_attachment` filters out cards, `text/html`
    renderings and non-HTTP(S) URLs.
  - `is_image_content_type` and `is_audio_content_type` classify a
    content type.
  - `extension_for_content_type` maps a MIME type to a file extension.
  - `sanitize_filename` reduces an attachment name to a safe local name.
  - `ensure_file_extension` renames an extensionless file on disk. It
    takes the extension from the content type, or else from the file's
    leading bytes.
- **`teambridge.cards`**: Adaptive Card 1.5 models (`AdaptiveCard`,
  `TextBlock`, `ChoiceSet`, `Choice`, `SubmitAction`) and the cards built
  from them.
  - `build_mode_card` and `build_model_card` build picker dropdowns.
  - `build_mode_confirmation` and `build_model_confirmation` build the
    result cards shown after a switch.
  - `adaptive_card_attachment` wraps any card into an attachment.
- **`teambridge.invoke`**: `unmarshal_invoke_data` decodes a card
  submission from `activity.value` into `InvokeData`. It raises
  `NotInvokeError` when the activity is an ordinary message, and
  `ValueError` when the value is malformed. `is_switch_success` checks
  whether a switch reply reports success.
- **`teambridge.streaming`**: `StreamView` collects streamed agent text and
  tool progress lines. It is thread-safe. `display()` gives the live
  rendering and `final_content()` gives the finished reply. The finished
  reply carries a cancel marker, an agent-error banner or a footer.
  `compose_display` is the rendering function used by both.
- **`teambridge.serviceurl_store`**: `ServiceURLStore` maps each
  conversation id to its service URL, in a thread-safe way.
  - `ServiceURLStore.open(path)` loads the map from a JSON file. A missing
    file gives an empty store. A corrupt file is moved aside to
    `<path>.broken-<unix time>`.
  - `set` writes the file atomically, and only when the value changes.
  - With no path, the store lives in memory only.

## Example

```python
from teambridge.access import AccessGate
from teambridge.cards import build_mode_card
from teambridge.invoke import NotInvokeError, unmarshal_invoke_data
from teambridge.prompts import (
    build_prompt_content,
    build_sender_context,
    build_session_key,
    is_bot_mentioned,
    strip_bot_mention,
)
from teambridge.serviceurl_store import ServiceURLStore
from teambridge.types import Activity

gate = AccessGate.from_lists(allowed_user_ids=["*"])
store = ServiceURLStore.open("serviceurls.json")

def handle(body: bytes) -> str | None:
    activity = Activity.from_json(body)
    if not gate.allows(activity):
        return None
    store.set(activity.conversation.id, activity.service_url)
    try:
        data = unmarshal_invoke_data(activity)
        return f"card action {data.action}"
    except NotInvokeError:
        pass
    text = activity.text.strip()
    if is_bot_mentioned(activity.recipient.id, activity.entities):
        text = strip_bot_mention(activity.text, activity.recipient.id, activity.entities)
    return build_prompt_content(f"{build_sender_context(activity)}\n\n{text}")

card = build_mode_card(
    "default",
    [{"id": "default", "description": "General agent"}, {"id": "planner"}],
    build_session_key("conv-1"),
)
print(card.to_dict())
```

## What it does not do

`teambridge` does not talk to the network, and it has no server. These
parts are left to you:

- It does not validate the JWT bearer tokens on inbound requests.
- It does not fetch outbound access tokens.
- It does not call the Bot Framework REST API to send or update activities.
- It does not download attachments.
- It does not run an HTTP endpoint for incoming activities.
- It does not manage agent sessions.

The types and helpers here give you the payloads, decisions and text to use
with those parts.

## Running the tests

```
pip install -e ".[test]"
pytest
```