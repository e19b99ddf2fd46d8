import logging

import pytest

from teambridge.access import AccessGate
from teambridge.types import Account, Activity, Conversation

CHANNEL_USER_ID = "29:1abcd-channel-id"
AAD_OBJECT_ID = "00000000-1111-2222-3333-444444444444"
CONV_ID = "19:conversation-a"
OTHER_CONV_ID = "19:conversation-b"


def _gate(users, allow_any, channels):
    user_list = list(users or [])
    if allow_any:
        user_list.append("*")
    return AccessGate.from_lists(channels, user_list)


def _activity(user_id, aad, conv):
    return Activity(
        from_=Account(id=user_id, aad_object_id=aad, name="Neil"),
        conversation=Conversation(id=conv),
    )


@pytest.mark.parametrize(
    "users, allow_any, channels, aad, expected",
    [
        ([AAD_OBJECT_ID], False, None, AAD_OBJECT_ID, True),
        ([CHANNEL_USER_ID], False, None, AAD_OBJECT_ID, True),
        (["99999999-0000-0000-0000-000000000000"], False, None, AAD_OBJECT_ID, False),
        (None, True, [OTHER_CONV_ID], AAD_OBJECT_ID, True),
        (["someone-else"], False, [CONV_ID], AAD_OBJECT_ID, False),
        (None, False, [CONV_ID], AAD_OBJECT_ID, True),
        (None, False, [OTHER_CONV_ID], AAD_OBJECT_ID, False),
        (None, False, None, AAD_OBJECT_ID, True),
        ([CHANNEL_USER_ID], False, None, "", True),
        ([AAD_OBJECT_ID], False, None, "", False),
    ],
    ids=[
        "allow-by-aad",
        "allow-by-channel-id",
        "reject-unlisted",
        "wildcard-ignores-channels",
        "user-gate-overrides-channel",
        "channel-gate-allow",
        "channel-gate-reject",
        "no-gates",
        "empty-aad-falls-back",
        "empty-aad-only-guid-listed",
    ],
)
def test_access_gate_allows(users, allow_any, channels, aad, expected):
    gate = _gate(users, allow_any, channels)
    assert gate.allows(_activity(CHANNEL_USER_ID, aad, CONV_ID)) is expected


def test_from_lists_extracts_wildcard():
    gate = AccessGate.from_lists(["c1"], ["*", "u1"])
    assert gate.allow_any_user is True
    assert gate.allowed_user_ids == frozenset({"u1"})
    assert gate.allowed_channels == frozenset({"c1"})


def test_empty_aad_never_matches_empty_listed_entry():
    gate = AccessGate(allowed_user_ids=frozenset({""}))
    assert gate.allows(_activity("29:someone", "", CONV_ID)) is True
    assert gate.allows(_activity("29:someone", "guid", CONV_ID)) is False


def test_rejection_is_logged(caplog):
    gate = AccessGate.from_lists(None, ["someone-else"])
    with caplog.at_level(logging.WARNING, logger="teambridge.access"):
        allowed = gate.allows(_activity(CHANNEL_USER_ID, AAD_OBJECT_ID, CONV_ID))
    assert allowed is False
    assert any("unlisted user" in record.getMessage() for record in caplog.records)