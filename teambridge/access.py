"""Allow-lists deciding which Teams users and conversations the bot answers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .types import Activity

log = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass
class AccessGate:
    """User and channel allow-lists.

    A configured user list (or the wildcard) takes precedence over the
    channel list. Users match by Entra object id first, then by their Bot
    Framework channel id.
    """

    allowed_channels: frozenset = field(default_factory=frozenset)
    allowed_user_ids: frozenset = field(default_factory=frozenset)
    allow_any_user: bool = False

    @classmethod
    def from_lists(
        cls,
        allowed_channels: Optional[Iterable[str]] = None,
        allowed_user_ids: Optional[Iterable[str]] = None,
    ) -> "AccessGate":
        """Build a gate from configuration lists; "*" among the users allows anyone."""
        users = set(allowed_user_ids or ())
        allow_any = WILDCARD in users
        users.discard(WILDCARD)
        return cls(
            allowed_channels=frozenset(allowed_channels or ()),
            allowed_user_ids=frozenset(users),
            allow_any_user=allow_any,
        )

    def allows(self, activity: Activity) -> bool:
        """Whether ``activity`` may pass; rejections are logged as warnings."""
        user_id = activity.from_.id
        aad_object_id = activity.from_.aad_object_id
        conversation_id = activity.conversation.id

        if self.allow_any_user or self.allowed_user_ids:
            allowed = (
                self.allow_any_user
                or (bool(aad_object_id) and aad_object_id in self.allowed_user_ids)
                or user_id in self.allowed_user_ids
            )
            if not allowed:
                log.warning(
                    "teams message from unlisted user (add to allowed_user_id to enable): "
                    "user_id=%s aad_object_id=%s user_name=%s",
                    user_id,
                    aad_object_id,
                    activity.from_.name,
                )
            return allowed

        if self.allowed_channels and conversation_id not in self.allowed_channels:
            log.warning(
                "teams message from unlisted channel (add to allowed_channels to enable): "
                "conversation_id=%s",
                conversation_id,
            )
            return False
        return True