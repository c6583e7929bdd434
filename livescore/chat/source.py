from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RawMessage:
    """
    A chat message as delivered by the message source.

    Only `text` reaches the scoring pipeline; the peer ids are used to decide
    whether the message came from the followed channel, group or user.
    """

    text: str
    channel_id: Optional[int] = None
    chat_id: Optional[int] = None
    user_id: Optional[int] = None


def is_from_target(message: RawMessage, target_id: Optional[int]) -> bool:
    """
    True if `message` has text and any of its peer ids equals `target_id`.
    With no target configured nothing matches.
    """
    if target_id is None or not message.text:
        return False
    return target_id in (message.channel_id, message.chat_id, message.user_id)
