"""Canonical "string to sign" for SNS signature version 1.

SNS signs a newline-delimited listing of selected payload fields.  The
field list and its order are fixed per message type (lexical order of
the wire names, not the order the fields appear in the JSON body):

- Notification: Message, MessageId, Subject, Timestamp, TopicArn, Type
- SubscriptionConfirmation / UnsubscribeConfirmation: Message, MessageId,
  SubscribeURL, Timestamp, Token, TopicArn, Type

Each listed field with a non-empty value contributes ``"<Key>\\n<Value>\\n"``.
Absent or empty fields (typically ``Subject``) contribute nothing at all.
Whitespace and ordering are part of the contract: one byte of difference
and the signature will not verify.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Any, Callable

from snsauth.protocol.types import MessageType, classify

SignKey = tuple[str, Callable[[Any], "str | None"]]

NOTIFICATION_SIGN_KEYS: tuple[SignKey, ...] = (
    ("Message", attrgetter("message")),
    ("MessageId", attrgetter("message_id")),
    ("Subject", attrgetter("subject")),
    ("Timestamp", attrgetter("timestamp")),
    ("TopicArn", attrgetter("topic_arn")),
    ("Type", attrgetter("type")),
)

SUBSCRIPTION_CONFIRMATION_SIGN_KEYS: tuple[SignKey, ...] = (
    ("Message", attrgetter("message")),
    ("MessageId", attrgetter("message_id")),
    ("SubscribeURL", attrgetter("subscribe_url")),
    ("Timestamp", attrgetter("timestamp")),
    ("Token", attrgetter("token")),
    ("TopicArn", attrgetter("topic_arn")),
    ("Type", attrgetter("type")),
)


def sign_keys(message_type: MessageType) -> tuple[SignKey, ...]:
    """Return the ordered ``(wire name, accessor)`` pairs for *message_type*.

    ``MessageType.UNKNOWN`` has no sign keys.
    """
    if message_type is MessageType.NOTIFICATION:
        return NOTIFICATION_SIGN_KEYS
    if message_type in (
        MessageType.SUBSCRIPTION_CONFIRMATION,
        MessageType.UNSUBSCRIBE_CONFIRMATION,
    ):
        return SUBSCRIPTION_CONFIRMATION_SIGN_KEYS
    return ()


def canonicalize(message: Any) -> bytes:
    """Build the exact bytes SNS signed for *message*.

    *message* is a decoded payload (``Notification`` or
    ``SubscriptionConfirmation``).  The sign keys are chosen from the
    payload's own ``type`` field.  A type that is unknown, or that belongs
    to the other payload shape, yields ``b""``, which can never verify.
    """
    message_type = classify(message.type)
    if message_type not in message.message_types:
        return b""

    parts: list[str] = []
    for key, accessor in sign_keys(message_type):
        value = accessor(message)
        if not value:
            continue
        parts.append(f"{key}\n{value}\n")
    return "".join(parts).encode("utf-8")
