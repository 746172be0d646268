"""Core types and constants for SNS HTTP(S) deliveries."""

from __future__ import annotations

from enum import Enum


# Request headers set by SNS on every HTTP(S) delivery
HEADER_MESSAGE_TYPE = "x-amz-sns-message-type"
HEADER_TOPIC_ARN = "x-amz-sns-topic-arn"


class MessageType(str, Enum):
    """SNS message types, valued by their wire ``Type`` string.

    ``UNKNOWN`` stands for anything SNS does not define, including the
    empty string.
    """

    UNKNOWN = ""
    NOTIFICATION = "Notification"
    SUBSCRIPTION_CONFIRMATION = "SubscriptionConfirmation"
    UNSUBSCRIBE_CONFIRMATION = "UnsubscribeConfirmation"


def classify(value: str | None) -> MessageType:
    """Map a declared type string to a :class:`MessageType`.

    Matching is exact and case-sensitive.  Never raises: unrecognised
    input returns ``MessageType.UNKNOWN`` for the caller to reject.
    """
    if not value:
        return MessageType.UNKNOWN
    try:
        return MessageType(value)
    except ValueError:
        return MessageType.UNKNOWN
