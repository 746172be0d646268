"""Request authentication state machine, independent of any web framework.

::

    topic matches? -> classify type -> decode body -> origin check
      -> verify signature -> Notification:              hand payload downstream
                             SubscriptionConfirmation:  confirm subscription
                             UnsubscribeConfirmation:   acknowledge

The chain stops at the first failure.  Topic and type are checked from
the headers before the body is decoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from snsauth.protocol.errors import InvalidTopicError, UnknownMessageTypeError
from snsauth.protocol.message import (
    Notification,
    decode_notification,
    decode_subscription_confirmation,
)
from snsauth.protocol.types import HEADER_MESSAGE_TYPE, HEADER_TOPIC_ARN, MessageType, classify
from snsauth.verify.subscription import SubscriptionConfirmer
from snsauth.verify.verifier import SignatureVerifier


class AuthOutcome(str, Enum):
    """What an authenticated request turned out to be."""

    NOTIFICATION = "notification"
    SUBSCRIPTION_CONFIRMED = "subscription_confirmed"
    UNSUBSCRIBE_CONFIRMED = "unsubscribe_confirmed"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful :meth:`Authenticator.authenticate` call.

    ``notification`` is set for ``NOTIFICATION``; ``confirmation`` holds
    SNS's response body for ``SUBSCRIPTION_CONFIRMED``.
    """

    outcome: AuthOutcome
    notification: Optional[Notification] = None
    confirmation: Optional[str] = None


def _header(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup; missing headers read as ``""``."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""


class Authenticator:
    """Authenticates SNS deliveries for exactly one trusted topic."""

    def __init__(
        self,
        topic_arn: str,
        verifier: SignatureVerifier,
        confirmer: SubscriptionConfirmer,
    ) -> None:
        self._topic_arn = topic_arn
        self._verifier = verifier
        self._confirmer = confirmer

    @property
    def topic_arn(self) -> str:
        return self._topic_arn

    def authenticate(self, headers: Mapping[str, str], body: bytes | str) -> AuthResult:
        """Run the full chain for one request.

        Raises:
            InvalidTopicError: The topic header is not the trusted topic.
            UnknownMessageTypeError: The type header is not an SNS type.
            DecodeError: The body is not a valid payload of that type.
            SNSAuthError: Any origin, signature, transport or confirmation failure.
        """
        topic_arn = _header(headers, HEADER_TOPIC_ARN)
        if not self._topic_arn or topic_arn != self._topic_arn:
            raise InvalidTopicError()

        message_type = classify(_header(headers, HEADER_MESSAGE_TYPE))

        if message_type is MessageType.NOTIFICATION:
            notification = decode_notification(body)
            self._verifier.verify_message(notification)
            return AuthResult(AuthOutcome.NOTIFICATION, notification=notification)

        if message_type is MessageType.SUBSCRIPTION_CONFIRMATION:
            msg = decode_subscription_confirmation(body)
            self._verifier.verify_message(msg)
            confirmation = self._confirmer.confirm(msg)
            return AuthResult(AuthOutcome.SUBSCRIPTION_CONFIRMED, confirmation=confirmation)

        if message_type is MessageType.UNSUBSCRIBE_CONFIRMATION:
            msg = decode_subscription_confirmation(body)
            self._verifier.verify_message(msg)
            return AuthResult(AuthOutcome.UNSUBSCRIBE_CONFIRMED)

        raise UnknownMessageTypeError()
