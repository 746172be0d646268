"""SNS payloads -- decoding, wire format, and signature derivation.

SNS POSTs one of two JSON shapes to an HTTP(S) subscriber:

- ``Notification`` -- a message published to the topic.
- ``SubscriptionConfirmation`` -- the subscribe handshake.  The same
  shape is used for ``UnsubscribeConfirmation``.

Python attribute names are snake_case; the wire uses SNS's own names
(``MessageId``, ``SigningCertURL`` ...).  Decoding is lenient about
missing fields (they become ``""``) and strict about field shapes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from snsauth.protocol.canonical import canonicalize
from snsauth.protocol.errors import DecodeError
from snsauth.protocol.types import MessageType, classify


@dataclass(frozen=True)
class MessageSignature:
    """What a payload claims about its own signature.

    ``signed`` is the canonical byte string the signature must cover.
    """

    signed: bytes
    signature_version: str
    signature: str
    signing_cert_url: str


@dataclass(frozen=True)
class MessageAttribute:
    """A single entry of a notification's ``MessageAttributes`` map."""

    type: str = ""
    value: str = ""


@dataclass(frozen=True)
class Notification:
    """A message delivered from the topic."""

    message_types: ClassVar[frozenset[MessageType]] = frozenset(
        {MessageType.NOTIFICATION}
    )

    type: str = ""
    message_id: str = ""
    topic_arn: str = ""
    subject: str = ""
    message: str = ""
    timestamp: str = ""
    signature_version: str = ""
    signature: str = ""
    signing_cert_url: str = ""
    unsubscribe_url: str = ""
    receipt_handle: Optional[str] = None
    message_attributes: Mapping[str, MessageAttribute] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        # Read-only copy, so a decoded notification cannot change
        object.__setattr__(
            self, "message_attributes", MappingProxyType(dict(self.message_attributes))
        )

    @classmethod
    def from_wire_dict(cls, d: Any) -> Notification:
        """Restore a notification from its decoded JSON object.

        Raises:
            DecodeError: If *d* is not an object or a field has the wrong type.
        """
        _require_object(d, "Notification")
        return cls(
            type=_string(d, "Type"),
            message_id=_string(d, "MessageId"),
            topic_arn=_string(d, "TopicArn"),
            subject=_string(d, "Subject"),
            message=_string(d, "Message"),
            timestamp=_string(d, "Timestamp"),
            signature_version=_string(d, "SignatureVersion"),
            signature=_string(d, "Signature"),
            signing_cert_url=_string(d, "SigningCertURL"),
            unsubscribe_url=_string(d, "UnsubscribeURL"),
            receipt_handle=_optional_string(d, "ReceiptHandle"),
            message_attributes=_message_attributes(d),
        )

    def to_wire_dict(self) -> dict[str, Any]:
        """Convert to the SNS wire format, omitting empty optional fields."""
        d: dict[str, Any] = {
            "Type": self.type,
            "MessageId": self.message_id,
            "TopicArn": self.topic_arn,
            "Message": self.message,
            "Timestamp": self.timestamp,
            "SignatureVersion": self.signature_version,
            "Signature": self.signature,
            "SigningCertURL": self.signing_cert_url,
        }
        if self.subject:
            d["Subject"] = self.subject
        if self.unsubscribe_url:
            d["UnsubscribeURL"] = self.unsubscribe_url
        if self.receipt_handle is not None:
            d["ReceiptHandle"] = self.receipt_handle
        if self.message_attributes:
            d["MessageAttributes"] = {
                name: {"Type": attr.type, "Value": attr.value}
                for name, attr in self.message_attributes.items()
            }
        return d

    def message_signature(self) -> MessageSignature:
        return _message_signature(self)


@dataclass(frozen=True)
class SubscriptionConfirmation:
    """A subscribe (or unsubscribe) handshake request."""

    message_types: ClassVar[frozenset[MessageType]] = frozenset(
        {MessageType.SUBSCRIPTION_CONFIRMATION, MessageType.UNSUBSCRIBE_CONFIRMATION}
    )

    type: str = ""
    message_id: str = ""
    token: str = ""
    topic_arn: str = ""
    message: str = ""
    subscribe_url: str = ""
    timestamp: str = ""
    signature_version: str = ""
    signature: str = ""
    signing_cert_url: str = ""

    @classmethod
    def from_wire_dict(cls, d: Any) -> SubscriptionConfirmation:
        """Restore a confirmation request from its decoded JSON object.

        Raises:
            DecodeError: If *d* is not an object or a field has the wrong type.
        """
        _require_object(d, "SubscriptionConfirmation")
        return cls(
            type=_string(d, "Type"),
            message_id=_string(d, "MessageId"),
            token=_string(d, "Token"),
            topic_arn=_string(d, "TopicArn"),
            message=_string(d, "Message"),
            subscribe_url=_string(d, "SubscribeURL"),
            timestamp=_string(d, "Timestamp"),
            signature_version=_string(d, "SignatureVersion"),
            signature=_string(d, "Signature"),
            signing_cert_url=_string(d, "SigningCertURL"),
        )

    def to_wire_dict(self) -> dict[str, Any]:
        """Convert to the SNS wire format."""
        return {
            "Type": self.type,
            "MessageId": self.message_id,
            "Token": self.token,
            "TopicArn": self.topic_arn,
            "Message": self.message,
            "SubscribeURL": self.subscribe_url,
            "Timestamp": self.timestamp,
            "SignatureVersion": self.signature_version,
            "Signature": self.signature,
            "SigningCertURL": self.signing_cert_url,
        }

    def message_signature(self) -> MessageSignature:
        return _message_signature(self)


def decode_notification(body: bytes | str) -> Notification:
    """Decode a raw JSON request body into a :class:`Notification`.

    Raises:
        DecodeError: If the body is not JSON or not a valid notification.
    """
    return Notification.from_wire_dict(_load_json(body))


def decode_subscription_confirmation(body: bytes | str) -> SubscriptionConfirmation:
    """Decode a raw JSON request body into a :class:`SubscriptionConfirmation`.

    Raises:
        DecodeError: If the body is not JSON or not a valid confirmation.
    """
    return SubscriptionConfirmation.from_wire_dict(_load_json(body))


def decode_payload(body: bytes | str) -> Notification | SubscriptionConfirmation:
    """Decode a saved payload, choosing the shape from its own ``Type`` field.

    For request bodies use the typed decoders above: there the header, not
    the body, decides the shape.

    Raises:
        DecodeError: If the body is not JSON, not an object, or its
            ``Type`` is not an SNS message type.
    """
    d = _load_json(body)
    _require_object(d, "payload")
    declared = _string(d, "Type")
    message_type = classify(declared)
    if message_type is MessageType.NOTIFICATION:
        return Notification.from_wire_dict(d)
    if message_type is MessageType.UNKNOWN:
        raise DecodeError(f"unknown message Type {declared!r}")
    return SubscriptionConfirmation.from_wire_dict(d)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _message_signature(
    message: Notification | SubscriptionConfirmation,
) -> MessageSignature:
    return MessageSignature(
        signed=canonicalize(message),
        signature_version=message.signature_version,
        signature=message.signature,
        signing_cert_url=message.signing_cert_url,
    )


def _load_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise DecodeError(f"invalid JSON body: {exc}") from exc


def _require_object(d: Any, name: str) -> None:
    if not isinstance(d, dict):
        raise DecodeError(f"{name} must be a JSON object, got {type(d).__name__}")


def _string(d: dict, key: str) -> str:
    """Return ``d[key]`` as a string; missing and ``null`` become ``""``."""
    value = d.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_string(d: dict, key: str) -> str | None:
    if d.get(key) is None:
        return None
    return _string(d, key)


def _message_attributes(d: dict) -> dict[str, MessageAttribute]:
    raw = d.get("MessageAttributes")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DecodeError("field 'MessageAttributes' must be an object")

    attributes: dict[str, MessageAttribute] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise DecodeError(f"message attribute {name!r} must be an object")
        attributes[name] = MessageAttribute(
            type=_string(entry, "Type"),
            value=_string(entry, "Value"),
        )
    return attributes
