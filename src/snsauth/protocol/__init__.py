"""SNS protocol -- payload types, canonical form, and crypto primitives.

Public API re-exports for ``snsauth.protocol``.  Nothing in this package
touches the network.
"""

from snsauth.protocol.types import (
    HEADER_MESSAGE_TYPE,
    HEADER_TOPIC_ARN,
    MessageType,
    classify,
)

from snsauth.protocol.errors import (
    SNSAuthError,
    DecodeError,
    TrustError,
    InvalidTopicError,
    UnknownMessageTypeError,
    CertURLError,
    InvalidCertURLError,
    InvalidCertURLSchemeError,
    InvalidCertURLHostError,
    InvalidSignatureVersionError,
    InvalidSignatureError,
    InvalidCertBodyError,
    ConfirmSubscriptionError,
    TransportError,
    FetchError,
    SignatureDecodeError,
    CertificateParseError,
    NotificationNotFoundError,
)

from snsauth.protocol.canonical import (
    NOTIFICATION_SIGN_KEYS,
    SUBSCRIPTION_CONFIRMATION_SIGN_KEYS,
    canonicalize,
    sign_keys,
)

from snsauth.protocol.message import (
    MessageAttribute,
    MessageSignature,
    Notification,
    SubscriptionConfirmation,
    decode_notification,
    decode_payload,
    decode_subscription_confirmation,
)

from snsauth.protocol.crypto import (
    decode_signature,
    load_certificate,
    verify_sha1_rsa,
)

__all__ = [
    # Types
    "HEADER_MESSAGE_TYPE",
    "HEADER_TOPIC_ARN",
    "MessageType",
    "classify",
    # Errors
    "SNSAuthError",
    "DecodeError",
    "TrustError",
    "InvalidTopicError",
    "UnknownMessageTypeError",
    "CertURLError",
    "InvalidCertURLError",
    "InvalidCertURLSchemeError",
    "InvalidCertURLHostError",
    "InvalidSignatureVersionError",
    "InvalidSignatureError",
    "InvalidCertBodyError",
    "ConfirmSubscriptionError",
    "TransportError",
    "FetchError",
    "SignatureDecodeError",
    "CertificateParseError",
    "NotificationNotFoundError",
    # Canonical form
    "NOTIFICATION_SIGN_KEYS",
    "SUBSCRIPTION_CONFIRMATION_SIGN_KEYS",
    "canonicalize",
    "sign_keys",
    # Messages
    "MessageAttribute",
    "MessageSignature",
    "Notification",
    "SubscriptionConfirmation",
    "decode_notification",
    "decode_payload",
    "decode_subscription_confirmation",
    # Crypto
    "decode_signature",
    "load_certificate",
    "verify_sha1_rsa",
]
