"""snsauth exception hierarchy.

All authentication failures inherit from :class:`SNSAuthError`.  Every
kind carries a stable ``code`` so callers can tell them apart without
parsing messages.  Three families matter to operators:

- :class:`TrustError` -- the request could not be proven to come from SNS.
- :class:`TransportError` -- SNS (or the network) could not be reached or
  returned data in an unusable format.
- :class:`DecodeError` -- the request body itself is malformed.
"""

from __future__ import annotations


class SNSAuthError(Exception):
    """Base exception for all SNS authentication errors."""

    code = "sns_auth_error"
    default_message = "SNS authentication error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class DecodeError(SNSAuthError):
    """Raised when a request body is not a well-formed SNS payload."""

    code = "decode_error"
    default_message = "error decode message body"


class TrustError(SNSAuthError):
    """Raised when a request fails an authentication or origin check."""

    code = "trust_error"


class InvalidTopicError(TrustError):
    """Raised when the declared topic is not the one this endpoint trusts."""

    code = "invalid_topic"
    default_message = "invalid SNS TopicArn"


class UnknownMessageTypeError(TrustError):
    """Raised when the declared message type is not a known SNS type."""

    code = "unknown_message_type"
    default_message = "unexpected message type"


class CertURLError(TrustError):
    """Base for signing-certificate URL origin failures."""

    code = "cert_url_error"


class InvalidCertURLError(CertURLError):
    """Raised when the signing-certificate URL cannot be parsed."""

    code = "invalid_cert_url"
    default_message = "error invalid cert url"


class InvalidCertURLSchemeError(CertURLError):
    """Raised when the signing-certificate URL uses an untrusted scheme."""

    code = "invalid_cert_url_scheme"
    default_message = "error invalid cert url scheme"


class InvalidCertURLHostError(CertURLError):
    """Raised when the signing-certificate URL points outside SNS hosts."""

    code = "invalid_cert_url_host"
    default_message = "error invalid cert url host"


class InvalidSignatureVersionError(TrustError):
    """Raised when the payload declares an unsupported signature version."""

    code = "invalid_signature_version"
    default_message = "error invalid signature version"


class InvalidSignatureError(TrustError):
    """Raised when a signature does not verify against the certificate."""

    code = "invalid_signature"
    default_message = "error invalid signature"


class InvalidCertBodyError(SNSAuthError):
    """Raised when the fetched certificate body holds no PEM block."""

    code = "invalid_cert_body"
    default_message = "error invalid cert body"


class ConfirmSubscriptionError(SNSAuthError):
    """Raised when SNS does not accept a subscription confirmation."""

    code = "confirm_subscription"
    default_message = "error confirm subscription"


class TransportError(SNSAuthError):
    """Base for network and wire-format failures."""

    code = "transport_error"


class FetchError(TransportError):
    """Raised when an outbound GET fails before a response is read."""

    code = "fetch_error"
    default_message = "error fetch url"


class SignatureDecodeError(TransportError):
    """Raised when the claimed signature is not valid base64."""

    code = "signature_decode_error"
    default_message = "error decode signature"


class CertificateParseError(TransportError):
    """Raised when a PEM block does not contain a valid X.509 certificate."""

    code = "certificate_parse_error"
    default_message = "error parse certificate"


class NotificationNotFoundError(SNSAuthError):
    """Raised when no authenticated notification is attached to a request."""

    code = "notification_not_found"
    default_message = "not found Notification"
