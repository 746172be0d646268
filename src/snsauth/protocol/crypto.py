"""Certificate parsing and signature checks for SNS messages.

Delegates all X.509 and RSA work to ``cryptography``.  SNS signature
version 1 is RSA PKCS#1 v1.5 over a SHA-1 digest; SNS offers no other
algorithm for that version, so it is fixed here rather than configured.
"""

from __future__ import annotations

import base64
import binascii

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from snsauth.protocol.errors import (
    CertificateParseError,
    InvalidCertBodyError,
    InvalidSignatureError,
    SignatureDecodeError,
)

_PEM_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"


def decode_signature(signature_b64: str) -> bytes:
    """Decode a standard (padded) base64 signature.

    Raises:
        SignatureDecodeError: If *signature_b64* is not valid base64.
    """
    try:
        return base64.b64decode(signature_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SignatureDecodeError(f"error decode signature: {exc}") from exc


def load_certificate(data: bytes) -> x509.Certificate:
    """Parse a PEM-encoded X.509 certificate.

    Raises:
        InvalidCertBodyError: If *data* holds no certificate PEM block.
        CertificateParseError: If the PEM block does not parse as a certificate.
    """
    if _PEM_CERTIFICATE_MARKER not in data:
        raise InvalidCertBodyError()
    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as exc:
        raise CertificateParseError(f"error parse certificate: {exc}") from exc


def verify_sha1_rsa(
    certificate: x509.Certificate, signed: bytes, signature: bytes
) -> None:
    """Check *signature* over *signed* with the certificate's public key.

    Every rejection reason (wrong key type, malformed or mismatching
    signature) collapses into the same error.

    Raises:
        InvalidSignatureError: If the signature does not verify.
    """
    try:
        public_key = certificate.public_key()
    except ValueError as exc:
        raise InvalidSignatureError() from exc
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise InvalidSignatureError()

    try:
        public_key.verify(signature, signed, padding.PKCS1v15(), hashes.SHA1())
    except (InvalidSignature, ValueError) as exc:
        raise InvalidSignatureError() from exc
