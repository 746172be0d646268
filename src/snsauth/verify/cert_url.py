"""Signing-certificate URL validation (origin check).

A payload names the URL of the certificate that supposedly signed it.
Fetching that URL before checking it would let anyone make this service
issue GET requests to arbitrary hosts, and would let a forger serve its
own certificate.  The URL therefore has to pass, in order:

1. it parses as a URL,
2. its scheme is the required one (``https`` by default),
3. its host matches the SNS certificate-host pattern.

Each step fails with its own :class:`CertURLError` subclass.
"""

from __future__ import annotations

import urllib.parse

from snsauth.protocol.errors import (
    InvalidCertURLError,
    InvalidCertURLHostError,
    InvalidCertURLSchemeError,
)
from snsauth.verify.config import VerifierConfig


def parse_cert_url(url: str) -> urllib.parse.SplitResult:
    """Split *url*, rejecting control characters and malformed ports.

    Raises:
        InvalidCertURLError: If *url* cannot be parsed.
    """
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise InvalidCertURLError()
    try:
        parsed = urllib.parse.urlsplit(url)
        parsed.port  # raises ValueError on a non-numeric port
    except ValueError as exc:
        raise InvalidCertURLError(f"error invalid cert url: {exc}") from exc
    return parsed


def validate_cert_url(url: str, config: VerifierConfig | None = None) -> None:
    """Check that *url* is an SNS signing-certificate location.

    The host is compared including any port and excluding userinfo, so
    ``https://sns.us-east-1.amazonaws.com:8443/`` does not pass.

    Raises:
        InvalidCertURLError: If *url* cannot be parsed.
        InvalidCertURLSchemeError: If the scheme is not ``config.required_scheme``.
        InvalidCertURLHostError: If the host does not match ``config.host_pattern``.
    """
    if config is None:
        config = VerifierConfig()

    parsed = parse_cert_url(url)
    if parsed.scheme != config.required_scheme:
        raise InvalidCertURLSchemeError()

    host = parsed.netloc.rpartition("@")[2]
    if config.host_pattern.fullmatch(host) is None:
        raise InvalidCertURLHostError()
