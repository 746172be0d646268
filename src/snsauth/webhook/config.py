"""Webhook server configuration from environment variables."""

from __future__ import annotations

import os

from snsauth.verify.config import (
    DEFAULT_CERT_HOST_PATTERN,
    DEFAULT_CERT_URL_SCHEME,
    DEFAULT_SIGNATURE_VERSION,
    VerifierConfig,
)


class Settings:
    """Webhook settings, read from environment variables with defaults.

    Read once when the app is created.  The verifier only ever sees the
    frozen :class:`VerifierConfig` built from these values.
    """

    def __init__(self) -> None:
        # The one topic this endpoint accepts; empty rejects everything
        self.topic_arn: str = os.getenv("SNS_TOPIC_ARN", "")
        self.webhook_path: str = os.getenv("SNS_WEBHOOK_PATH", "/sns")
        self.cert_url_scheme: str = os.getenv(
            "SNS_CERT_URL_SCHEME", DEFAULT_CERT_URL_SCHEME
        )
        self.cert_host_pattern: str = os.getenv(
            "SNS_CERT_HOST_PATTERN", DEFAULT_CERT_HOST_PATTERN
        )
        self.signature_version: str = os.getenv(
            "SNS_SIGNATURE_VERSION", DEFAULT_SIGNATURE_VERSION
        )
        self.http_timeout: float = float(os.getenv("SNS_HTTP_TIMEOUT", "10.0"))
        self.log_level: str = os.getenv("SNS_LOG_LEVEL", "INFO").upper()
        self.debug: bool = os.getenv("SNS_DEBUG", "").lower() in ("1", "true", "yes")

    def verifier_config(self) -> VerifierConfig:
        """Build the immutable verifier configuration."""
        return VerifierConfig(
            required_scheme=self.cert_url_scheme,
            host_pattern=self.cert_host_pattern,
            signature_version=self.signature_version,
        )
