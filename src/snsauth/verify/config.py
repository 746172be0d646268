"""Verifier configuration (frozen dataclass -- built once, never mutated)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Regional SNS endpoints, plus the China partition (``.amazonaws.com.cn``)
DEFAULT_CERT_HOST_PATTERN = r"^sns\.[a-zA-Z0-9\-]{3,}\.amazonaws\.com(\.cn)?$"
DEFAULT_CERT_URL_SCHEME = "https"
DEFAULT_SIGNATURE_VERSION = "1"


@dataclass(frozen=True)
class VerifierConfig:
    """Trust settings shared by every request.

    ``host_pattern`` accepts either a compiled pattern or a string; it is
    always stored compiled and must match the whole certificate host.
    """

    required_scheme: str = DEFAULT_CERT_URL_SCHEME
    host_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_CERT_HOST_PATTERN)
    )
    signature_version: str = DEFAULT_SIGNATURE_VERSION

    def __post_init__(self) -> None:
        if isinstance(self.host_pattern, str):
            object.__setattr__(self, "host_pattern", re.compile(self.host_pattern))
