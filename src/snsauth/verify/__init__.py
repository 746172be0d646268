"""Network-facing verification: origin check, signature, confirmation."""

from snsauth.verify.authenticator import AuthOutcome, AuthResult, Authenticator
from snsauth.verify.cert_url import parse_cert_url, validate_cert_url
from snsauth.verify.config import VerifierConfig
from snsauth.verify.subscription import SubscriptionConfirmer
from snsauth.verify.transport import Fetcher, FetchResponse, HTTPFetcher
from snsauth.verify.verifier import SignatureVerifier


def create_authenticator(
    topic_arn: str,
    config: VerifierConfig | None = None,
    fetcher: Fetcher | None = None,
    timeout: float = 10.0,
) -> Authenticator:
    """Factory wiring one fetcher into a verifier, a confirmer and an authenticator."""
    if fetcher is None:
        fetcher = HTTPFetcher(timeout=timeout)
    return Authenticator(
        topic_arn=topic_arn,
        verifier=SignatureVerifier(fetcher, config),
        confirmer=SubscriptionConfirmer(fetcher),
    )


__all__ = [
    "AuthOutcome",
    "AuthResult",
    "Authenticator",
    "Fetcher",
    "FetchResponse",
    "HTTPFetcher",
    "SignatureVerifier",
    "SubscriptionConfirmer",
    "VerifierConfig",
    "create_authenticator",
    "parse_cert_url",
    "validate_cert_url",
]
