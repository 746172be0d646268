"""snsauth -- authenticate Amazon SNS HTTP(S) deliveries.

Top-level convenience re-exports::

    from snsauth import create_authenticator, Notification
    from snsauth.webhook.app import create_app  # FastAPI receiver
"""

__version__ = "0.1.0"

from snsauth.protocol import (
    MessageType,
    Notification,
    SNSAuthError,
    SubscriptionConfirmation,
    classify,
)
from snsauth.verify import Authenticator, SignatureVerifier, VerifierConfig, create_authenticator

__all__ = [
    "__version__",
    "Authenticator",
    "MessageType",
    "Notification",
    "SNSAuthError",
    "SignatureVerifier",
    "SubscriptionConfirmation",
    "VerifierConfig",
    "classify",
    "create_authenticator",
]
