"""Starlette/FastAPI boundary for SNS webhook authentication."""

from snsauth.webhook.context import (
    CONTEXT_KEY_NOTIFICATION,
    current_notification,
    get_notification,
    set_notification,
)
from snsauth.webhook.middleware import SNSAuthMiddleware

__all__ = [
    "CONTEXT_KEY_NOTIFICATION",
    "SNSAuthMiddleware",
    "current_notification",
    "get_notification",
    "set_notification",
]
