"""Request-scoped hand-off of the authenticated notification.

:class:`~snsauth.webhook.middleware.SNSAuthMiddleware` stores the
verified :class:`Notification` on ``request.state``; downstream handlers
read it back with :func:`get_notification` or the
:func:`current_notification` dependency.
"""

from __future__ import annotations

from fastapi import HTTPException
from starlette.requests import Request

from snsauth.protocol.errors import NotificationNotFoundError
from snsauth.protocol.message import Notification

CONTEXT_KEY_NOTIFICATION = "sns_notification"


def set_notification(request: Request, notification: Notification) -> None:
    """Attach *notification* to *request* for the next processing stage."""
    setattr(request.state, CONTEXT_KEY_NOTIFICATION, notification)


def get_notification(request: Request) -> Notification:
    """Return the notification attached to *request*.

    Raises:
        NotificationNotFoundError: If the middleware did not authenticate
            a notification for this request.
    """
    notification = getattr(request.state, CONTEXT_KEY_NOTIFICATION, None)
    if not isinstance(notification, Notification):
        raise NotificationNotFoundError()
    return notification


def current_notification(request: Request) -> Notification:
    """FastAPI dependency: the authenticated notification for this request.

    Raises ``HTTPException(500)`` when the route is not behind the
    middleware, which is a wiring mistake rather than a client error.
    """
    try:
        return get_notification(request)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
