"""Starlette middleware guarding the SNS webhook path(s).

Every request to a guarded path is authenticated before any route sees
it:

- authenticated ``Notification`` -> stored on ``request.state``, then the
  route runs
- confirmed ``SubscriptionConfirmation`` -> 200 with SNS's confirmation
  body; the route does not run
- authenticated ``UnsubscribeConfirmation`` -> 200 acknowledgement
- malformed body -> 400; any other failure -> 403

Error bodies use the app's JSON shape ``{"error": <code>, "detail": <message>}``.
"""

from __future__ import annotations

import logging
from typing import Iterable

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import ASGIApp

from snsauth.protocol.errors import DecodeError, SNSAuthError
from snsauth.verify.authenticator import AuthOutcome, Authenticator
from snsauth.webhook.context import set_notification

logger = logging.getLogger(__name__)


def error_response(exc: SNSAuthError) -> JSONResponse:
    """Map an authentication failure to its HTTP response."""
    status_code = 400 if isinstance(exc, DecodeError) else 403
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": str(exc)},
    )


class SNSAuthMiddleware(BaseHTTPMiddleware):
    """Authenticate SNS deliveries on *paths*; other paths pass through."""

    def __init__(
        self,
        app: ASGIApp,
        authenticator: Authenticator,
        paths: Iterable[str] = ("/sns",),
    ) -> None:
        super().__init__(app)
        self._authenticator = authenticator
        self._paths = frozenset(paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path not in self._paths:
            return await call_next(request)

        body = await request.body()
        try:
            # Certificate fetch and confirmation block on network I/O
            result = await run_in_threadpool(
                self._authenticator.authenticate, request.headers, body
            )
        except SNSAuthError as exc:
            logger.warning(
                "Rejected SNS request on %s: %s (%s)",
                request.url.path,
                exc.code,
                exc,
            )
            return error_response(exc)

        if result.outcome is AuthOutcome.SUBSCRIPTION_CONFIRMED:
            logger.info("Confirmed SNS subscription to %s", self._authenticator.topic_arn)
            return PlainTextResponse(result.confirmation or "", status_code=200)

        if result.outcome is AuthOutcome.UNSUBSCRIBE_CONFIRMED:
            logger.info("Received SNS unsubscribe confirmation for %s", self._authenticator.topic_arn)
            return PlainTextResponse("unsubscribe confirmation received", status_code=200)

        notification = result.notification
        logger.debug("Authenticated SNS notification %s", notification.message_id)
        set_notification(request, notification)
        return await call_next(request)
