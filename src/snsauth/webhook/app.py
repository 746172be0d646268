"""FastAPI application factory for the SNS webhook receiver."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from snsauth import __version__
from snsauth.protocol.message import Notification
from snsauth.verify import create_authenticator
from snsauth.verify.transport import Fetcher
from snsauth.webhook.config import Settings
from snsauth.webhook.context import current_notification
from snsauth.webhook.middleware import SNSAuthMiddleware
from snsauth.webhook.models import ErrorResponse, HealthResponse, NotificationAck

logger = logging.getLogger(__name__)

# Consistent JSON error shape: {"error": "<code>", "detail": "<message>"}
_STATUS_TO_ERROR = {
    400: "bad_request",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    500: "internal_error",
}


def create_app(
    settings: Settings | None = None,
    fetcher: Fetcher | None = None,
) -> FastAPI:
    """Create and configure the webhook FastAPI application.

    *fetcher* replaces the default ``HTTPFetcher`` (tests pass a fake so
    nothing leaves the process).

    .. note:: TLS is terminated by the deployment platform; the app runs
       on plain HTTP behind it.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.debug:
        logging.getLogger("snsauth").setLevel(logging.DEBUG)

    if not settings.topic_arn:
        logger.warning("SNS_TOPIC_ARN is not set; every SNS request will be rejected")

    authenticator = create_authenticator(
        topic_arn=settings.topic_arn,
        config=settings.verifier_config(),
        fetcher=fetcher,
        timeout=settings.http_timeout,
    )

    app = FastAPI(title="SNS Webhook", version=__version__)
    app.state.settings = settings
    app.state.authenticator = authenticator

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _STATUS_TO_ERROR.get(exc.status_code, "error"),
                "detail": exc.detail,
            },
        )

    app.add_middleware(
        SNSAuthMiddleware,
        authenticator=authenticator,
        paths=(settings.webhook_path,),
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Liveness check. Not behind SNS authentication."""
        return HealthResponse(
            status="ok",
            topic_arn=settings.topic_arn,
            version=__version__,
        )

    @app.post(
        settings.webhook_path,
        response_model=NotificationAck,
        responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    )
    async def receive_notification(
        notification: Notification = Depends(current_notification),
    ) -> NotificationAck:
        """Acknowledge an authenticated notification."""
        logger.info(
            "SNS notification %s on %s: %s",
            notification.message_id,
            notification.topic_arn,
            notification.subject or "(no subject)",
        )
        return NotificationAck(
            status="ok",
            message_id=notification.message_id,
            topic_arn=notification.topic_arn,
        )

    return app
