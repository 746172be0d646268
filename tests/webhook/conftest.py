"""Shared fixtures for webhook tests."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from snsauth.webhook.app import create_app
from snsauth.webhook.config import Settings

TOPIC01_ARN = "arn:aws:sns:ap-northeast-1:000000000000:topic-01"


@pytest.fixture()
def settings(monkeypatch) -> Settings:
    """Settings trusting topic-01 on the default ``/sns`` path."""
    monkeypatch.setenv("SNS_TOPIC_ARN", TOPIC01_ARN)
    monkeypatch.delenv("SNS_WEBHOOK_PATH", raising=False)
    return Settings()


@pytest.fixture()
def app(settings, fetcher):
    """Webhook app whose outbound GETs go to the in-memory fetcher."""
    return create_app(settings, fetcher=fetcher)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sns_post(client):
    """POST a payload to ``/sns`` with SNS headers.

    *body* may be a dict (JSON-encoded) or raw bytes.
    """

    def _post(body, message_type="Notification", topic_arn=TOPIC01_ARN, path="/sns"):
        if isinstance(body, dict):
            body = json.dumps(body)
        return client.post(
            path,
            content=body,
            headers={
                "Content-Type": "text/plain; charset=UTF-8",
                "x-amz-sns-message-type": message_type,
                "x-amz-sns-topic-arn": topic_arn,
            },
        )

    return _post
