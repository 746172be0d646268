"""Pydantic response models for the webhook REST API."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    detail: str


class NotificationAck(BaseModel):
    status: str
    message_id: str
    topic_arn: str


class HealthResponse(BaseModel):
    status: str
    topic_arn: str
    version: str
