"""Pydantic schemas for relay requests and responses."""

from pydantic import BaseModel


class GenerateRequestSchema(BaseModel):
    prompt: str | None = None
    aspect_ratio: str | None = None


class GenerateResponseSchema(BaseModel):
    url: str | None = None


class RelayErrorSchema(BaseModel):
    error: str
    failure_reason: str
    quota_exceeded: bool | None = None


class DebugInfoSchema(BaseModel):
    hasKey: bool
    keyTail: str | None = None
    endpoint: str


class HealthSchema(BaseModel):
    ok: bool = True
