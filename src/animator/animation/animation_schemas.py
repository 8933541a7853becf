"""Pydantic schemas for animation responses."""

from pydantic import BaseModel


class AnimationResponse(BaseModel):
    animationUrl: str
    serviceUsed: str


class AnimationErrorSchema(BaseModel):
    error: str
