"""Pydantic data models for etsyboost."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Etsy accepts at most 13 tags per listing
MAX_TAGS = 13
MIN_SCORE = 1
MAX_SCORE = 10


class ScoredTag(BaseModel):
    """A candidate tag with a 1-10 relevance score and a display decoration."""

    text: str
    score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    decoration: str = ""


class TagResult(BaseModel):
    """Ranked tags plus templated advice for one listing."""

    tags: list[ScoredTag] = Field(default_factory=list, max_length=MAX_TAGS)
    tips: list[str] = Field(default_factory=list)


class WatermarkPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


class AssetKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
