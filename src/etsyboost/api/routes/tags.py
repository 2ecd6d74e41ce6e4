"""Tag generation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from etsyboost.models import TagResult

router = APIRouter(tags=["tags"])


class GenerateTagsRequest(BaseModel):
    """Listing text to score tags for."""

    title: str = Field(min_length=5, max_length=140)
    description: str = Field(min_length=10)
    category: str = Field(min_length=3, max_length=100)


@router.post("/generate-tags", response_model=TagResult)
async def generate_tags(request: GenerateTagsRequest, req: Request) -> TagResult:
    """Return up to 13 scored tags and SEO tips for a listing."""
    return await req.app.state.tag_service.generate(request.title, request.description, request.category)
