"""Watermark upload endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response

from etsyboost.models import WatermarkPosition

router = APIRouter(tags=["watermark"])


@router.post("/watermark")
async def watermark(
    req: Request,
    file: Annotated[UploadFile, File()],
    watermark_text: Annotated[str, Form(min_length=1, max_length=100)],
    position: Annotated[WatermarkPosition, Form()],
    opacity: Annotated[float, Form(ge=0.0, le=1.0)],
) -> Response:
    """Stamp ``watermark_text`` onto an uploaded image or video."""
    settings = req.app.state.settings
    max_bytes = settings.compute.max_upload_bytes

    data = await file.read(max_bytes + 1)
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(data) > max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {max_bytes} bytes")

    asset = await req.app.state.watermark_service.watermark(data, watermark_text, position, opacity)
    return Response(
        content=asset.data,
        media_type=asset.mime,
        headers={"Content-Disposition": f'attachment; filename="watermarked.{asset.ext}"'},
    )
