"""POST /api/overlay, /overlay/svg, /overlay/png: overlay boxes for the loaded analysis results."""

from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from PIL import Image

from app.config import settings
from app.models.requests import OverlayImageRequest, OverlayRequest
from app.models.responses import OverlayResponse, OverlaySummary
from app.overlay.engine import OverlayState
from app.overlay.render import render_annotated_image, render_overlay_svg

router = APIRouter()


def _build_state(req: OverlayRequest) -> OverlayState:
    """Fresh viewer state from the request; overlays are recomputed on every call."""
    state = OverlayState(req.results)
    for type_id, visible in req.visible_types.items():
        if type_id in state.visible_types:
            state.visible_types[type_id] = visible
    state.show_annotations = req.show_annotations
    if req.selected_id is not None:
        state.select(req.selected_id)
    return state


@router.post("/overlay", response_model=OverlayResponse)
async def overlay(req: OverlayRequest) -> OverlayResponse:
    state = _build_state(req)

    pixel_boxes = []
    if req.rendered_width is not None and req.rendered_height is not None:
        pixel_boxes = state.pixel_boxes(req.rendered_width, req.rendered_height)

    return OverlayResponse(
        boxes=state.boxes(),
        pixel_boxes=pixel_boxes,
        colors=state.colors.as_dict(),
        visible_types=state.visible_types,
        summary=OverlaySummary(**state.summary()),
        selected=state.selected,
        selected_fields=state.selected_fields(),
    )


@router.post("/overlay/svg")
async def overlay_svg(req: OverlayRequest) -> Response:
    if req.rendered_width is None or req.rendered_height is None:
        raise HTTPException(status_code=400, detail="rendered_width and rendered_height are required")
    state = _build_state(req)
    svg = render_overlay_svg(state.boxes(), req.rendered_width, req.rendered_height)
    return Response(content=svg, media_type="image/svg+xml")


@router.post("/overlay/png")
async def overlay_png(req: OverlayImageRequest) -> Response:
    if not req.image.data:
        raise HTTPException(status_code=400, detail="image.data (base64) is required")
    try:
        image_bytes = base64.b64decode(req.image.data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {e}") from e

    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > settings.max_image_mb:
        raise HTTPException(
            status_code=400,
            detail=f"Image too large: {size_mb:.2f}MB (max {settings.max_image_mb:g}MB)",
        )

    state = _build_state(req)
    try:
        png = render_annotated_image(image_bytes, state)
    except (OSError, Image.DecompressionBombError) as e:
        raise HTTPException(status_code=400, detail=f"Unreadable image: {e}") from e
    return Response(content=png, media_type="image/png")
