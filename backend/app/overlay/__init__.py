"""Annotation overlay engine."""

from app.overlay.config import ViewerConfig
from app.overlay.palette import PALETTE, ColorRegistry
from app.overlay.engine import OverlayState, css_percent, overlay_box, pixel_box

__all__ = [
    "ViewerConfig",
    "PALETTE",
    "ColorRegistry",
    "OverlayState",
    "css_percent",
    "overlay_box",
    "pixel_box",
]
