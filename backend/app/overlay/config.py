"""Viewer configuration: zoom bounds and overlay defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ViewerConfig:
    """Controls the zoom range of the annotated image viewer."""

    zoom_min: float = 0.5
    zoom_max: float = 3.0
    zoom_step: float = 0.25
    zoom_default: float = 1.0

    # Overlay visible when a viewer opens
    show_annotations: bool = True
