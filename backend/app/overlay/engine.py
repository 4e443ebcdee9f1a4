"""Annotation overlay geometry, per-type colors and viewer state.

Annotation coordinates are percentages of the full image, so an overlay
container sized exactly like the displayed image needs no scaling: a box is
``left = x%``, ``top = y%``, ``width = width%``, ``height = height%``
whatever the rendered pixel size. Everything here is recomputed from the
current results on every call; nothing is cached between renders.
"""

from __future__ import annotations

import logging

from app.models.analysis import AnalysisResult
from app.models.annotation import Annotation, LabeledField, OverlayBox, PixelBox
from app.overlay.config import ViewerConfig
from app.overlay.palette import ColorRegistry
from app.parsing.cache import cached_fields

logger = logging.getLogger(__name__)


def css_percent(value: float) -> str:
    """``10.0 -> "10%"``, ``12.5 -> "12.5%"``."""
    number = float(value)
    if number.is_integer():
        return f"{int(number)}%"
    return f"{number!r}%"


def overlay_box(annotation: Annotation, color: str, analysis_type_id: str = "") -> OverlayBox:
    return OverlayBox(
        annotation_id=annotation.id,
        analysis_type_id=analysis_type_id,
        type=annotation.type,
        title=annotation.title,
        color=color,
        left=css_percent(annotation.x),
        top=css_percent(annotation.y),
        width=css_percent(annotation.width),
        height=css_percent(annotation.height),
    )


def pixel_box(annotation: Annotation, rendered_width: float, rendered_height: float) -> PixelBox:
    """Absolute rectangle of ``annotation`` inside a rendered image box."""
    if rendered_width < 0 or rendered_height < 0:
        raise ValueError("Rendered size must be non-negative")
    return PixelBox(
        annotation_id=annotation.id,
        left=annotation.x / 100.0 * rendered_width,
        top=annotation.y / 100.0 * rendered_height,
        width=annotation.width / 100.0 * rendered_width,
        height=annotation.height / 100.0 * rendered_height,
    )


class OverlayState:
    """State of one annotated-image viewer.

    Holds the loaded results, which analysis types are visible, the master
    overlay toggle, the zoom level and the single selected annotation.
    """

    def __init__(
        self,
        results: list[AnalysisResult] | None = None,
        config: ViewerConfig | None = None,
        colors: ColorRegistry | None = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.colors = colors or ColorRegistry()
        self.results: list[AnalysisResult] = []
        self.visible_types: dict[str, bool] = {}
        self.show_annotations = self.config.show_annotations
        self.zoom = self.config.zoom_default
        self._selected: tuple[str, Annotation] | None = None
        if results:
            self.set_results(results)

    # ── Results & visibility ──

    def set_results(self, results: list[AnalysisResult]) -> None:
        """Load ``results``; new types start visible, known toggles are kept."""
        self.results = list(results)
        visible: dict[str, bool] = {}
        for result in self.results:
            type_id = result.analysis_type_id
            self.colors.register(type_id)
            if type_id not in visible:
                visible[type_id] = self.visible_types.get(type_id, True)
        self.visible_types = visible

        if self._selected is not None and self._find(self._selected[1].id, self._selected[0]) is None:
            self._selected = None
        logger.debug("Overlay loaded %d results (%d types)", len(self.results), len(visible))

    def toggle_type(self, analysis_type_id: str) -> bool:
        if analysis_type_id not in self.visible_types:
            raise KeyError(analysis_type_id)
        self.visible_types[analysis_type_id] = not self.visible_types[analysis_type_id]
        return self.visible_types[analysis_type_id]

    def all_visible(self) -> bool:
        return all(self.visible_types.values())

    def toggle_all(self) -> None:
        """Hide everything when all types are visible, otherwise show everything."""
        target = not self.all_visible()
        for type_id in self.visible_types:
            self.visible_types[type_id] = target

    def toggle_annotations(self) -> bool:
        self.show_annotations = not self.show_annotations
        return self.show_annotations

    def visible_annotations(self) -> list[tuple[str, Annotation]]:
        """(analysis type id, annotation) pairs currently drawn, in result order."""
        if not self.show_annotations:
            return []
        return [
            (result.analysis_type_id, annotation)
            for result in self.results
            if self.visible_types.get(result.analysis_type_id, False)
            for annotation in result.annotations
        ]

    def color_for(self, analysis_type_id: str, annotation: Annotation | None = None) -> str:
        color = self.colors.get(analysis_type_id)
        if color is None and annotation is not None and annotation.color:
            return annotation.color
        return color or self.colors.palette[0]

    def boxes(self) -> list[OverlayBox]:
        return [
            overlay_box(annotation, self.color_for(type_id, annotation), type_id)
            for type_id, annotation in self.visible_annotations()
        ]

    def pixel_boxes(self, rendered_width: float, rendered_height: float) -> list[PixelBox]:
        return [
            pixel_box(annotation, rendered_width, rendered_height)
            for _, annotation in self.visible_annotations()
        ]

    # ── Selection ──

    @property
    def selected(self) -> Annotation | None:
        return self._selected[1] if self._selected else None

    def select(self, annotation_id: str, analysis_type_id: str | None = None) -> Annotation | None:
        """Select one annotation, replacing any previous selection."""
        self._selected = self._find(annotation_id, analysis_type_id)
        if self._selected is None:
            logger.debug("No annotation %s to select", annotation_id)
            return None
        return self._selected[1]

    def clear_selection(self) -> None:
        self._selected = None

    def selected_fields(self) -> list[LabeledField]:
        """Detail-panel fields of the selected annotation."""
        if self._selected is None:
            return []
        return cached_fields(self._selected[1].description)

    def _find(self, annotation_id: str, analysis_type_id: str | None) -> tuple[str, Annotation] | None:
        for result in self.results:
            if analysis_type_id is not None and result.analysis_type_id != analysis_type_id:
                continue
            for annotation in result.annotations:
                if annotation.id == annotation_id:
                    return result.analysis_type_id, annotation
        return None

    # ── Zoom ──

    def zoom_in(self) -> float:
        self.zoom = min(self.zoom + self.config.zoom_step, self.config.zoom_max)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = max(self.zoom - self.config.zoom_step, self.config.zoom_min)
        return self.zoom

    def reset_zoom(self) -> float:
        self.zoom = self.config.zoom_default
        return self.zoom

    # ── Summary ──

    def summary(self) -> dict[str, int]:
        return {
            "issues": sum(r.issue_count for r in self.results),
            "recommendations": sum(r.recommendation_count for r in self.results),
            "visible_types": sum(1 for v in self.visible_types.values() if v),
            "total_types": len(self.visible_types),
            "visible_annotations": len(self.visible_annotations()),
        }
