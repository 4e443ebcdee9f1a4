"""Per-analysis-type color assignment for overlay boxes."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# 8 distinct colors (Tailwind 500 shades), one per concurrent analysis type
PALETTE = [
    "#3b82f6",  # blue
    "#22c55e",  # green
    "#a855f7",  # purple
    "#f97316",  # orange
    "#ec4899",  # pink
    "#14b8a6",  # teal
    "#6366f1",  # indigo
    "#ef4444",  # red
]


class ColorRegistry:
    """Stable analysis-type → color map for one viewing session.

    A type keeps the color it got when first registered, whatever happens to
    the order or presence of results afterwards. Colors cycle once more than
    ``len(palette)`` types have been seen.
    """

    def __init__(self, palette: list[str] | None = None) -> None:
        self.palette = list(PALETTE if palette is None else palette)
        if not self.palette:
            raise ValueError("Palette must contain at least one color")
        self._colors: dict[str, str] = {}

    def register(self, analysis_type_id: str) -> str:
        color = self._colors.get(analysis_type_id)
        if color is None:
            color = self.palette[len(self._colors) % len(self.palette)]
            self._colors[analysis_type_id] = color
            logger.debug("Assigned %s to analysis type %s", color, analysis_type_id)
        return color

    def get(self, analysis_type_id: str) -> str | None:
        return self._colors.get(analysis_type_id)

    def as_dict(self) -> dict[str, str]:
        return dict(self._colors)

    def __contains__(self, analysis_type_id: object) -> bool:
        return analysis_type_id in self._colors

    def __len__(self) -> int:
        return len(self._colors)
