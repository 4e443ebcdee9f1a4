"""Tests for overlay geometry, visibility and selection."""

from __future__ import annotations

import pytest

from app.models.annotation import AnnotationType
from app.overlay import PALETTE, ColorRegistry, OverlayState, ViewerConfig, css_percent, overlay_box, pixel_box
from tests.conftest import make_annotation, make_result


@pytest.mark.parametrize(
    "value,expected",
    [(10, "10%"), (10.0, "10%"), (12.5, "12.5%"), (0, "0%"), (100, "100%"), (33.33, "33.33%")],
)
def test_css_percent(value, expected):
    assert css_percent(value) == expected


def test_overlay_box_is_size_independent():
    ann = make_annotation("a", x=10, y=20, width=30, height=15)
    box = overlay_box(ann, "#3b82f6", "navigation")
    assert (box.left, box.top, box.width, box.height) == ("10%", "20%", "30%", "15%")
    assert box.color == "#3b82f6"
    assert box.analysis_type_id == "navigation"
    assert box.title == "A"


@pytest.mark.parametrize("size", [(200, 100), (1000, 500), (37, 911)])
def test_pixel_box_scales_with_rendered_size(size):
    w, h = size
    box = pixel_box(make_annotation("a", x=10, y=20, width=30, height=15), w, h)
    assert box.left == pytest.approx(0.10 * w)
    assert box.top == pytest.approx(0.20 * h)
    assert box.width == pytest.approx(0.30 * w)
    assert box.height == pytest.approx(0.15 * h)


def test_pixel_box_rejects_negative_size():
    with pytest.raises(ValueError):
        pixel_box(make_annotation("a"), -1, 100)


def test_new_types_start_visible(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    assert state.visible_types == {"navigation": True, "contrast": True}
    assert [a.id for _, a in state.visible_annotations()] == ["n1", "n2", "c1"]


def test_toggle_type_hides_its_annotations(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    assert state.toggle_type("navigation") is False
    assert [a.id for _, a in state.visible_annotations()] == ["c1"]
    assert state.toggle_type("navigation") is True


def test_toggle_unknown_type(navigation_result):
    state = OverlayState([navigation_result])
    with pytest.raises(KeyError):
        state.toggle_type("missing")


def test_toggle_all(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    state.toggle_all()
    assert state.visible_types == {"navigation": False, "contrast": False}
    state.toggle_all()
    assert state.all_visible()

    # Mixed visibility turns everything on
    state.toggle_type("contrast")
    state.toggle_all()
    assert state.all_visible()


def test_master_toggle_hides_everything(navigation_result):
    state = OverlayState([navigation_result])
    assert state.toggle_annotations() is False
    assert state.visible_annotations() == []
    assert state.boxes() == []
    # Per-type toggles are untouched
    assert state.visible_types == {"navigation": True}


def test_set_results_keeps_known_toggles(navigation_result, contrast_result):
    state = OverlayState([navigation_result])
    state.toggle_type("navigation")
    state.set_results([navigation_result, contrast_result])
    assert state.visible_types == {"navigation": False, "contrast": True}

    state.set_results([contrast_result])
    assert state.visible_types == {"contrast": True}


def test_colors_follow_first_seen_order(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    assert state.color_for("navigation") == PALETTE[0]
    assert state.color_for("contrast") == PALETTE[1]

    # Reordering does not reassign colors
    state.set_results([contrast_result, navigation_result])
    assert state.color_for("navigation") == PALETTE[0]
    boxes = {b.annotation_id: b for b in state.boxes()}
    assert boxes["c1"].color == PALETTE[1]
    assert boxes["n1"].color == PALETTE[0]


def test_colors_cycle_past_palette():
    registry = ColorRegistry()
    colors = [registry.register(f"type_{i}") for i in range(len(PALETTE) + 1)]
    assert colors[: len(PALETTE)] == PALETTE
    assert colors[-1] == PALETTE[0]


def test_color_falls_back_to_annotation_color():
    state = OverlayState()
    ann = make_annotation("a", color="#123456")
    assert state.color_for("unregistered", ann) == "#123456"
    assert state.color_for("unregistered") == PALETTE[0]


def test_selection(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    assert state.select("n1").id == "n1"
    assert state.selected.id == "n1"

    # Single selection: a new select replaces the previous one
    state.select("c1")
    assert state.selected.id == "c1"

    assert state.select("missing") is None
    assert state.selected is None


def test_selection_scoped_to_type():
    first = make_result("navigation", make_annotation("zone_1", title="Nav"))
    second = make_result("contrast", make_annotation("zone_1", title="Contrast"))
    state = OverlayState([first, second])
    assert state.select("zone_1").title == "Nav"
    assert state.select("zone_1", "contrast").title == "Contrast"


def test_selected_fields(navigation_result):
    state = OverlayState([navigation_result])
    assert state.selected_fields() == []
    state.select("n1")
    fields = state.selected_fields()
    assert [f.label for f in fields] == ["Role", "Code"]
    assert fields[1].is_code
    state.clear_selection()
    assert state.selected_fields() == []


def test_selection_cleared_when_result_disappears(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    state.select("n1")
    state.set_results([contrast_result])
    assert state.selected is None


def test_zoom_bounds():
    state = OverlayState(config=ViewerConfig(zoom_min=0.5, zoom_max=1.5, zoom_step=0.5))
    assert state.zoom_in() == 1.5
    assert state.zoom_in() == 1.5
    state.reset_zoom()
    assert state.zoom_out() == 0.5
    assert state.zoom_out() == 0.5
    assert state.reset_zoom() == 1.0


def test_summary(navigation_result, contrast_result):
    state = OverlayState([navigation_result, contrast_result])
    state.toggle_type("contrast")
    assert state.summary() == {
        "issues": 2,
        "recommendations": 1,
        "visible_types": 1,
        "total_types": 2,
        "visible_annotations": 2,
    }


def test_empty_state():
    state = OverlayState()
    assert state.boxes() == []
    assert state.all_visible()
    assert state.summary()["total_types"] == 0


def test_info_annotations_are_not_counted():
    result = make_result("misc", make_annotation("i1", AnnotationType.INFO))
    assert OverlayState([result]).summary()["issues"] == 0
