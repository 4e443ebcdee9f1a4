"""Shared test fixtures."""

from __future__ import annotations

import json

import pytest

from app.models.analysis import AnalysisResult
from app.models.annotation import Annotation, AnnotationType


# Sample model responses following the prompting convention

SIDEBAR_ANNOTATION = {
    "id": "zone_1",
    "type": "issue",
    "title": "Navigation Latérale",
    "description": (
        "Rôle et fonction : navigation principale | "
        "Problèmes d'accessibilité : pas de landmark | "
        "Suggestions de code : <nav aria-label=\"Principale\">"
    ),
    "x": 0,
    "y": 10,
    "width": 20,
    "height": 90,
    "color": "#0066cc",
}

HEADER_ANNOTATION = {
    "id": "zone_2",
    "type": "recommendation",
    "title": "En-tête",
    "description": "Rôle : banner | Position : haut de page",
    "x": 0,
    "y": 0,
    "width": 100,
    "height": 10,
    "color": "#0066cc",
}

SAMPLE_PROSE = """Voici l'analyse de l'interface.

1. Navigation Latérale (Sidebar)
- Rôle et fonction : navigation principale
- Problèmes d'accessibilité : landmark absent : nav manquant
La barre latérale regroupe les liens
vers les sections principales.
```html
<nav aria-label="Principale">
  <ul></ul>
</nav>
```
2. En-tête
- Rôle : banner"""

SAMPLE_ANNOTATIONS_JSON = json.dumps({"annotations": [SIDEBAR_ANNOTATION, HEADER_ANNOTATION]}, ensure_ascii=False)

SAMPLE_RESPONSE = f"{SAMPLE_PROSE}\n\n---ANNOTATIONS---\n{SAMPLE_ANNOTATIONS_JSON}"

# Model forgot the delimiter but still produced the JSON block
NO_DELIMITER_RESPONSE = f"{SAMPLE_PROSE}\n\nAnnotations :\n{SAMPLE_ANNOTATIONS_JSON}\n"

PROSE_ONLY_RESPONSE = "1. Contraste\n- Ratio : 3.2:1 insuffisant\n"

END_TO_END_RESPONSE = (
    "1. Header\n- Role : banner\n\n---ANNOTATIONS---\n"
    '{"annotations":[{"id":"a1","type":"issue","title":"T","description":"Role : banner",'
    '"x":0,"y":0,"width":10,"height":10,"color":"#fff"}]}'
)


def make_annotation(ann_id: str, ann_type: AnnotationType = AnnotationType.INFO, **kwargs) -> Annotation:
    defaults = {"title": ann_id.upper(), "x": 10, "y": 20, "width": 30, "height": 15}
    defaults.update(kwargs)
    return Annotation(id=ann_id, type=ann_type, **defaults)


def make_result(type_id: str, *annotations: Annotation, name: str = "") -> AnalysisResult:
    return AnalysisResult(
        analysis_type_id=type_id,
        analysis_type_name=name or type_id.title(),
        provider="openai",
        content=f"1. {type_id}",
        annotations=list(annotations),
    )


@pytest.fixture
def sample_response() -> str:
    return SAMPLE_RESPONSE


@pytest.fixture
def navigation_result() -> AnalysisResult:
    return make_result(
        "navigation",
        make_annotation("n1", AnnotationType.ISSUE, description="Role : nav | Code : <nav>"),
        make_annotation("n2", AnnotationType.RECOMMENDATION),
    )


@pytest.fixture
def contrast_result() -> AnalysisResult:
    return make_result(
        "contrast",
        make_annotation("c1", AnnotationType.ISSUE, x=50, y=50, width=25, height=25),
    )
