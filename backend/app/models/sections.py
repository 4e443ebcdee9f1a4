"""Structured-text nodes produced from the prose part of an analysis."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class LabeledItem(BaseModel):
    kind: Literal["item"] = "item"
    label: str
    content: str = ""


class CodeBlock(BaseModel):
    kind: Literal["code"] = "code"
    content: str


class FreeText(BaseModel):
    kind: Literal["text"] = "text"
    content: str


SectionItem = Annotated[
    Union[LabeledItem, CodeBlock, FreeText],
    Field(discriminator="kind"),
]


class ParsedSection(BaseModel):
    kind: Literal["section"] = "section"
    title: str
    items: list[SectionItem] = Field(default_factory=list)


class MainTitle(BaseModel):
    kind: Literal["main-title"] = "main-title"
    content: str


StructuredNode = Annotated[
    Union[MainTitle, ParsedSection],
    Field(discriminator="kind"),
]
