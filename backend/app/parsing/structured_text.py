"""Parse the prose part of an analysis into titled sections.

The prose follows the prompting convention::

    📊 **Analyse Navigation (GPT-4o) terminée**
    1. Navigation Panel
    - Role : primary navigation
    - Issues : missing landmark
    Free text that describes the region,
    possibly over several lines.
    ```html
    <nav aria-label="Main">…</nav>
    ```
    2. Header
    …

A single pass over the lines drives a three-state machine (IDLE,
IN_SECTION, IN_CODE_BLOCK). Each line class has its own transition method
so the transitions can be exercised one at a time.
"""

from __future__ import annotations

import enum
import re

from app.models.sections import (
    CodeBlock,
    FreeText,
    LabeledItem,
    MainTitle,
    ParsedSection,
    StructuredNode,
)

_SECTION_RE = re.compile(r"^\d+\.\s")
_CODE_FENCE = "```"
_ITEM_PREFIX = "- "
_LABEL_SEPARATOR = " : "

# "📊 **Analyse Navigation (GPT-4o) terminée**"
_MAIN_TITLE_OPEN = "**Analyse"
_MAIN_TITLE_CLOSE = "terminée**"
_LEADING_DECORATION_RE = re.compile(r"^[^\w*]*")


class ParserState(enum.Enum):
    IDLE = "idle"
    IN_SECTION = "in_section"
    IN_CODE_BLOCK = "in_code_block"


class StructuredTextParser:
    """Line-oriented state machine.

    ``parse`` handles a whole document. ``feed`` and ``finish`` drive it one
    line at a time; ``finish`` hands over the nodes and resets the parser.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.state = ParserState.IDLE
        self.nodes: list[StructuredNode] = []
        self.section: ParsedSection | None = None
        self._code_lines: list[str] = []

    def parse(self, text: str) -> list[StructuredNode]:
        """Parse a whole document; state left by earlier calls is discarded."""
        self.reset()
        for line in text.split("\n"):
            self.feed(line)
        return self.finish()

    def feed(self, line: str) -> None:
        """Consume one line and apply the matching transition."""
        if self.state is ParserState.IN_CODE_BLOCK:
            if _CODE_FENCE in line:
                self.close_code_block()
            else:
                self._code_lines.append(line)
            return

        if is_main_title(line):
            self.emit_main_title(line)
        elif _SECTION_RE.match(line):
            self.start_section(_SECTION_RE.sub("", line, count=1).rstrip())
        elif _CODE_FENCE in line:
            self.open_code_block()
        elif self.section is None:
            return  # prose before the first numbered section
        elif line.startswith(_ITEM_PREFIX):
            self.add_item(line[len(_ITEM_PREFIX):])
        elif line.strip():
            self.add_text(line.strip())

    def finish(self) -> list[StructuredNode]:
        """Flush whatever is still open and return the parsed nodes."""
        if self.state is ParserState.IN_CODE_BLOCK:
            self.close_code_block()
        self._flush_section()
        nodes = self.nodes
        self.reset()
        return nodes

    # ── Transitions ──

    def emit_main_title(self, line: str) -> None:
        self._flush_section()
        self.nodes.append(MainTitle(content=clean_main_title(line)))

    def start_section(self, title: str) -> None:
        self._flush_section()
        self.section = ParsedSection(title=title)
        self.state = ParserState.IN_SECTION

    def open_code_block(self) -> None:
        self._code_lines = []
        self.state = ParserState.IN_CODE_BLOCK

    def close_code_block(self) -> None:
        content = "\n".join(self._code_lines).strip()
        # Code outside any section has nowhere to render
        if self.section is not None:
            self.section.items.append(CodeBlock(content=content))
        self._code_lines = []
        self.state = ParserState.IN_SECTION if self.section is not None else ParserState.IDLE

    def add_item(self, body: str) -> None:
        label, *rest = body.split(_LABEL_SEPARATOR)
        self.section.items.append(
            LabeledItem(label=label.strip(), content=_LABEL_SEPARATOR.join(rest).strip())
        )

    def add_text(self, text: str) -> None:
        items = self.section.items
        if items and isinstance(items[-1], FreeText):
            items[-1] = FreeText(content=f"{items[-1].content} {text}")
        else:
            items.append(FreeText(content=text))

    def _flush_section(self) -> None:
        if self.section is not None:
            self.nodes.append(self.section)
        self.section = None
        self.state = ParserState.IDLE


def is_main_title(line: str) -> bool:
    return _MAIN_TITLE_OPEN in line and _MAIN_TITLE_CLOSE in line


def clean_main_title(line: str) -> str:
    """Drop the leading emoji and the bold markers of a main-title line."""
    return _LEADING_DECORATION_RE.sub("", line.strip()).replace("**", "").strip()


def parse_structured_text(text: str) -> list[StructuredNode]:
    """Parse ``text`` into ``MainTitle`` and ``ParsedSection`` nodes."""
    return StructuredTextParser().parse(text)
