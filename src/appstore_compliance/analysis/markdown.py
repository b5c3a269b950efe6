"""Line-by-line rendering of the lightweight markdown the agent returns."""

import re
from enum import Enum

from pydantic import BaseModel
from rich.markup import escape

_NUMBERED_RE = re.compile(r"^\d+\.\s")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")


class LineKind(str, Enum):
    heading = "heading"
    bullet = "bullet"
    numbered = "numbered"
    blank = "blank"
    paragraph = "paragraph"


class MarkdownLine(BaseModel):
    kind: LineKind
    text: str = ""
    level: int = 0  # heading level 1–3


class InlineSpan(BaseModel):
    text: str
    bold: bool = False


def classify_line(line: str) -> MarkdownLine:
    """Classify one line as heading, bullet, numbered item, blank or paragraph."""
    if line.startswith("### "):
        return MarkdownLine(kind=LineKind.heading, text=line[4:], level=3)
    if line.startswith("## "):
        return MarkdownLine(kind=LineKind.heading, text=line[3:], level=2)
    if line.startswith("# "):
        return MarkdownLine(kind=LineKind.heading, text=line[2:], level=1)
    if line.startswith("- ") or line.startswith("* "):
        return MarkdownLine(kind=LineKind.bullet, text=line[2:])
    if _NUMBERED_RE.match(line):
        return MarkdownLine(kind=LineKind.numbered, text=_NUMBERED_RE.sub("", line, count=1))
    if not line.strip():
        return MarkdownLine(kind=LineKind.blank)
    return MarkdownLine(kind=LineKind.paragraph, text=line)


def parse_lines(text: str) -> list[MarkdownLine]:
    if not text:
        return []
    return [classify_line(line) for line in text.split("\n")]


def split_bold(text: str) -> list[InlineSpan]:
    """Split on ``**…**`` pairs; an unpaired ``**`` stays literal."""
    parts = _BOLD_RE.split(text)
    return [
        InlineSpan(text=part, bold=i % 2 == 1)
        for i, part in enumerate(parts)
        if part or i % 2 == 1
    ]


def _inline_markup(text: str) -> str:
    return "".join(
        f"[b]{escape(span.text)}[/b]" if span.bold else escape(span.text)
        for span in split_bold(text)
    )


def to_rich_markup(text: str) -> str:
    """Render agent markdown as Rich console markup."""
    out: list[str] = []
    numbered = 0
    for line in parse_lines(text):
        if line.kind != LineKind.numbered:
            numbered = 0
        if line.kind == LineKind.heading:
            style = {1: "bold underline", 2: "bold", 3: "bold italic"}[line.level]
            out.append(f"[{style}]{_inline_markup(line.text)}[/]")
        elif line.kind == LineKind.bullet:
            out.append(f"  • {_inline_markup(line.text)}")
        elif line.kind == LineKind.numbered:
            numbered += 1
            out.append(f"  {numbered}. {_inline_markup(line.text)}")
        elif line.kind == LineKind.blank:
            out.append("")
        else:
            out.append(_inline_markup(line.text))
    return "\n".join(out)
