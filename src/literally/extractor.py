"""Per-language code buckets and the reconstructed markdown, in one pass."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, NamedTuple, Optional

from .parser import Node, NodeKind

BUCKET_SEPARATOR = "\n\n"


class Language(str, enum.Enum):
    JAVASCRIPT = "javascript"
    CSS = "css"
    HTML = "html"
    HANDLEBARS = "handlebars"
    BLOCK = "block"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["Language"]:
        """Map a fence tag to its bucket; untagged fences have none."""
        if not tag:
            return None
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


class Anchor(NamedTuple):
    generated_line: int
    original_line: int
    original_column: int


@dataclass(frozen=True)
class Extraction:
    buckets: Mapping[Language, str]
    markdown: str
    anchors: tuple[Anchor, ...] = field(default=())

    def bucket(self, language: Language) -> str:
        return self.buckets.get(language, "")


def collapse_paragraph(text: str) -> str:
    return " ".join(line.strip() for line in text.split("\n") if line.strip())


def serialize_node(node: Node, *, clean: bool = False) -> str:
    if node.kind is NodeKind.CODE:
        fence = node.fence or "```"
        body = f"{node.text}\n" if node.text else ""
        return f"{fence}{node.info}\n{body}{fence}"
    if clean and node.kind is NodeKind.PARAGRAPH:
        return collapse_paragraph(node.text)
    return node.text


def _fences(node: Node) -> Iterator[tuple[Node, int]]:
    """Yield each fenced block of ``node`` with the offset of its first body
    line inside the node's serialized text."""
    if node.kind is NodeKind.CODE:
        yield node, 1
        return
    for child in node.children:
        yield child, child.start_line - node.start_line + 1


def _trim_blank_edges(text: str) -> tuple[str, int]:
    """Drop blank lines around a fence body; also return how many led it."""
    lines = text.split("\n")
    leading = 0
    while leading < len(lines) and not lines[leading].strip():
        leading += 1
    end = len(lines)
    while end > leading and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[leading:end]), leading


def _column_in(reconstructed: str, code_line: str) -> int:
    if code_line and reconstructed.endswith(code_line):
        return len(reconstructed) - len(code_line)
    return 0


def _anchors_for(
    code: str,
    serialized_lines: list[str],
    offset: int,
    generated_line: int,
    original_line: int,
) -> Iterator[Anchor]:
    for step, code_line in enumerate(code.split("\n")):
        if not code_line.strip():
            continue
        pos = offset + step
        column = _column_in(serialized_lines[pos], code_line) if pos < len(serialized_lines) else 0
        yield Anchor(generated_line + step, original_line + step, column)


def extract(
    nodes: Iterable[Node],
    *,
    clean: bool = False,
    drop_title: bool = False,
    primary: Language = Language.JAVASCRIPT,
) -> Extraction:
    """Route fenced code into language buckets and rebuild the markdown.

    Anchors are recorded for every non-blank line of the ``primary`` bucket;
    their original lines index the returned ``markdown``, not the input.
    """
    nodes = list(nodes)
    if drop_title and nodes and nodes[0].kind is NodeKind.HEADING:
        nodes = nodes[1:]

    chunks: dict[Language, list[str]] = {language: [] for language in Language}
    anchors: list[Anchor] = []
    sections: list[str] = []
    generated_line = 1
    clean_line = 1

    for node in nodes:
        serialized = serialize_node(node, clean=clean)
        serialized_lines = serialized.split("\n")
        for code, offset in _fences(node):
            language = Language.from_tag(code.language)
            body, leading = _trim_blank_edges(code.text)
            if language is None or not body:
                continue
            chunks[language].append(body)
            if language is primary:
                offset += leading
                anchors.extend(
                    _anchors_for(body, serialized_lines, offset, generated_line, clean_line + offset)
                )
                generated_line += body.count("\n") + 2
        sections.append(serialized)
        clean_line += len(serialized_lines) + 1

    buckets = {language: BUCKET_SEPARATOR.join(texts) for language, texts in chunks.items()}
    markdown = BUCKET_SEPARATOR.join(sections) + "\n" if sections else ""
    return Extraction(buckets=buckets, markdown=markdown, anchors=tuple(anchors))
