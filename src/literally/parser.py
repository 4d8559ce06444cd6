"""Markdown document -> ordered sequence of structural nodes.

Tokenizing is delegated to ``markdown-it-py``; this module only flattens its
block tokens into :class:`Node` records that remember where they came from.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .errors import ParseError


class NodeKind(str, enum.Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    BLOCKQUOTE = "blockquote"
    CODE = "code"
    INDENTED_CODE = "indented_code"
    HTML = "html"
    RULE = "rule"
    TABLE = "table"
    REFERENCE = "reference"
    OTHER = "other"


_OPEN_KINDS = {
    "heading_open": NodeKind.HEADING,
    "paragraph_open": NodeKind.PARAGRAPH,
    "bullet_list_open": NodeKind.LIST,
    "ordered_list_open": NodeKind.LIST,
    "blockquote_open": NodeKind.BLOCKQUOTE,
    "table_open": NodeKind.TABLE,
}
_LEAF_KINDS = {
    "fence": NodeKind.CODE,
    "code_block": NodeKind.INDENTED_CODE,
    "html_block": NodeKind.HTML,
    "hr": NodeKind.RULE,
}

_MARKDOWN = MarkdownIt("commonmark").enable("table")


@dataclass(frozen=True)
class Node:
    kind: NodeKind
    start_line: int
    end_line: int
    text: str
    info: str = ""
    fence: str = ""
    children: tuple["Node", ...] = ()

    @property
    def language(self) -> str:
        """First word of a fence's info string (``""`` when untagged)."""
        parts = self.info.split()
        return parts[0] if parts else ""


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_document(source: str | bytes) -> list[Node]:
    """Parse markdown into top-level nodes in document order.

    Fenced code inside lists and block quotes is attached to the enclosing
    node as ``children``. Source lines that markdown-it consumes without a
    block token (link reference definitions) come back as ``reference`` nodes.
    """
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Document is not valid UTF-8: {exc}") from exc
    text = normalize_newlines(source)
    try:
        tokens = _MARKDOWN.parse(text)
    except Exception as exc:
        raise ParseError(f"Unable to tokenize markdown: {exc!r}") from exc
    lines = text.split("\n")
    return list(_top_level_nodes(tokens, lines))


def _top_level_nodes(tokens: Sequence[Token], lines: list[str]) -> Iterable[Node]:
    covered = 0
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if token.level != 0 or token.nesting == -1 or not token.map:
            idx += 1
            continue
        close = _closing_index(tokens, idx)
        start, end = token.map
        gap = _gap_node(lines, covered, start)
        if gap is not None:
            yield gap
        if token.type == "fence":
            yield _fence_node(token)
        else:
            kind = _OPEN_KINDS.get(token.type) or _LEAF_KINDS.get(token.type, NodeKind.OTHER)
            children = tuple(
                _fence_node(inner)
                for inner in tokens[idx + 1 : close]
                if inner.type == "fence" and inner.map
            )
            text = _source_slice(lines, start, end)
            yield Node(
                kind=kind,
                start_line=start + 1,
                end_line=start + 1 + text.count("\n"),
                text=text,
                children=children,
            )
        covered = max(covered, end)
        idx = close + 1
    gap = _gap_node(lines, covered, len(lines))
    if gap is not None:
        yield gap


def _closing_index(tokens: Sequence[Token], idx: int) -> int:
    if tokens[idx].nesting != 1:
        return idx
    depth = 0
    for pos in range(idx, len(tokens)):
        depth += tokens[pos].nesting
        if depth == 0:
            return pos
    return len(tokens) - 1


def _fence_node(token: Token) -> Node:
    start, end = token.map
    body = token.content
    if body.endswith("\n"):
        body = body[:-1]
    return Node(
        kind=NodeKind.CODE,
        start_line=start + 1,
        end_line=end,
        text=body,
        info=token.info.strip(),
        fence=token.markup,
    )


def _source_slice(lines: list[str], start: int, end: int) -> str:
    chunk = lines[start:end]
    while chunk and not chunk[-1].strip():
        chunk.pop()
    return "\n".join(chunk)


def _gap_node(lines: list[str], start: int, end: int) -> Optional[Node]:
    filled = [pos for pos in range(start, end) if lines[pos].strip()]
    if not filled:
        return None
    first, last = filled[0], filled[-1]
    return Node(
        kind=NodeKind.REFERENCE,
        start_line=first + 1,
        end_line=last + 1,
        text="\n".join(lines[first : last + 1]),
    )
