"""Source Map v3 for the javascript bucket, anchored to the reconstructed markdown."""

from __future__ import annotations

import json
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Iterable, Iterator, NamedTuple

from .extractor import Anchor, Extraction

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_INDEX = {ch: idx for idx, ch in enumerate(_BASE64)}
_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


class Mapping(NamedTuple):
    """One generated position and the markdown position it came from (1-based lines, 0-based columns)."""

    generated_line: int
    generated_column: int
    original_line: int
    original_column: int
    source: str


@dataclass(frozen=True)
class SourceMap:
    file: str
    source_name: str
    source_content: str
    mappings: tuple[Mapping, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": 3,
            "file": self.file,
            "sources": [self.source_name],
            "sourcesContent": [self.source_content],
            "names": [],
            "mappings": encode_mappings(self.mappings),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def original_text(self, mapping: Mapping) -> str:
        lines = self.source_content.split("\n")
        return lines[mapping.original_line - 1]


def build_source_map(extraction: Extraction, *, file: str, source_name: str) -> SourceMap:
    """Attach the extraction's anchors to ``source_name``; its content is embedded verbatim."""
    mappings = tuple(_mappings_from(extraction.anchors, source_name))
    return SourceMap(
        file=file,
        source_name=source_name,
        source_content=extraction.markdown,
        mappings=mappings,
    )


def _mappings_from(anchors: Iterable[Anchor], source_name: str) -> Iterator[Mapping]:
    for anchor in anchors:
        yield Mapping(anchor.generated_line, 0, anchor.original_line, anchor.original_column, source_name)


def generated_script(javascript: str, map_name: str) -> str:
    """Script text followed by a ``sourceMappingURL`` comment on its own line."""
    if not javascript:
        return ""
    return f"{javascript}\n//# sourceMappingURL={map_name}\n"


def _encode_vlq(value: int) -> str:
    remaining = (-value << 1) | 1 if value < 0 else value << 1
    out = []
    while True:
        digit = remaining & _VLQ_MASK
        remaining >>= _VLQ_SHIFT
        if remaining:
            digit |= _VLQ_CONTINUATION
        out.append(_BASE64[digit])
        if not remaining:
            return "".join(out)


def encode_mappings(mappings: Iterable[Mapping]) -> str:
    """Serialize mappings (single source) into the v3 ``mappings`` string."""
    ordered = sorted(mappings, key=lambda item: (item.generated_line, item.generated_column))
    if not ordered:
        return ""
    lines: list[list[str]] = [[] for _ in range(ordered[-1].generated_line)]
    prev_original_line = 0
    prev_original_column = 0
    for line_no, group in groupby(ordered, key=lambda item: item.generated_line):
        prev_generated_column = 0
        for item in group:
            original_line = item.original_line - 1
            segment = (
                _encode_vlq(item.generated_column - prev_generated_column)
                + _encode_vlq(0)
                + _encode_vlq(original_line - prev_original_line)
                + _encode_vlq(item.original_column - prev_original_column)
            )
            lines[line_no - 1].append(segment)
            prev_generated_column = item.generated_column
            prev_original_line = original_line
            prev_original_column = item.original_column
    return ";".join(",".join(segments) for segments in lines)


def _decode_vlq_segment(segment: str) -> list[int]:
    values: list[int] = []
    shift = 0
    current = 0
    for ch in segment:
        digit = _BASE64_INDEX[ch]
        current += (digit & _VLQ_MASK) << shift
        if digit & _VLQ_CONTINUATION:
            shift += _VLQ_SHIFT
            continue
        negative = current & 1
        current >>= 1
        values.append(-current if negative else current)
        current = 0
        shift = 0
    return values


def decode_mappings(encoded: str, sources: list[str]) -> list[Mapping]:
    """Read a v3 ``mappings`` string back into 1-based line mappings."""
    result: list[Mapping] = []
    source_idx = 0
    original_line = 0
    original_column = 0
    for line_idx, group in enumerate(encoded.split(";") if encoded else []):
        generated_column = 0
        for segment in filter(None, group.split(",")):
            fields = _decode_vlq_segment(segment)
            generated_column += fields[0]
            if len(fields) < 4:
                continue
            source_idx += fields[1]
            original_line += fields[2]
            original_column += fields[3]
            result.append(
                Mapping(line_idx + 1, generated_column, original_line + 1, original_column, sources[source_idx])
            )
    return result
