"""Compile one markdown document into the asset set of an output format."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

from .extractor import Extraction, Language, extract
from .parser import Node, parse_document
from .render.html import HtmlTemplate, RenderContext, render_html
from .sourcemap import build_source_map, generated_script


class OutputFormat(str, enum.Enum):
    INLINE_HTML = "inline-html"
    SPLIT_HTML = "split-html"
    NODE_MODULE = "node-module"
    BLOCK_BUNDLE = "block-bundle"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        key = (value or "").strip().lower()
        key = _FORMAT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(fmt.value for fmt in cls)
            raise ValueError(f"Unknown output format: {value!r} (expected one of {choices})") from None


_FORMAT_ALIASES = {
    "html": "inline-html",
    "node": "node-module",
    "blocks": "block-bundle",
}


@dataclass(frozen=True)
class Asset:
    path: str
    content: str


@dataclass(frozen=True)
class CompileRequest:
    nodes: tuple[Node, ...]
    name: str
    template: HtmlTemplate
    drop_title: bool = False

    def extraction(self, *, clean: bool) -> Extraction:
        return extract(self.nodes, clean=clean, drop_title=self.drop_title)


def _inline_context(extraction: Extraction) -> RenderContext:
    return RenderContext(
        html=extraction.bucket(Language.HTML),
        css=extraction.bucket(Language.CSS),
        javascript=extraction.bucket(Language.JAVASCRIPT),
    )


def _compile_inline_html(request: CompileRequest) -> list[Asset]:
    extraction = request.extraction(clean=False)
    page = render_html(request.template, _inline_context(extraction))
    return [Asset(f"{request.name}.html", page)]


def _compile_split_html(request: CompileRequest) -> list[Asset]:
    extraction = request.extraction(clean=True)
    script_name = f"{request.name}.js"
    map_name = f"{script_name}.map"
    source_map = build_source_map(extraction, file=script_name, source_name=f"{request.name}.md")
    context = RenderContext(
        html=extraction.bucket(Language.HTML),
        css=extraction.bucket(Language.CSS),
        src=script_name,
    )
    return [
        Asset(script_name, generated_script(extraction.bucket(Language.JAVASCRIPT), map_name)),
        Asset(map_name, source_map.to_json()),
        Asset(f"{request.name}.html", render_html(request.template, context)),
    ]


def _compile_node_module(request: CompileRequest) -> list[Asset]:
    extraction = request.extraction(clean=False)
    assets = [Asset(f"{request.name}.js", extraction.bucket(Language.JAVASCRIPT))]
    handlebars = extraction.bucket(Language.HANDLEBARS)
    if handlebars:
        assets.append(Asset(f"{request.name}.handlebars", handlebars))
    return assets


def _compile_block_bundle(request: CompileRequest) -> list[Asset]:
    extraction = request.extraction(clean=True)
    assets = [Asset("index.html", render_html(request.template, _inline_context(extraction)))]
    block = extraction.bucket(Language.BLOCK)
    if block:
        assets.append(Asset(".block", block))
    assets.append(Asset("README.md", extraction.markdown))
    return assets


_HANDLERS: dict[OutputFormat, Callable[[CompileRequest], list[Asset]]] = {
    OutputFormat.INLINE_HTML: _compile_inline_html,
    OutputFormat.SPLIT_HTML: _compile_split_html,
    OutputFormat.NODE_MODULE: _compile_node_module,
    OutputFormat.BLOCK_BUNDLE: _compile_block_bundle,
}


def compile_document(
    text: str | bytes,
    fmt: OutputFormat,
    name: str,
    *,
    template: HtmlTemplate,
    drop_title: bool = False,
) -> list[Asset]:
    """Produce every asset of ``fmt`` for one document, entirely in memory.

    Paths are relative to the output directory.
    """
    request = CompileRequest(nodes=tuple(parse_document(text)), name=name, template=template, drop_title=drop_title)
    return _HANDLERS[fmt](request)
