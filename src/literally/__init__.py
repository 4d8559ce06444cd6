"""Literate programming compiler: markdown fences -> html, scripts and source maps."""

from __future__ import annotations

from .versioning import VERSION as __version__

__all__ = [
    "OutputFormat",
    "compile_document",
    "extract",
    "load_template",
    "parse_document",
    "__version__",
]


def __getattr__(name: str):
    if name in {"OutputFormat", "compile_document"}:
        from . import compiler

        return getattr(compiler, name)
    if name == "extract":
        from .extractor import extract

        return extract
    if name == "load_template":
        from .render.html import load_template

        return load_template
    if name == "parse_document":
        from .parser import parse_document

        return parse_document
    raise AttributeError(f"module 'literally' has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(__all__)
