"""Version lookup for both source checkouts and installed distributions."""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path

DEFAULT_VERSION = "0.3.0"


def _read_pyproject_version() -> str | None:
    for parent in Path(__file__).resolve().parents:
        candidate = parent / "pyproject.toml"
        if not candidate.exists():
            continue
        try:
            text = candidate.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        if not re.search(r'(?m)^name\s*=\s*"literally"\s*$', text):
            continue
        match = re.search(r'(?m)^version\s*=\s*"([^"]+)"\s*$', text)
        if match:
            return match.group(1).strip()
    return None


def resolve_version() -> str:
    local_version = _read_pyproject_version()
    if local_version:
        return local_version
    try:
        return package_version("literally")
    except PackageNotFoundError:
        return DEFAULT_VERSION


VERSION = resolve_version()
