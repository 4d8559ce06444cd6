from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .compiler import Asset


class DirectoryWriter:
    """Writes compiled assets below one output directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, relative: str, content: str) -> Path:
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8", newline="\n")
        return target

    def write_all(self, assets: Iterable[Asset]) -> list[Path]:
        return [self.write(asset.path, asset.content) for asset in assets]
