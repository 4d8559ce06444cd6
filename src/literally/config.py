from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError
from .retarget import RetargetRule, rules_from_config

DEFAULT_CONFIG_NAME = "literally.config.json"


@dataclass
class LiterallyConfig:
    files: list[str] = field(default_factory=list)
    output: Optional[str] = None
    format: Optional[str] = None
    name: Optional[str] = None
    drop_title: bool = False
    retarget: list[RetargetRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "LiterallyConfig":
        files = payload.get("files") or []
        if isinstance(files, str):
            files = [files]
        if not isinstance(files, list):
            raise ConfigError("'files' must be a list of paths")
        return cls(
            files=[str(item) for item in files],
            output=payload.get("output"),
            format=payload.get("format"),
            name=payload.get("name"),
            drop_title=bool(payload.get("drop_title", False)),
            retarget=rules_from_config(payload.get("retarget") or []),
        )


def load_config(path: Optional[Path], cwd: Optional[Path] = None) -> LiterallyConfig:
    """Load the JSON config; an absent default config file means no settings."""
    base = cwd or Path.cwd()
    explicit = path is not None
    target = path if path is not None else base / DEFAULT_CONFIG_NAME
    if not target.is_absolute():
        target = base / target
    if not target.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {target}")
        return LiterallyConfig()
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {target}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config root must be an object: {target}")
    return LiterallyConfig.from_dict(payload)
