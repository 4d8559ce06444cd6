"""Regex rewrites applied to raw markdown before it is parsed."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .errors import RetargetError


@dataclass(frozen=True)
class RetargetRule:
    rule: str
    value: str


@dataclass(frozen=True)
class CompiledRule:
    pattern: re.Pattern[str]
    value: str


def rules_from_config(entries: Iterable[Any]) -> list[RetargetRule]:
    rules: list[RetargetRule] = []
    for idx, entry in enumerate(entries or []):
        if not isinstance(entry, dict) or "rule" not in entry:
            raise RetargetError(f"Retarget entry #{idx + 1} must be an object with 'rule' and 'value'")
        rules.append(RetargetRule(rule=str(entry["rule"]), value=str(entry.get("value", ""))))
    return rules


def compile_rules(rules: Sequence[RetargetRule]) -> list[CompiledRule]:
    """Compile every rule up front so a bad pattern fails before any parsing."""
    compiled: list[CompiledRule] = []
    for item in rules:
        try:
            pattern = re.compile(item.rule)
        except re.error as exc:
            raise RetargetError(f"Invalid retarget rule {item.rule!r}: {exc}") from exc
        compiled.append(CompiledRule(pattern=pattern, value=item.value))
    return compiled


def apply_rules(text: str, rules: Sequence[CompiledRule]) -> str:
    for item in rules:
        text = item.pattern.sub(lambda _match, value=item.value: value, text)
    return text
