"""Placeholder substitution for item names and file content."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Mapping

KNOWN_TOKENS = ("projectName", "parentName", "currentName", "relativePath", "creationDate")

TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_creation_date(moment: datetime) -> str:
    """Render ``moment`` as ``09 January 2026`` regardless of the process locale."""
    return f"{moment.day:02d} {_MONTHS[moment.month - 1]} {moment.year:04d}"


@dataclass(frozen=True)
class TokenContext:
    project_name: str
    parent_name: str
    current_name: str
    relative_path: str
    creation_date: str

    def as_mapping(self) -> dict[str, str]:
        return {
            "projectName": self.project_name,
            "parentName": self.parent_name,
            "currentName": self.current_name,
            "relativePath": self.relative_path,
            "creationDate": self.creation_date,
        }

    def with_current_name(self, name: str) -> "TokenContext":
        return replace(self, current_name=name)


def resolve_tokens(text: str, context: TokenContext | Mapping[str, str]) -> str:
    """Replace every known ``{{token}}`` in one pass; unknown tokens are kept verbatim."""
    if isinstance(context, TokenContext):
        values = context.as_mapping()
    else:
        values = {name: context[name] for name in KNOWN_TOKENS if name in context}
    if "{{" not in text:
        return text

    def _substitute(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return match.group(0) if value is None else value

    return TOKEN_PATTERN.sub(_substitute, text)


def find_tokens(text: str) -> list[str]:
    return TOKEN_PATTERN.findall(text)


def unknown_tokens(text: str) -> list[str]:
    return [name for name in find_tokens(text) if name not in KNOWN_TOKENS]


__all__ = [
    "KNOWN_TOKENS",
    "TOKEN_PATTERN",
    "TokenContext",
    "find_tokens",
    "format_creation_date",
    "resolve_tokens",
    "unknown_tokens",
]
