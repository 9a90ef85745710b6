"""Turn an indented plain-text outline into a blueprint tree.

Each non-blank line is one item. Leading spaces and tabs are counted as
written (a tab is never expanded), then scaled by the outline's indent step. Names that look
like ``name.ext`` (extension of at most five alphanumeric characters) or that
start with a dot become files; everything else becomes a folder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .errors import EmptyInputError, InvalidFormatError
from .tree import FolderItem, ItemType

MAX_EXTENSION_LENGTH = 5


@dataclass(frozen=True)
class OutlineLine:
    level: int
    name: str


def classify_name(name: str) -> ItemType:
    if "." in name and not name.endswith("."):
        segments = [segment for segment in name.split(".") if segment]
        if len(segments) > 1:
            extension = segments[-1]
            if len(extension) <= MAX_EXTENSION_LENGTH and extension.isalnum():
                return ItemType.FILE
    if name.startswith("."):
        return ItemType.FILE
    return ItemType.FOLDER


def read_outline(text: str) -> List[OutlineLine]:
    """Return the non-blank lines with their indentation depth.

    Depth is the number of leading spaces/tabs divided by the indentation
    step of the whole outline (the gcd of all indent widths), so an outline
    indented consistently by two or four spaces nests one level per step.
    """
    raw_lines: List[tuple[int, str]] = []
    for raw in text.splitlines():
        name = raw.strip()
        if not name:
            continue
        indent = len(raw) - len(raw.lstrip(" \t"))
        raw_lines.append((indent, name))
    step = math.gcd(*(indent for indent, _ in raw_lines)) if raw_lines else 0
    step = step or 1
    return [OutlineLine(level=indent // step, name=name) for indent, name in raw_lines]


class _OutlineCursor:
    def __init__(self, lines: Sequence[OutlineLine]) -> None:
        self._lines = lines
        self.index = 0

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self._lines)

    def peek(self) -> OutlineLine:
        return self._lines[self.index]

    def build(self, level: int) -> FolderItem:
        if self.exhausted:
            raise InvalidFormatError()
        line = self.peek()
        item_type = classify_name(line.name)
        children: List[FolderItem] = []
        self.index += 1
        while not self.exhausted:
            candidate = self.peek()
            if candidate.level <= level:
                break
            if candidate.level == level + 1:
                if item_type is ItemType.FILE:
                    # files own nothing: deeper lines are left for the caller to skip
                    break
                children.append(self.build(candidate.level))
            else:
                self.index += 1
        return FolderItem(name=line.name, type=item_type, children=tuple(children))

    def skip_deeper_than(self, level: int) -> None:
        while not self.exhausted and self.peek().level > level:
            self.index += 1


def parse_structure(text: str) -> FolderItem:
    """Parse ``text`` and return the tree rooted at its first line."""
    lines = read_outline(text)
    if not lines:
        raise EmptyInputError()
    cursor = _OutlineCursor(lines)
    return cursor.build(lines[0].level)


def parse_children(text: str) -> tuple[FolderItem, ...]:
    """Parse every top-level entry of ``text`` as siblings."""
    lines = read_outline(text)
    if not lines:
        raise EmptyInputError()
    cursor = _OutlineCursor(lines)
    items: List[FolderItem] = []
    while not cursor.exhausted:
        level = cursor.peek().level
        items.append(cursor.build(level))
        cursor.skip_deeper_than(level)
    return tuple(items)


__all__ = ["OutlineLine", "classify_name", "parse_children", "parse_structure", "read_outline"]
