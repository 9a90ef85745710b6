"""Value objects describing a folder/file blueprint tree."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Iterator

from .errors import ItemNotFoundError


class ItemType(str, Enum):
    FOLDER = "folder"
    FILE = "file"


def new_item_id() -> str:
    return str(uuid.uuid4())


_EDITABLE_FIELDS = {"name", "type", "children", "content", "color", "icon"}


@dataclass(frozen=True)
class FolderItem:
    """One node of a blueprint tree.

    Nodes are values: children are owned by their parent's tuple and every
    edit returns a new tree, so a node can never become its own ancestor.
    """

    name: str
    type: ItemType = ItemType.FOLDER
    children: tuple["FolderItem", ...] = ()
    content: str | None = None
    color: str | None = None
    icon: str | None = None
    id: str = field(default_factory=new_item_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ItemType(self.type))
        object.__setattr__(self, "children", tuple(self.children))
        if self.type is ItemType.FILE and self.children:
            raise ValueError(f"file item '{self.name}' cannot have children")
        if self.type is ItemType.FOLDER and self.content is not None:
            object.__setattr__(self, "content", None)
        if not self.id:
            raise ValueError("item id must be provided")

    @classmethod
    def folder(
        cls,
        name: str,
        children: Iterable["FolderItem"] = (),
        *,
        color: str | None = None,
        icon: str | None = None,
        item_id: str | None = None,
    ) -> "FolderItem":
        return cls(
            name=name,
            type=ItemType.FOLDER,
            children=tuple(children),
            color=color,
            icon=icon,
            id=item_id or new_item_id(),
        )

    @classmethod
    def file(cls, name: str, content: str | None = None, *, item_id: str | None = None) -> "FolderItem":
        return cls(name=name, type=ItemType.FILE, content=content, id=item_id or new_item_id())

    @property
    def is_folder(self) -> bool:
        return self.type is ItemType.FOLDER

    @property
    def is_file(self) -> bool:
        return self.type is ItemType.FILE

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def iter_items(self) -> Iterator["FolderItem"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_items()

    def count_items(self) -> int:
        return sum(1 for _ in self.iter_items())

    def find(self, item_id: str) -> "FolderItem | None":
        for item in self.iter_items():
            if item.id == item_id:
                return item
        return None

    # Structural updates -------------------------------------------------

    def with_children(self, children: Iterable["FolderItem"]) -> "FolderItem":
        return replace(self, children=tuple(children))

    def renamed(self, name: str) -> "FolderItem":
        return replace(self, name=name)

    def replace_subtree(self, item_id: str, new_item: "FolderItem") -> "FolderItem":
        """Return a tree where the node ``item_id`` is swapped for ``new_item``."""
        updated = self._map_subtree(item_id, lambda _node: new_item)
        if updated is None:
            raise ItemNotFoundError(item_id)
        return updated

    def add_child(self, parent_id: str, child: "FolderItem") -> "FolderItem":
        parent = self.find(parent_id)
        if parent is None:
            raise ItemNotFoundError(parent_id)
        if parent.is_file:
            raise ValueError(f"cannot add children to file item '{parent.name}'")
        return self.replace_subtree(parent_id, parent.with_children((*parent.children, child)))

    def remove(self, item_id: str) -> "FolderItem":
        if item_id == self.id:
            raise ValueError("the root item cannot be removed from its own tree")
        updated = self._remove(item_id)
        if updated is None:
            raise ItemNotFoundError(item_id)
        return updated

    def update(self, item_id: str, **changes: Any) -> "FolderItem":
        """Replace fields of one node, keeping the file/folder invariants."""
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"unsupported item fields: {sorted(unknown)}")

        def _apply(node: FolderItem) -> FolderItem:
            values = dict(changes)
            target_type = ItemType(values.get("type", node.type))
            values["type"] = target_type
            if target_type is ItemType.FILE:
                values["children"] = ()
                values["color"] = None
                values["icon"] = None
            else:
                values["content"] = None
            return replace(node, **values)

        updated = self._map_subtree(item_id, _apply)
        if updated is None:
            raise ItemNotFoundError(item_id)
        return updated

    def _map_subtree(self, item_id: str, transform) -> "FolderItem | None":
        if self.id == item_id:
            return transform(self)
        for index, child in enumerate(self.children):
            updated = child._map_subtree(item_id, transform)
            if updated is not None:
                children = list(self.children)
                children[index] = updated
                return replace(self, children=tuple(children))
        return None

    def _remove(self, item_id: str) -> "FolderItem | None":
        for index, child in enumerate(self.children):
            if child.id == item_id:
                return replace(self, children=self.children[:index] + self.children[index + 1 :])
            updated = child._remove(item_id)
            if updated is not None:
                children = list(self.children)
                children[index] = updated
                return replace(self, children=tuple(children))
        return None


__all__ = ["FolderItem", "ItemType", "new_item_id"]
