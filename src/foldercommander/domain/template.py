"""Domain model for named folder-structure templates."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from .tree import FolderItem, ItemType, new_item_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Template:
    """A named blueprint; ``root_item`` is a container whose children get created."""

    name: str
    root_item: FolderItem = field(default_factory=lambda: FolderItem.folder(""))
    created_date: datetime = field(default_factory=utcnow)
    modified_date: datetime | None = None
    id: str = field(default_factory=new_item_id)

    def __post_init__(self) -> None:
        if self.root_item.type is not ItemType.FOLDER:
            raise ValueError("template root item must be a folder")
        if self.modified_date is None:
            object.__setattr__(self, "modified_date", self.created_date)

    @classmethod
    def create(cls, name: str, root_item: FolderItem | None = None, *, now: datetime | None = None) -> "Template":
        timestamp = now or utcnow()
        return cls(
            name=name,
            root_item=root_item or FolderItem.folder(""),
            created_date=timestamp,
            modified_date=timestamp,
        )

    @property
    def item_count(self) -> int:
        return self.root_item.count_items() - 1

    def touched(self, now: datetime | None = None) -> "Template":
        return replace(self, modified_date=now or utcnow())

    def with_root(self, root_item: FolderItem, now: datetime | None = None) -> "Template":
        return replace(self, root_item=root_item, modified_date=now or utcnow())

    def with_id(self, template_id: str) -> "Template":
        return replace(self, id=template_id)


__all__ = ["Template", "utcnow"]
