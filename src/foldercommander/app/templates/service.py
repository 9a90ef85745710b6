"""Application service for editing stored templates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from foldercommander.domain.parser import parse_children
from foldercommander.domain.template import Template, utcnow
from foldercommander.domain.tree import FolderItem, ItemType, new_item_id
from foldercommander.ports.template_store import TemplateStore

COPY_SUFFIX = " Copy"


@dataclass(frozen=True)
class TemplateSummary:
    template_id: str
    name: str
    folders: int
    files: int

    @property
    def total(self) -> int:
        return self.folders + self.files

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.template_id,
            "name": self.name,
            "folders": self.folders,
            "files": self.files,
            "total": self.total,
        }


class TemplateService:
    """Structural edits of templates, persisted through a :class:`TemplateStore`."""

    def __init__(self, store: TemplateStore) -> None:
        self._store = store

    @property
    def store(self) -> TemplateStore:
        return self._store

    def create_template(self, name: str, root_item: FolderItem | None = None) -> Template:
        name = _require_name(name, what="template name")
        return self._store.upsert(Template.create(name, root_item))

    def create_from_text(self, name: str, text: str) -> Template:
        """Parse an indented outline; its top-level entries become the template's items."""
        children = parse_children(text)
        return self.create_template(name, FolderItem.folder("", children))

    def rename_template(self, template_id: str, name: str) -> Template:
        template = self._store.get(template_id)
        name = _require_name(name, what="template name")
        return self._store.upsert(replace(template, name=name))

    def add_item(self, template_id: str, item: FolderItem, parent_id: str | None = None) -> Template:
        template = self._store.get(template_id)
        _require_name(item.name, what="item name")
        root = template.root_item
        return self._store.upsert(template.with_root(root.add_child(parent_id or root.id, item)))

    def update_item(self, template_id: str, item_id: str, **changes: Any) -> Template:
        template = self._store.get(template_id)
        if "name" in changes:
            changes["name"] = _require_name(changes["name"], what="item name")
        if item_id == template.root_item.id and changes.get("type", ItemType.FOLDER) != ItemType.FOLDER:
            raise ValueError("template root item must stay a folder")
        return self._store.upsert(template.with_root(template.root_item.update(item_id, **changes)))

    def remove_item(self, template_id: str, item_id: str) -> Template:
        template = self._store.get(template_id)
        return self._store.upsert(template.with_root(template.root_item.remove(item_id)))

    def duplicate_template(self, template_id: str, *, now: datetime | None = None) -> Template:
        source = self._store.get(template_id)
        timestamp = now or utcnow()
        copy = Template(
            id=new_item_id(),
            name=f"{source.name}{COPY_SUFFIX}",
            root_item=source.root_item,
            created_date=timestamp,
            modified_date=timestamp,
        )
        return self._store.upsert(copy)

    def summary(self, template_id: str) -> TemplateSummary:
        template = self._store.get(template_id)
        folders = files = 0
        for item in template.root_item.iter_items():
            if item.id == template.root_item.id:
                continue
            if item.is_folder:
                folders += 1
            else:
                files += 1
        return TemplateSummary(template_id=template.id, name=template.name, folders=folders, files=files)


def _require_name(name: str, *, what: str) -> str:
    if not name or not name.strip():
        raise ValueError(f"{what} must be a non-empty string")
    return name.strip()


__all__ = ["TemplateService", "TemplateSummary"]
