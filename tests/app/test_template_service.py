from __future__ import annotations

from datetime import datetime, timezone

import pytest

from foldercommander.adapters.memory_template_store import InMemoryTemplateStore
from foldercommander.app.templates import TemplateService
from foldercommander.domain.errors import EmptyInputError, ItemNotFoundError, TemplateNotFoundError
from foldercommander.domain.tree import FolderItem, ItemType

OUTLINE = """
src
  main.py
  tests
    test_main.py
.gitignore
README.md
"""


def _service() -> TemplateService:
    return TemplateService(InMemoryTemplateStore())


def test_create_from_text_wraps_top_level_entries() -> None:
    service = _service()
    template = service.create_from_text("Python", OUTLINE)

    root = template.root_item
    assert root.name == ""
    assert [child.name for child in root.children] == ["src", ".gitignore", "README.md"]
    assert service.store.get(template.id) == template

    summary = service.summary(template.id)
    assert (summary.folders, summary.files, summary.total) == (2, 4, 6)


def test_create_from_empty_text_fails() -> None:
    service = _service()
    with pytest.raises(EmptyInputError):
        service.create_from_text("Empty", "  \n")
    assert service.store.list() == []


def test_item_edits_are_persisted() -> None:
    service = _service()
    template = service.create_template("Docs")

    template = service.add_item(template.id, FolderItem.folder("docs"))
    docs = template.root_item.children[0]
    template = service.add_item(template.id, FolderItem.file("index.md", "# {{projectName}}"), parent_id=docs.id)
    assert [child.name for child in service.store.get(template.id).root_item.children[0].children] == ["index.md"]

    template = service.update_item(template.id, docs.id, name=" guides ", color="purple")
    stored_docs = service.store.get(template.id).root_item.find(docs.id)
    assert stored_docs is not None
    assert stored_docs.name == "guides"
    assert stored_docs.color == "purple"

    template = service.remove_item(template.id, docs.id)
    assert service.store.get(template.id).root_item.children == ()


def test_invalid_edits() -> None:
    service = _service()
    template = service.create_template("Docs")
    with pytest.raises(ValueError):
        service.add_item(template.id, FolderItem.folder("  "))
    with pytest.raises(ItemNotFoundError):
        service.remove_item(template.id, "missing")
    with pytest.raises(ValueError):
        service.update_item(template.id, template.root_item.id, type=ItemType.FILE)
    with pytest.raises(TemplateNotFoundError):
        service.rename_template("missing", "x")
    with pytest.raises(ValueError):
        service.create_template("")


def test_rename_refreshes_modified_date_only() -> None:
    service = _service()
    template = service.create_template("Old")
    renamed = service.rename_template(template.id, "New")
    assert renamed.name == "New"
    assert renamed.created_date == template.created_date
    assert renamed.modified_date is not None and renamed.modified_date >= template.created_date


def test_duplicate_template() -> None:
    service = _service()
    original = service.create_from_text("Web", "public\n  index.html")
    moment = datetime(2026, 2, 3, tzinfo=timezone.utc)
    copy = service.duplicate_template(original.id, now=moment)

    assert copy.id != original.id
    assert copy.name == "Web Copy"
    assert copy.root_item == original.root_item
    assert copy.created_date == moment
    assert [t.id for t in service.store.list()] == [original.id, copy.id]
