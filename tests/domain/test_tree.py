from __future__ import annotations

import pytest

from foldercommander.domain.errors import ItemNotFoundError
from foldercommander.domain.template import Template
from foldercommander.domain.tree import FolderItem, ItemType


def _sample_tree() -> FolderItem:
    return FolderItem.folder(
        "",
        [
            FolderItem.folder("src", [FolderItem.file("main.txt", "{{projectName}}")]),
            FolderItem.file("README.md", "{{creationDate}}"),
        ],
    )


def test_iter_items_is_preorder_and_restartable() -> None:
    root = _sample_tree()
    names = [item.name for item in root.iter_items()]
    assert names == ["", "src", "main.txt", "README.md"]
    assert [item.name for item in root.iter_items()] == names
    assert root.count_items() == 4


def test_file_cannot_have_children() -> None:
    with pytest.raises(ValueError):
        FolderItem(name="notes.txt", type=ItemType.FILE, children=(FolderItem.folder("x"),))


def test_folder_drops_content() -> None:
    item = FolderItem(name="docs", type=ItemType.FOLDER, content="ignored")
    assert item.content is None


def test_add_child_returns_new_tree() -> None:
    root = _sample_tree()
    src = root.children[0]
    updated = root.add_child(src.id, FolderItem.file("util.txt"))

    assert [child.name for child in updated.children[0].children] == ["main.txt", "util.txt"]
    assert [child.name for child in root.children[0].children] == ["main.txt"]
    assert updated.id == root.id


def test_add_child_to_file_or_missing_parent() -> None:
    root = _sample_tree()
    readme = root.children[1]
    with pytest.raises(ValueError):
        root.add_child(readme.id, FolderItem.file("x.txt"))
    with pytest.raises(ItemNotFoundError):
        root.add_child("missing", FolderItem.file("x.txt"))


def test_remove_subtree() -> None:
    root = _sample_tree()
    src = root.children[0]
    updated = root.remove(src.id)
    assert [child.name for child in updated.children] == ["README.md"]
    assert updated.find(src.children[0].id) is None
    with pytest.raises(ValueError):
        root.remove(root.id)
    with pytest.raises(ItemNotFoundError):
        root.remove("missing")


def test_update_switches_type_and_clears_fields() -> None:
    root = _sample_tree()
    src = root.children[0]
    as_file = root.update(src.id, type=ItemType.FILE, content="hello", color="blue")
    node = as_file.find(src.id)
    assert node is not None
    assert node.is_file
    assert node.children == ()
    assert node.content == "hello"
    assert node.color is None

    readme = root.children[1]
    as_folder = root.update(readme.id, type="folder", color="red")
    folder = as_folder.find(readme.id)
    assert folder is not None
    assert folder.is_folder
    assert folder.content is None
    assert folder.color == "red"

    with pytest.raises(ValueError):
        root.update(readme.id, parent="nope")


def test_replace_subtree_and_equality() -> None:
    root = _sample_tree()
    src = root.children[0]
    renamed = root.replace_subtree(src.id, src.renamed("lib"))
    assert renamed.children[0].name == "lib"
    assert renamed.children[0].id == src.id
    assert renamed != root
    assert root.replace_subtree(src.id, src) == root


def test_template_touched_keeps_created_date() -> None:
    template = Template.create("Web", _sample_tree())
    assert template.modified_date == template.created_date
    assert template.item_count == 3

    later = template.touched()
    assert later.created_date == template.created_date
    assert later.modified_date is not None and later.modified_date >= template.created_date


def test_template_root_must_be_folder() -> None:
    with pytest.raises(ValueError):
        Template(name="bad", root_item=FolderItem.file("x.txt"))
