from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from foldercommander.domain.errors import TemplateFormatError
from foldercommander.domain.serialization import (
    decode_date,
    dumps_template,
    dumps_templates,
    loads_any,
    loads_template,
    loads_templates,
)
from foldercommander.domain.template import Template
from foldercommander.domain.tree import FolderItem


def _template() -> Template:
    root = FolderItem.folder(
        "",
        [
            FolderItem.folder("assets", [FolderItem.file("logo.svg")], color="blue", icon="star"),
            FolderItem.file("README.md", "# {{projectName}}"),
        ],
    )
    moment = datetime(2026, 1, 9, 12, 0, tzinfo=timezone.utc)
    return Template(name="Web", root_item=root, created_date=moment, modified_date=moment)


def test_field_names_follow_contract() -> None:
    payload = json.loads(dumps_template(_template()))
    assert set(payload) == {"id", "name", "rootItem", "createdDate", "modifiedDate"}
    assets = payload["rootItem"]["children"][0]
    assert assets["type"] == "folder"
    assert assets["color"] == "blue"
    assert assets["icon"] == "star"
    assert assets["children"][0]["type"] == "file"
    assert "children" not in assets["children"][0]
    readme = payload["rootItem"]["children"][1]
    assert readme == {"id": readme["id"], "name": "README.md", "type": "file", "content": "# {{projectName}}"}


def test_round_trip_single_and_many() -> None:
    template = _template()
    assert loads_template(dumps_template(template)) == template
    other = Template.create("Empty")
    assert loads_templates(dumps_templates([template, other])) == [template, other]
    assert loads_any(dumps_template(template)) == [template]


def test_reference_epoch_dates_are_accepted() -> None:
    assert decode_date(0) == datetime(2001, 1, 1, tzinfo=timezone.utc)
    assert decode_date(86400.5).day == 2
    assert decode_date("2026-01-09T10:00:00Z") == datetime(2026, 1, 9, 10, tzinfo=timezone.utc)
    assert decode_date("2026-01-09T10:00:00").tzinfo is not None


def test_app_export_with_null_children_decodes() -> None:
    payload = {
        "id": "E621E1F8-C36C-495A-93FC-0C247A3E6E5F",
        "name": "Imported",
        "createdDate": 789000000.0,
        "modifiedDate": 789000100.0,
        "rootItem": {
            "id": "root",
            "name": "",
            "type": "folder",
            "children": [{"id": "f1", "name": "notes.txt", "type": "file", "children": None}],
        },
    }
    template = loads_template(json.dumps(payload))
    assert template.root_item.children[0].is_file
    assert template.modified_date is not None and template.modified_date > template.created_date


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps({"id": "x", "name": "missing root"}),
        json.dumps({"id": "x", "name": "bad type", "rootItem": {"id": "r", "name": "", "type": "link"}}),
        json.dumps({"id": "x", "name": "root file", "rootItem": {"id": "r", "name": "", "type": "file"}}),
    ],
)
def test_invalid_payloads_raise(payload: str) -> None:
    with pytest.raises(TemplateFormatError):
        loads_template(payload)


def test_shape_mismatch() -> None:
    with pytest.raises(TemplateFormatError):
        loads_templates(dumps_template(_template()))
    with pytest.raises(TemplateFormatError):
        loads_template(dumps_templates([_template()]))
