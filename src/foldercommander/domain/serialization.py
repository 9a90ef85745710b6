"""JSON codec for templates and blueprint items."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterable, List

import jsonschema

from .errors import TemplateFormatError
from .template import Template
from .tree import FolderItem, ItemType

SCHEMA_RESOURCE = "template.schema.json"

# Numeric dates count seconds from this epoch (exports of the desktop app).
REFERENCE_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)


@lru_cache(maxsize=1)
def _template_validator() -> jsonschema.Draft202012Validator:
    schema_resource = resources.files("foldercommander.resources") / SCHEMA_RESOURCE
    schema = json.loads(schema_resource.read_text(encoding="utf-8"))
    return jsonschema.Draft202012Validator(schema)


def validate_payload(payload: Any) -> None:
    validator = _template_validator()
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.absolute_path) or "<root>"
        raise TemplateFormatError(f"invalid template payload at {location}: {first.message}")


def item_to_dict(item: FolderItem) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"id": item.id, "name": item.name, "type": item.type.value}
    if item.is_folder:
        payload["children"] = [item_to_dict(child) for child in item.children]
    if item.content is not None:
        payload["content"] = item.content
    if item.color is not None:
        payload["color"] = item.color
    if item.icon is not None:
        payload["icon"] = item.icon
    return payload


def item_from_dict(data: Dict[str, Any]) -> FolderItem:
    item_type = ItemType(data["type"])
    children = data.get("children") or []
    if item_type is ItemType.FILE and children:
        raise TemplateFormatError(f"file item '{data.get('name')}' cannot have children")
    return FolderItem(
        id=data["id"],
        name=data["name"],
        type=item_type,
        children=tuple(item_from_dict(child) for child in children),
        content=data.get("content"),
        color=data.get("color"),
        icon=data.get("icon"),
    )


def encode_date(moment: datetime) -> str:
    return moment.isoformat()


def decode_date(value: Any) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return REFERENCE_EPOCH + timedelta(seconds=float(value))
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise TemplateFormatError(f"invalid date value: {value!r}") from exc
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment
    raise TemplateFormatError(f"invalid date value: {value!r}")


def template_to_dict(template: Template) -> Dict[str, Any]:
    return {
        "id": template.id,
        "name": template.name,
        "rootItem": item_to_dict(template.root_item),
        "createdDate": encode_date(template.created_date),
        "modifiedDate": encode_date(template.modified_date or template.created_date),
    }


def template_from_dict(data: Dict[str, Any]) -> Template:
    root = item_from_dict(data["rootItem"])
    if not root.is_folder:
        raise TemplateFormatError(f"template '{data.get('name')}' root item must be a folder")
    created = decode_date(data["createdDate"]) if "createdDate" in data else None
    modified = decode_date(data["modifiedDate"]) if "modifiedDate" in data else None
    kwargs: Dict[str, Any] = {"id": data["id"], "name": data["name"], "root_item": root}
    if created is not None:
        kwargs["created_date"] = created
    kwargs["modified_date"] = modified
    return Template(**kwargs)


def dumps_template(template: Template) -> str:
    return json.dumps(template_to_dict(template), ensure_ascii=False, indent=2)


def dumps_templates(templates: Iterable[Template]) -> str:
    return json.dumps([template_to_dict(t) for t in templates], ensure_ascii=False, indent=2)


def _load_json(payload: str | bytes) -> Any:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise TemplateFormatError(f"template payload is not valid JSON: {exc}") from exc
    validate_payload(data)
    return data


def loads_template(payload: str | bytes) -> Template:
    data = _load_json(payload)
    if not isinstance(data, dict):
        raise TemplateFormatError("expected a single template object")
    return template_from_dict(data)


def loads_templates(payload: str | bytes) -> List[Template]:
    data = _load_json(payload)
    if not isinstance(data, list):
        raise TemplateFormatError("expected an array of templates")
    return [template_from_dict(entry) for entry in data]


def loads_any(payload: str | bytes) -> List[Template]:
    """Decode either an array of templates or a single template object."""
    data = _load_json(payload)
    if isinstance(data, list):
        return [template_from_dict(entry) for entry in data]
    return [template_from_dict(data)]


__all__ = [
    "decode_date",
    "dumps_template",
    "dumps_templates",
    "encode_date",
    "item_from_dict",
    "item_to_dict",
    "loads_any",
    "loads_template",
    "loads_templates",
    "template_from_dict",
    "template_to_dict",
    "validate_payload",
]
