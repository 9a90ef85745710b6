"""In-memory template store."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from foldercommander.domain.errors import TemplateNotFoundError
from foldercommander.domain.serialization import dumps_template, dumps_templates, loads_any
from foldercommander.domain.template import Template
from foldercommander.domain.tree import new_item_id
from foldercommander.ports.template_store import TemplateStore


class InMemoryTemplateStore(TemplateStore):
    """Keeps templates in insertion order; subclasses hook ``_persist``."""

    def __init__(self, templates: Sequence[Template] = ()) -> None:
        self._templates: List[Template] = list(templates)

    def get(self, template_id: str) -> Template:
        for template in self._templates:
            if template.id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def list(self) -> List[Template]:
        return list(self._templates)

    def upsert(self, template: Template, *, now: datetime | None = None) -> Template:
        index = self._index_of(template.id)
        if index is None:
            self._templates.append(template)
            stored = template
        else:
            stored = template.touched(now)
            self._templates[index] = stored
        self._persist()
        return stored

    def delete(self, template_id: str) -> None:
        index = self._index_of(template_id)
        if index is None:
            raise TemplateNotFoundError(template_id)
        del self._templates[index]
        self._persist()

    def export(self, template_ids: Sequence[str] | None = None) -> str:
        if template_ids is None:
            return dumps_templates(self._templates)
        selected = [self.get(template_id) for template_id in template_ids]
        if len(selected) == 1:
            return dumps_template(selected[0])
        return dumps_templates(selected)

    def import_(self, payload: str | bytes) -> List[Template]:
        added: List[Template] = []
        for template in loads_any(payload):
            if self._index_of(template.id) is not None:
                template = template.with_id(new_item_id())
            self._templates.append(template)
            added.append(template)
        if added:
            self._persist()
        return added

    def _index_of(self, template_id: str) -> int | None:
        for index, template in enumerate(self._templates):
            if template.id == template_id:
                return index
        return None

    def _persist(self) -> None:
        """Memory-only store: nothing to flush."""


__all__ = ["InMemoryTemplateStore"]
