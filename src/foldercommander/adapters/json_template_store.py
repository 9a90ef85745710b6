"""Template store persisted as a JSON array in a single file."""

from __future__ import annotations

from pathlib import Path

from foldercommander.adapters.memory_template_store import InMemoryTemplateStore
from foldercommander.domain.errors import TemplateFormatError
from foldercommander.domain.serialization import dumps_templates, loads_templates
from foldercommander.utils.fs import atomic_write_text


class JSONFileTemplateStore(InMemoryTemplateStore):
    def __init__(self, path: Path) -> None:
        self._path = path
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self):
        if not self._path.exists():
            return []
        raw = self._path.read_text("utf-8")
        if not raw.strip():
            return []
        try:
            return loads_templates(raw)
        except TemplateFormatError as exc:
            raise TemplateFormatError(f"template store {self._path} is corrupt: {exc}") from exc

    def _persist(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_text(self._path, dumps_templates(self._templates) + "\n")


__all__ = ["JSONFileTemplateStore"]
