"""Port definition for template storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from foldercommander.domain.template import Template


class TemplateStore(ABC):
    """Abstraction over persistence of templates keyed by their id."""

    @abstractmethod
    def get(self, template_id: str) -> Template:
        """Return the template or raise ``TemplateNotFoundError``."""

    @abstractmethod
    def list(self) -> List[Template]:
        """Return all templates in insertion order."""

    @abstractmethod
    def upsert(self, template: Template) -> Template:
        """Add a new template or replace an existing one; return the stored value."""

    @abstractmethod
    def delete(self, template_id: str) -> None:
        """Remove the template or raise ``TemplateNotFoundError``."""

    @abstractmethod
    def export(self, template_ids: Sequence[str] | None = None) -> str:
        """Serialize one template (single id) or several (array) to JSON."""

    @abstractmethod
    def import_(self, payload: str | bytes) -> List[Template]:
        """Add templates decoded from ``payload``; return the stored values."""


__all__ = ["TemplateStore"]
