"""Storage adapters for templates."""

from .json_template_store import JSONFileTemplateStore
from .memory_template_store import InMemoryTemplateStore

__all__ = ["InMemoryTemplateStore", "JSONFileTemplateStore"]
