"""Ports consumed by the application services."""

from .template_store import TemplateStore

__all__ = ["TemplateStore"]
