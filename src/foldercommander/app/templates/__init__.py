"""Template editing package."""

from .service import TemplateService, TemplateSummary

__all__ = ["TemplateService", "TemplateSummary"]
