"""Error taxonomy shared by the template engine and its adapters."""

from __future__ import annotations

from pathlib import Path


class FolderCommanderError(RuntimeError):
    """Base class for every error raised by Folder Commander."""


class FileSystemError(FolderCommanderError):
    """Raised when materializing a template on disk fails."""


class InvalidPathError(FileSystemError):
    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid file or folder path {self.path}{detail}")


class AlreadyExistsError(FileSystemError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"File or folder already exists: {self.path}")


class CreationFailedError(FileSystemError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to create: {message}")


class TemplateParserError(FolderCommanderError):
    """Raised when indented text cannot be turned into a tree."""


class EmptyInputError(TemplateParserError):
    def __init__(self) -> None:
        super().__init__("Template cannot be empty.")


class InvalidFormatError(TemplateParserError):
    def __init__(self) -> None:
        super().__init__("Invalid template format. Use indentation to represent folder hierarchy.")


class ItemNotFoundError(FolderCommanderError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in template tree")


class TemplateStoreError(FolderCommanderError):
    """Raised by template store adapters."""


class TemplateNotFoundError(TemplateStoreError):
    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template {template_id} not found")


class TemplateFormatError(TemplateStoreError):
    """Raised when a serialized template payload is malformed."""


__all__ = [
    "AlreadyExistsError",
    "CreationFailedError",
    "EmptyInputError",
    "FileSystemError",
    "FolderCommanderError",
    "InvalidFormatError",
    "InvalidPathError",
    "ItemNotFoundError",
    "TemplateFormatError",
    "TemplateNotFoundError",
    "TemplateParserError",
    "TemplateStoreError",
]
