"""Domain layer: blueprint trees, templates, tokens and the outline parser."""

from .errors import (
    AlreadyExistsError,
    CreationFailedError,
    EmptyInputError,
    FileSystemError,
    FolderCommanderError,
    InvalidFormatError,
    InvalidPathError,
    ItemNotFoundError,
    TemplateFormatError,
    TemplateNotFoundError,
    TemplateParserError,
    TemplateStoreError,
)
from .parser import classify_name, parse_children, parse_structure
from .template import Template
from .tokens import KNOWN_TOKENS, TokenContext, format_creation_date, resolve_tokens
from .tree import FolderItem, ItemType

__all__ = [
    "AlreadyExistsError",
    "CreationFailedError",
    "EmptyInputError",
    "FileSystemError",
    "FolderCommanderError",
    "FolderItem",
    "InvalidFormatError",
    "InvalidPathError",
    "ItemNotFoundError",
    "ItemType",
    "KNOWN_TOKENS",
    "Template",
    "TemplateFormatError",
    "TemplateNotFoundError",
    "TemplateParserError",
    "TemplateStoreError",
    "TokenContext",
    "classify_name",
    "format_creation_date",
    "parse_children",
    "parse_structure",
    "resolve_tokens",
]
