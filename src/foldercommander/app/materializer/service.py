"""Create a template's folder/file tree on disk."""

from __future__ import annotations

import contextlib
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, ContextManager, Iterator, List, Optional, Tuple

from foldercommander.domain.errors import (
    AlreadyExistsError,
    CreationFailedError,
    FolderCommanderError,
    InvalidPathError,
)
from foldercommander.domain.template import Template
from foldercommander.domain.tokens import TokenContext, format_creation_date, resolve_tokens
from foldercommander.domain.tree import FolderItem, ItemType
from foldercommander.utils.fs import atomic_write, is_writable_directory

DecorateHook = Callable[[Path, Optional[str], Optional[str]], None]
AccessScope = Callable[[Path], ContextManager[Any]]
CancelCheck = Callable[[], bool]

_RESERVED_NAMES = {".", ".."}


@dataclass(frozen=True)
class PlannedEntry:
    """One item the materializer creates, relative to the project root."""

    parts: Tuple[str, ...]
    type: ItemType
    content: str | None
    color: str | None = None
    icon: str | None = None

    @property
    def relative_path(self) -> str:
        return "/".join(self.parts)


class MaterializerService:
    """Materialize templates below a destination directory.

    The walk is sequential and depth-first in ``children`` order. Any failure
    after the project folder exists removes the whole project folder again
    and surfaces as :class:`CreationFailedError`.
    """

    def __init__(self, decorate: DecorateHook | None = None, *, default_folder_color: str | None = None) -> None:
        self._decorate_hook = decorate
        self._default_folder_color = default_folder_color

    def plan(self, template: Template, project_name: str, *, now: datetime | None = None) -> List[PlannedEntry]:
        _validate_component(project_name, what="project name")
        creation_date = format_creation_date(now or datetime.now())
        return list(self._iter_entries(template.root_item, project_name, creation_date))

    def materialize(
        self,
        template: Template,
        project_name: str,
        destination: Path,
        *,
        cancel_check: CancelCheck | None = None,
        access_scope: AccessScope | None = None,
        now: datetime | None = None,
    ) -> Path:
        destination = Path(destination)
        if not destination.is_dir():
            raise InvalidPathError(destination, "destination is not an existing directory")
        try:
            _validate_component(project_name, what="project name")
        except ValueError as exc:
            raise InvalidPathError(destination / project_name, str(exc)) from exc

        scope = access_scope(destination) if access_scope is not None else contextlib.nullcontext()
        with scope:
            project_root = destination / project_name
            if _occupied(project_root):
                raise AlreadyExistsError(project_root)
            creation_date = format_creation_date(now or datetime.now())
            created = False
            try:
                project_root.mkdir()
                created = True
                self._decorate(project_root, template.root_item.color, template.root_item.icon)
                for entry in self._iter_entries(template.root_item, project_name, creation_date):
                    if cancel_check is not None and cancel_check():
                        raise CreationFailedError("materialization cancelled")
                    self._create_entry(project_root, entry)
            except (OSError, ValueError, FolderCommanderError) as exc:
                _rollback(project_root, created)
                raise CreationFailedError(_failure_message(exc)) from exc
            except BaseException:
                _rollback(project_root, created)
                raise
        return project_root

    def _create_entry(self, project_root: Path, entry: PlannedEntry) -> None:
        target = project_root.joinpath(*entry.parts)
        if _occupied(target):
            raise AlreadyExistsError(target)
        if entry.type is ItemType.FOLDER:
            target.mkdir()
            self._decorate(target, entry.color, entry.icon)
        else:
            atomic_write(target, (entry.content or "").encode("utf-8"))

    def _iter_entries(self, root: FolderItem, project_name: str, creation_date: str) -> Iterator[PlannedEntry]:
        yield from self._walk(root.children, (), project_name, project_name, creation_date)

    def _walk(
        self,
        items: Tuple[FolderItem, ...],
        parent_parts: Tuple[str, ...],
        parent_name: str,
        project_name: str,
        creation_date: str,
    ) -> Iterator[PlannedEntry]:
        relative_path = "/".join(parent_parts)
        for item in items:
            context = TokenContext(
                project_name=project_name,
                parent_name=parent_name,
                current_name=item.name,
                relative_path=relative_path,
                creation_date=creation_date,
            )
            name = resolve_tokens(item.name, context)
            _validate_component(name, what=f"item name '{item.name}'")
            parts = parent_parts + (name,)
            if item.is_folder:
                yield PlannedEntry(parts=parts, type=ItemType.FOLDER, content=None, color=item.color, icon=item.icon)
                yield from self._walk(item.children, parts, name, project_name, creation_date)
            else:
                content = resolve_tokens(item.content or "", context.with_current_name(name))
                yield PlannedEntry(parts=parts, type=ItemType.FILE, content=content)

    def _decorate(self, path: Path, color: str | None, icon: str | None) -> None:
        if self._decorate_hook is None:
            return
        color = color or self._default_folder_color
        if color is None and icon is None:
            return
        # decoration is cosmetic; it never fails a materialization
        with contextlib.suppress(Exception):
            self._decorate_hook(path, color, icon)


def materialize(
    template: Template,
    project_name: str,
    destination: Path,
    decorate: DecorateHook | None = None,
    **options: Any,
) -> Path:
    return MaterializerService(decorate).materialize(template, project_name, destination, **options)


def validate_destination(path: Path) -> bool:
    return is_writable_directory(Path(path))


def _validate_component(name: str, *, what: str) -> None:
    if not name or not name.strip():
        raise ValueError(f"{what} resolves to an empty name")
    separators = {os.sep, os.altsep, "\x00"} - {None}
    if name in _RESERVED_NAMES or any(sep in name for sep in separators):
        raise ValueError(f"{what} resolves to an invalid path component: {name!r}")


def _occupied(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def _rollback(project_root: Path, created: bool) -> None:
    if created:
        shutil.rmtree(project_root, ignore_errors=True)


def _failure_message(exc: BaseException) -> str:
    if isinstance(exc, CreationFailedError):
        return exc.message
    return str(exc) or exc.__class__.__name__


__all__ = [
    "AccessScope",
    "CancelCheck",
    "DecorateHook",
    "MaterializerService",
    "PlannedEntry",
    "materialize",
    "validate_destination",
]
