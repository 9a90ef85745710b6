#!/usr/bin/env python3
"""Entry point for the foldercommander CLI."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import replace
from pathlib import Path
from textwrap import dedent
from typing import Any, Iterable, List

from foldercommander import __version__
from foldercommander.adapters.json_template_store import JSONFileTemplateStore
from foldercommander.app.materializer import MaterializerService
from foldercommander.app.templates import TemplateService
from foldercommander.domain.errors import (
    FileSystemError,
    FolderCommanderError,
    TemplateNotFoundError,
    TemplateStoreError,
)
from foldercommander.domain.parser import parse_structure
from foldercommander.domain.serialization import dumps_template, item_to_dict
from foldercommander.domain.template import Template
from foldercommander.domain.tokens import unknown_tokens
from foldercommander.domain.tree import FolderItem
from foldercommander.settings import SETTINGS, load_preferences, save_preferences
from foldercommander.utils.telemetry import (
    TelemetryLog,
    folder_decorated,
    project_created,
    project_failed,
    templates_event,
)

HELP_OVERVIEW = dedent(
    """
    Quick start:
      - Describe a structure as an indented outline (files have extensions)
      - foldercommander templates from-text "Web App" outline.txt
      - foldercommander create "Web App" MyProject --dest ~/Projects

    Tokens usable in names and file content:
      {{projectName}} {{parentName}} {{currentName}} {{relativePath}} {{creationDate}}
    """
)


def _build_services() -> tuple[TemplateService, MaterializerService]:
    store = JSONFileTemplateStore(SETTINGS.store_file)
    preferences = load_preferences(SETTINGS)
    materializer = MaterializerService(
        _record_decoration,
        default_folder_color=preferences.effective_folder_color,
    )
    return TemplateService(store), materializer


def _telemetry() -> TelemetryLog:
    return TelemetryLog(SETTINGS)


def _record_decoration(path: Path, color: str | None, icon: str | None) -> None:
    # Folder tinting is platform specific; the CLI only records the request.
    _telemetry().record(folder_decorated(path, color, icon))


def _warn_unknown_tokens(items: Iterable[FolderItem]) -> None:
    for item in items:
        for node in item.iter_items():
            for text in (node.name, node.content or ""):
                for token in unknown_tokens(text):
                    print(f"warning: unknown token {{{{{token}}}}} in '{node.name}'", file=sys.stderr)


def _read_text_arg(value: str) -> str:
    if value == "-":
        return sys.stdin.read()
    return Path(value).expanduser().read_text(encoding="utf-8")


def _resolve_template(service: TemplateService, ref: str) -> Template:
    try:
        return service.store.get(ref)
    except TemplateNotFoundError:
        matches = [template for template in service.store.list() if template.name == ref]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise TemplateStoreError(f"template name '{ref}' is ambiguous; use its id") from None
        raise


def _render_tree(items: Iterable[FolderItem], depth: int = 0) -> List[str]:
    lines: List[str] = []
    for item in items:
        suffix = "/" if item.is_folder else ""
        lines.append(f"{'  ' * depth}{item.name}{suffix}")
        lines.extend(_render_tree(item.children, depth + 1))
    return lines


def _templates_cmd(args: argparse.Namespace) -> int:
    command = getattr(args, "templates_command", "list")
    as_json = bool(getattr(args, "json", False))
    telemetry = _telemetry()

    try:
        service, _ = _build_services()

        if command == "list":
            summaries = [service.summary(template.id) for template in service.store.list()]
            payload = [summary.as_dict() for summary in summaries]
            telemetry.record(templates_event("list", count=len(payload)))
            if as_json:
                print(json.dumps(payload, ensure_ascii=False, indent=2))
            elif not payload:
                print("No templates stored")
            else:
                for entry in payload:
                    print(f"{entry['id']}\t{entry['name']} ({entry['folders']} folders, {entry['files']} files)")
            return 0

        if command == "show":
            template = _resolve_template(service, args.template)
            _warn_unknown_tokens(template.root_item.children)
            if as_json:
                print(dumps_template(template))
            else:
                print(template.name)
                for line in _render_tree(template.root_item.children, 1):
                    print(line)
            return 0

        if command == "from-text":
            template = service.create_from_text(args.name, _read_text_arg(args.file))
            summary = service.summary(template.id)
            telemetry.record(templates_event("create", **summary.as_dict()))
            print(f"Created template {template.id} '{template.name}' with {summary.total} items")
            return 0

        if command == "import":
            added = service.store.import_(_read_text_arg(args.file))
            telemetry.record(templates_event("import", count=len(added)))
            print(f"Imported {len(added)} template(s)")
            return 0

        if command == "export":
            refs = list(getattr(args, "templates", []) or [])
            ids = [_resolve_template(service, ref).id for ref in refs] or None
            payload = service.store.export(ids)
            output = getattr(args, "output", None)
            if output:
                Path(output).expanduser().write_text(payload + "\n", encoding="utf-8")
                print(f"Exported to {output}")
            else:
                print(payload)
            telemetry.record(templates_event("export", count=len(ids) if ids else len(service.store.list())))
            return 0

        if command == "delete":
            template = _resolve_template(service, args.template)
            service.store.delete(template.id)
            telemetry.record(templates_event("delete", id=template.id))
            print(f"Deleted template {template.id} '{template.name}'")
            return 0
    except (FolderCommanderError, ValueError, OSError) as exc:
        print(f"templates error: {exc}", file=sys.stderr)
        return 1

    print("Unsupported templates command", file=sys.stderr)
    return 2


def _parse_cmd(args: argparse.Namespace) -> int:
    try:
        root = parse_structure(_read_text_arg(args.file))
    except (FolderCommanderError, OSError) as exc:
        print(f"parse error: {exc}", file=sys.stderr)
        return 1
    _warn_unknown_tokens([root])
    if getattr(args, "json", False):
        print(json.dumps(item_to_dict(root), ensure_ascii=False, indent=2))
    else:
        for line in _render_tree([root]):
            print(line)
    return 0


def _plan_project(materializer: MaterializerService, template: Template, args: argparse.Namespace, destination: Path) -> int:
    entries = materializer.plan(template, args.project_name)
    payload: dict[str, Any] = {
        "template": template.id,
        "root": str(destination / args.project_name),
        "entries": [{"path": entry.relative_path, "type": entry.type.value} for entry in entries],
    }
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(payload["root"])
        for entry in payload["entries"]:
            suffix = "/" if entry["type"] == "folder" else ""
            print(f"  {entry['path']}{suffix}")
    return 0


def _create_cmd(args: argparse.Namespace) -> int:
    destination = Path(args.dest).expanduser() if args.dest else Path.cwd()
    try:
        service, materializer = _build_services()
        template = _resolve_template(service, args.template)
        if args.dry_run:
            return _plan_project(materializer, template, args, destination)
    except (FolderCommanderError, ValueError, OSError) as exc:
        print(f"create error: {exc}", file=sys.stderr)
        return 1

    telemetry = _telemetry()
    started = time.perf_counter()
    try:
        project_root = materializer.materialize(template, args.project_name, destination)
    except FileSystemError as exc:
        telemetry.record(project_failed(template, exc, (time.perf_counter() - started) * 1000))
        print(f"create error: {exc}", file=sys.stderr)
        return 1
    telemetry.record(project_created(template, project_root, (time.perf_counter() - started) * 1000))
    if args.json:
        print(json.dumps({"template": template.id, "path": str(project_root)}, ensure_ascii=False, indent=2))
    else:
        print(f"Created {project_root}")
    return 0


def _telemetry_cmd(args: argparse.Namespace) -> int:
    telemetry = _telemetry()
    if getattr(args, "telemetry_command", "summary") == "clear":
        telemetry.clear()
        print("Telemetry log cleared")
        return 0
    print(json.dumps(telemetry.summary(), ensure_ascii=False, indent=2))
    return 0


def _preferences_cmd(args: argparse.Namespace) -> int:
    try:
        preferences = load_preferences(SETTINGS)
        if getattr(args, "preferences_command", "show") == "set":
            if args.custom_colors is not None:
                preferences = replace(preferences, custom_colors_enabled=args.custom_colors == "on")
            if args.default_color is not None:
                preferences = replace(preferences, default_folder_color=args.default_color or None)
            save_preferences(SETTINGS, preferences)
    except (ValueError, OSError) as exc:
        print(f"preferences error: {exc}", file=sys.stderr)
        return 1
    print(
        json.dumps(
            {
                "custom_colors_enabled": preferences.custom_colors_enabled,
                "default_folder_color": preferences.default_folder_color,
            },
            ensure_ascii=False,
            indent=2,
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foldercommander",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"foldercommander {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    templates_cmd = sub.add_parser("templates", help="Manage stored templates")
    templates_sub = templates_cmd.add_subparsers(dest="templates_command", required=True)

    templates_list = templates_sub.add_parser("list", help="List stored templates")
    templates_list.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    templates_list.set_defaults(func=_templates_cmd, templates_command="list")

    templates_show = templates_sub.add_parser("show", help="Show one template")
    templates_show.add_argument("template", help="Template id or name")
    templates_show.add_argument("--json", action="store_true", help="Emit the template as JSON")
    templates_show.set_defaults(func=_templates_cmd, templates_command="show")

    templates_text = templates_sub.add_parser("from-text", help="Create a template from an indented outline")
    templates_text.add_argument("name", help="Template name")
    templates_text.add_argument("file", help="Outline file ('-' for stdin)")
    templates_text.set_defaults(func=_templates_cmd, templates_command="from-text")

    templates_import = templates_sub.add_parser("import", help="Import templates from JSON")
    templates_import.add_argument("file", help="JSON file ('-' for stdin)")
    templates_import.set_defaults(func=_templates_cmd, templates_command="import")

    templates_export = templates_sub.add_parser("export", help="Export templates as JSON")
    templates_export.add_argument("templates", nargs="*", help="Template ids or names (default: all)")
    templates_export.add_argument("--output", help="Write to file instead of stdout")
    templates_export.set_defaults(func=_templates_cmd, templates_command="export")

    templates_delete = templates_sub.add_parser("delete", help="Delete a template")
    templates_delete.add_argument("template", help="Template id or name")
    templates_delete.set_defaults(func=_templates_cmd, templates_command="delete")

    parse_cmd = sub.add_parser("parse", help="Parse an indented outline and print the tree")
    parse_cmd.add_argument("file", help="Outline file ('-' for stdin)")
    parse_cmd.add_argument("--json", action="store_true", help="Emit the tree as JSON")
    parse_cmd.set_defaults(func=_parse_cmd)

    create_cmd = sub.add_parser("create", help="Create a project from a template")
    create_cmd.add_argument("template", help="Template id or name")
    create_cmd.add_argument("project_name", help="Name of the project folder to create")
    create_cmd.add_argument("--dest", help="Destination directory (default: current directory)")
    create_cmd.add_argument("--dry-run", action="store_true", help="Print what would be created")
    create_cmd.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    create_cmd.set_defaults(func=_create_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect local telemetry")
    telemetry_sub = telemetry_cmd.add_subparsers(dest="telemetry_command", required=True)
    telemetry_sub.add_parser("summary", help="Summarize recorded events").set_defaults(
        func=_telemetry_cmd, telemetry_command="summary"
    )
    telemetry_sub.add_parser("clear", help="Delete recorded events").set_defaults(
        func=_telemetry_cmd, telemetry_command="clear"
    )

    preferences_cmd = sub.add_parser("preferences", help="Show or change preferences")
    preferences_sub = preferences_cmd.add_subparsers(dest="preferences_command", required=True)
    preferences_sub.add_parser("show", help="Show preferences").set_defaults(
        func=_preferences_cmd, preferences_command="show"
    )
    preferences_set = preferences_sub.add_parser("set", help="Change preferences")
    preferences_set.add_argument("--custom-colors", choices=("on", "off"), help="Enable default folder color")
    preferences_set.add_argument("--default-color", help="Default folder color ('' to clear)")
    preferences_set.set_defaults(func=_preferences_cmd, preferences_command="set")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
