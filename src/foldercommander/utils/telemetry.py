"""Local event log for template and project activity.

Events are appended as JSON lines to ``<log_dir>/telemetry.jsonl``. Logging is
opt-out: set ``FOLDERCOMMANDER_TELEMETRY=0`` (or ``false``/``no``/``off``).
Only the CLI records events; the engine itself never writes here.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

import jsonschema

from foldercommander.domain.template import Template
from foldercommander.settings import RuntimeSettings

TELEMETRY_ENV = "FOLDERCOMMANDER_TELEMETRY"
LOG_FILENAME = "telemetry.jsonl"

LEVELS = ("info", "warn", "error")
TEMPLATE_ACTIONS = ("list", "create", "import", "export", "delete")

PROJECT_CREATED = "create.project"
FOLDER_DECORATED = "create.decorate"

_DISABLE_VALUES = {"0", "false", "no", "off"}


def telemetry_enabled() -> bool:
    return os.getenv(TELEMETRY_ENV, "1").strip().lower() not in _DISABLE_VALUES


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    level: str = "info"
    status: str | None = None
    component: str | None = None
    duration_ms: float | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("telemetry event name must be a non-empty string")
        if self.level not in LEVELS:
            raise ValueError(f"telemetry level '{self.level}' is not one of {', '.join(LEVELS)}")
        if self.duration_ms is not None and self.duration_ms < 0:
            raise ValueError("telemetry duration must be non-negative")
        object.__setattr__(self, "payload", dict(self.payload))

    def to_record(self, ts: float) -> Dict[str, Any]:
        record: Dict[str, Any] = {"ts": ts, "event": self.name, "payload": dict(self.payload), "level": self.level}
        optional = {"status": self.status, "component": self.component, "durationMs": self.duration_ms}
        record.update({key: value for key, value in optional.items() if value is not None})
        return record


def templates_event(action: str, **payload: Any) -> TelemetryEvent:
    if action not in TEMPLATE_ACTIONS:
        raise ValueError(f"unknown template action '{action}'")
    return TelemetryEvent(f"templates.{action}", payload, component="templates")


def project_created(template: Template, project_root: Path, duration_ms: float) -> TelemetryEvent:
    return TelemetryEvent(
        PROJECT_CREATED,
        {"template": template.id, "items": template.item_count, "path": str(project_root)},
        status="success",
        component="materializer",
        duration_ms=duration_ms,
    )


def project_failed(template: Template, error: BaseException, duration_ms: float) -> TelemetryEvent:
    return TelemetryEvent(
        PROJECT_CREATED,
        {"template": template.id, "error": error.__class__.__name__},
        level="error",
        status="failed",
        component="materializer",
        duration_ms=duration_ms,
    )


def folder_decorated(path: Path, color: str | None, icon: str | None) -> TelemetryEvent:
    return TelemetryEvent(
        FOLDER_DECORATED,
        {"path": str(path), "color": color, "icon": icon},
        component="materializer",
    )


class TelemetryLog:
    """JSON-lines event log rooted at ``settings.log_dir``."""

    def __init__(self, settings: RuntimeSettings) -> None:
        self._path = settings.log_dir / LOG_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def record(self, event: TelemetryEvent) -> None:
        if not telemetry_enabled():
            return
        record = event.to_record(time.time())
        _telemetry_validator().validate(record)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")

    def events(self) -> Iterator[Dict[str, Any]]:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as fh:
            for line in fh:
                if not line.strip():
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError:
                    # a partially written trailing line is skipped
                    continue

    def summary(self) -> Dict[str, Any]:
        by_event: Dict[str, int] = {}
        projects = {"created": 0, "failed": 0}
        total = 0
        for evt in self.events():
            total += 1
            name = evt.get("event", "unknown")
            by_event[name] = by_event.get(name, 0) + 1
            if name == PROJECT_CREATED:
                projects["created" if evt.get("status") == "success" else "failed"] += 1
        return {"total": total, "by_event": by_event, "projects": projects}

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


@lru_cache(maxsize=1)
def _telemetry_validator() -> jsonschema.Draft202012Validator:
    schema_resource = resources.files("foldercommander.resources") / "telemetry.schema.json"
    return jsonschema.Draft202012Validator(json.loads(schema_resource.read_text(encoding="utf-8")))


__all__ = [
    "TelemetryEvent",
    "TelemetryLog",
    "folder_decorated",
    "project_created",
    "project_failed",
    "telemetry_enabled",
    "templates_event",
]
