"""Runtime settings and user preferences for Folder Commander."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

from foldercommander import __version__

HOME_ENV = "FOLDERCOMMANDER_HOME"


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    store_file: Path
    log_dir: Path
    preferences_file: Path
    cli_version: str = __version__


@dataclass(frozen=True)
class Preferences:
    custom_colors_enabled: bool = False
    default_folder_color: str | None = None

    @property
    def effective_folder_color(self) -> str | None:
        return self.default_folder_color if self.custom_colors_enabled else None


def _default_home_dir() -> Path:
    override = os.environ.get(HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".foldercommander"


def settings_for_home(base: Path) -> RuntimeSettings:
    return RuntimeSettings(
        home_dir=base,
        store_file=base / "templates.json",
        log_dir=base / "logs",
        preferences_file=base / "preferences.yaml",
    )


def load_settings() -> RuntimeSettings:
    return settings_for_home(_default_home_dir())


def load_preferences(settings: RuntimeSettings) -> Preferences:
    path = settings.preferences_file
    if not path.exists():
        return Preferences()
    try:
        data = yaml.safe_load(path.read_text("utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"preferences file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"preferences file {path} must contain a mapping")
    color = data.get("default_folder_color")
    return Preferences(
        custom_colors_enabled=bool(data.get("custom_colors_enabled", False)),
        default_folder_color=str(color) if color else None,
    )


def save_preferences(settings: RuntimeSettings, preferences: Preferences) -> None:
    path = settings.preferences_file
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(asdict(preferences), sort_keys=True), encoding="utf-8")


SETTINGS = load_settings()
