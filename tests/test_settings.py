from __future__ import annotations

from pathlib import Path

import pytest

from foldercommander.settings import Preferences, load_preferences, load_settings, save_preferences, settings_for_home


def test_home_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOLDERCOMMANDER_HOME", str(tmp_path / "custom"))
    settings = load_settings()
    assert settings.home_dir == tmp_path / "custom"
    assert settings.store_file == tmp_path / "custom" / "templates.json"
    assert settings.preferences_file.name == "preferences.yaml"


def test_preferences_round_trip(tmp_path: Path) -> None:
    settings = settings_for_home(tmp_path)
    assert load_preferences(settings) == Preferences()

    save_preferences(settings, Preferences(custom_colors_enabled=True, default_folder_color="orange"))
    loaded = load_preferences(settings)
    assert loaded.custom_colors_enabled is True
    assert loaded.effective_folder_color == "orange"
    assert Preferences(default_folder_color="orange").effective_folder_color is None


def test_preferences_must_be_mapping(tmp_path: Path) -> None:
    settings = settings_for_home(tmp_path)
    settings.preferences_file.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_preferences(settings)


def test_preferences_reject_invalid_yaml(tmp_path: Path) -> None:
    settings = settings_for_home(tmp_path)
    settings.preferences_file.write_text("custom_colors_enabled: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_preferences(settings)
