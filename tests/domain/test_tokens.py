from __future__ import annotations

from datetime import datetime

from foldercommander.domain.tokens import (
    TokenContext,
    find_tokens,
    format_creation_date,
    resolve_tokens,
    unknown_tokens,
)


def _context(**overrides: str) -> TokenContext:
    values = {
        "project_name": "Demo",
        "parent_name": "src",
        "current_name": "{{projectName}}.txt",
        "relative_path": "src",
        "creation_date": "09 January 2026",
    }
    values.update(overrides)
    return TokenContext(**values)


def test_all_known_tokens_are_substituted() -> None:
    text = "{{projectName}}|{{parentName}}|{{currentName}}|{{relativePath}}|{{creationDate}}"
    resolved = resolve_tokens(text, _context(current_name="main.txt"))
    assert resolved == "Demo|src|main.txt|src|09 January 2026"


def test_unknown_tokens_pass_through() -> None:
    assert resolve_tokens("keep {{unknownToken}}", _context()) == "keep {{unknownToken}}"
    assert resolve_tokens("{{ projectName }} {{projectName}}", _context()) == "{{ projectName }} Demo"


def test_values_are_not_expanded_recursively() -> None:
    context = _context(project_name="{{parentName}}")
    assert resolve_tokens("{{projectName}}", context) == "{{parentName}}"


def test_resolve_accepts_plain_mapping() -> None:
    assert resolve_tokens("{{projectName}}-{{other}}", {"projectName": "Demo"}) == "Demo-{{other}}"


def test_plain_mapping_only_substitutes_known_tokens() -> None:
    values = {"projectName": "Demo", "owner": "alice"}
    assert resolve_tokens("{{projectName}} by {{owner}}", values) == "Demo by {{owner}}"


def test_format_creation_date() -> None:
    assert format_creation_date(datetime(2026, 1, 9, 15, 30)) == "09 January 2026"
    assert format_creation_date(datetime(2025, 12, 31)) == "31 December 2025"


def test_token_discovery() -> None:
    text = "{{projectName}} {{owner}} {{creationDate}}"
    assert find_tokens(text) == ["projectName", "owner", "creationDate"]
    assert unknown_tokens(text) == ["owner"]
