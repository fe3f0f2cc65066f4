from __future__ import annotations

import os
from pathlib import Path

from notevim.runtime.settings import EditorSettings


def test_explicit_base_dir_wins() -> None:
    settings = EditorSettings.from_env(
        "/explicit", environ={"NOTEVIM_BASE_DIR": "/env", "Obsidian_valt_main_path": "/vault"}
    )

    assert settings.base_dir == Path("/explicit")


def test_base_dir_environment_precedence() -> None:
    assert EditorSettings.from_env(
        environ={"NOTEVIM_BASE_DIR": "/env", "Obsidian_valt_main_path": "/vault"}
    ).base_dir == Path("/env")
    assert EditorSettings.from_env(
        environ={"Obsidian_valt_main_path": "/vault"}
    ).base_dir == Path("/vault")


def test_falls_back_to_working_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = EditorSettings.from_env(environ={})

    assert settings.base_dir == Path(os.getcwd())


def test_overrides_and_defaults() -> None:
    settings = EditorSettings.from_env(
        "/notes",
        environ={
            "NOTEVIM_DATABASE": "index.db",
            "NOTEVIM_SCANNER": "/opt/scanner",
            "NOTEVIM_COMPLETION_LIMIT": "5",
            "NOTEVIM_COMPLETION_MIN_LENGTH": "three",
        },
    )

    assert settings.database_path == Path("/notes/index.db")
    assert settings.scanner_command == "/opt/scanner"
    assert settings.completion_limit == 5
    assert settings.completion_min_length == 2
    assert settings.daily_note_template == "Every day info/%Y-%m-%d.md"
