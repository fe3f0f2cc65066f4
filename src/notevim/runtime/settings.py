"""Editor settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "NOTEVIM_"
LEGACY_BASE_DIR_VAR = "Obsidian_valt_main_path"


@dataclass(frozen=True, slots=True)
class EditorSettings:
    base_dir: Path
    database_name: str = "markdown_data.db"
    scanner_command: str = "markdown-scanner"
    daily_note_template: str = "Every day info/%Y-%m-%d.md"
    completion_min_length: int = 2
    completion_limit: int = 10
    tree_width_percent: int = 20
    tree_width_min: int = 10
    tree_width_max: int = 50
    tree_width_step: int = 5

    @property
    def database_path(self) -> Path:
        return self.base_dir / self.database_name

    @classmethod
    def from_env(
        cls,
        base_dir: Optional[str] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "EditorSettings":
        """Build settings; an explicit ``base_dir`` wins over the environment."""

        env = os.environ if environ is None else environ
        resolved = (
            base_dir
            or env.get(f"{ENV_PREFIX}BASE_DIR")
            or env.get(LEGACY_BASE_DIR_VAR)
            or os.getcwd()
        )
        return cls(
            base_dir=Path(resolved),
            database_name=env.get(f"{ENV_PREFIX}DATABASE", "markdown_data.db"),
            scanner_command=env.get(f"{ENV_PREFIX}SCANNER", "markdown-scanner"),
            daily_note_template=env.get(
                f"{ENV_PREFIX}DAILY_TEMPLATE", "Every day info/%Y-%m-%d.md"
            ),
            completion_min_length=_env_int(env, "COMPLETION_MIN_LENGTH", 2),
            completion_limit=_env_int(env, "COMPLETION_LIMIT", 10),
        )


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


__all__ = ["EditorSettings"]
