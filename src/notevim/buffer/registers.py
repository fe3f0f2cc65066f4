"""Yank register storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Literal

RegisterType = Literal["character", "line", "block"]
UNNAMED = '"'


@dataclass(frozen=True, slots=True)
class RegisterValue:
    lines: tuple[str, ...] = ()
    type: RegisterType = "character"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def is_empty(self) -> bool:
        return not self.lines


class RegisterBank:
    """Holds the unnamed register; each yank or delete overwrites it."""

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {UNNAMED: RegisterValue()}

    def get(self, name: str = UNNAMED) -> RegisterValue:
        return self._registers.get(name, RegisterValue())

    def set(self, name: str, value: RegisterValue) -> None:
        self._registers[name] = value
        if name != UNNAMED:
            self._registers[UNNAMED] = value

    def yank_to(
        self,
        name: str,
        lines: Iterable[str],
        *,
        register_type: RegisterType = "character",
    ) -> RegisterValue:
        value = RegisterValue(lines=tuple(lines), type=register_type)
        self.set(name, value)
        return value

    def clear(self) -> None:
        self._registers = {UNNAMED: RegisterValue()}
