"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple, Type, TypeVar

from notevim.buffer import Buffer, RegisterBank

from .states import ModeState

if TYPE_CHECKING:  # pragma: no cover
    from notevim.session import EditorSession

CTRL_MODIFIERS = frozenset({"ctrl", "control"})

StateT = TypeVar("StateT")


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is either a single character or a named key such as ``ESC``,
    ``ENTER``, ``BACKSPACE``, ``DELETE``, ``TAB``, ``UP``, ``DOWN``,
    ``LEFT``, ``RIGHT``, ``HOME`` or ``END``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def ctrl(self) -> bool:
        return any(modifier.lower() in CTRL_MODIFIERS for modifier in self.modifiers)

    @property
    def char(self) -> Optional[str]:
        """The typed character, or ``None`` for named keys and Ctrl chords."""

        if self.ctrl:
            return None
        if self.text and len(self.text) == 1:
            return self.text
        if len(self.key) == 1:
            return self.key
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``payload`` becomes the initial state of ``switch_to`` when given.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    payload: Optional[ModeState] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access.

    ``state`` holds the active mode's private state; the manager replaces it
    on every switch so no mode can observe another mode's leftovers.
    """

    buffer: Buffer
    registers: RegisterBank
    bus: "ModeBus"
    session: Optional["EditorSession"] = None
    state: Optional[ModeState] = None
    extras: Dict[str, object] = field(default_factory=dict)


def require_session(context: ModeContext) -> "EditorSession":
    if context.session is None:
        raise RuntimeError("ModeContext has no session attached")
    return context.session


def require_state(context: ModeContext, state_type: Type[StateT]) -> StateT:
    state = context.state
    if not isinstance(state, state_type):
        raise RuntimeError(
            f"Expected {state_type.__name__} in ModeContext, found {type(state).__name__}"
        )
    return state


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"
    state_type: type = object
    label: str = ""

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def state(self):
        return require_state(self.context, self.state_type)

    def initial_state(self, previous: Optional[str]) -> ModeState:
        """State used when a switch into this mode carries no payload."""

        raise RuntimeError(f"Mode '{self.name}' cannot be entered without a payload")

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
