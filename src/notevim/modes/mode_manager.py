"""Mode manager owning the active mode and dispatching key events."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Type

from notevim.errors import EditorError
from notevim.keymaps import KeymapRegistry, KeymapResolver
from notevim.keymaps.defaults import load_default_keymaps
from notevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .states import ModeState
from .transitions import ALLOWED_TRANSITIONS, ensure_transition


class ModeManager:
    """Owns active mode, handles transitions, and dispatches key events.

    Every switch is checked against the transition table, and the incoming
    mode's state replaces ``context.state`` wholesale. Recoverable
    ``EditorError`` failures raised while a mode handles a key are turned
    into an ``error`` result; the active mode is left untouched.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        transitions: Mapping[str, frozenset[str]] = ALLOWED_TRANSITIONS,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._transitions = transitions
        self.logger = telemetry.get_logger("notevim.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="notevim.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="notevim.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    def get_mode(self, name: str) -> Mode:
        try:
            return self._modes[name]
        except KeyError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.state = mode.initial_state(None)
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str, payload: Optional[ModeState] = None) -> None:
        target = self.get_mode(name)
        previous = self.active_mode
        previous_name = previous.name if previous else None
        if previous_name == name and payload is None:
            return
        ensure_transition(previous_name, name, self._transitions)

        state = payload if payload is not None else target.initial_state(previous_name)
        if not isinstance(state, target.state_type):
            raise TypeError(
                f"Mode '{name}' expects {target.state_type.__name__}, "
                f"got {type(state).__name__}"
            )
        if previous:
            previous.on_exit(name)
        self._active = name
        self.context.state = state
        target.on_enter(previous_name)
        self.context.bus.emit("mode.switch", {"from": previous_name, "to": name})
        telemetry.record_event(
            "mode.switch", level="debug", data={"from": previous_name, "mode": name}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ) as handle:
            try:
                result = mode.handle_key(key)
            except EditorError as exc:
                handle.add_metadata("error", type(exc).__name__)
                telemetry.record_error(exc, data={"mode": mode.name, "key": key.key})
                return ModeResult(consumed=True, status="error", message=str(exc))
        if result.switch_to:
            self.switch_mode(result.switch_to, result.payload)
        return result


__all__ = ["ModeManager"]
