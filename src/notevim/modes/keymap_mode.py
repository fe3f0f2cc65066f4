"""Modes whose keys are looked up in the keymap registry."""

from __future__ import annotations

from notevim.keymaps import ResolutionMatch
from notevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver


class KeymapMode(Mode):
    """Resolves each key as a single-stroke binding.

    Keys without a binding are handed to ``handle_unbound``; text-entry
    modes override it to insert characters.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"notevim.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key_to_token(key),))
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


class SequenceMode(KeymapMode):
    """Keymap mode that accumulates multi-key prefixes such as ``gg``.

    The mode state must expose a ``prefix`` tuple. A printable key with no
    binding opens a prefix; once a prefix is open, a key that neither fires
    nor extends it discards the prefix, reports an invalid sequence and is
    itself swallowed. Named keys and Ctrl chords close any open prefix and
    are processed normally.
    """

    def handle_key(self, key: KeyInput) -> ModeResult:
        state = self.state
        token = key_to_token(key)
        printable = key.char is not None
        if state.prefix and not printable:
            state.prefix = ()

        step = self._resolver.advance(self.name, state.prefix, token)
        if step.outcome == "fire" and step.match:
            state.prefix = ()
            return self._execute_match(step.match)
        if step.outcome == "continue":
            state.prefix = step.prefix
            return ModeResult(consumed=True, status="pending")

        if state.prefix:
            attempted = "".join(step.attempted)
            state.prefix = ()
            telemetry.record_event(
                "keymaps.invalid_sequence",
                level="debug",
                data={"mode": self.name, "sequence": attempted},
            )
            return ModeResult(
                consumed=True,
                status="invalid_sequence",
                message=f"Invalid sequence: {attempted}",
            )

        if printable:
            state.prefix = (token,)
            return ModeResult(consumed=True, status="pending")
        return self.handle_unbound(key)

    @property
    def pending_sequence(self) -> str:
        return "".join(self.state.prefix)


__all__ = ["KeymapMode", "SequenceMode"]
