"""Normal mode: single-key commands plus multi-key sequences."""

from __future__ import annotations

from typing import Optional

from .keymap_mode import SequenceMode
from .states import NormalState


class NormalMode(SequenceMode):
    """Resolves keys against the ``normal`` table.

    Sequences such as ``gg``, ``dd`` or ``\\ob`` accumulate in
    ``NormalState.prefix`` until they fire or turn out to be invalid.
    """

    name = "normal"
    state_type = NormalState
    label = "Normal"

    def initial_state(self, previous: Optional[str]) -> NormalState:
        del previous
        return NormalState()


__all__ = ["NormalMode"]
