"""Re-indexing through the external ``markdown-scanner`` process."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from notevim.errors import ScannerError
from notevim.runtime import telemetry

Runner = Callable[..., subprocess.CompletedProcess]


class ScannerIndexer:
    """Runs ``<command> [--delete] <path> <base_dir>`` and checks its exit code.

    ``runner`` defaults to :func:`subprocess.run`; tests pass a fake.
    """

    def __init__(
        self,
        base_dir: Path | str,
        *,
        command: str = "markdown-scanner",
        runner: Optional[Runner] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_dir = str(base_dir)
        self.command = command
        self._runner = runner or subprocess.run
        self.timeout = timeout

    def index(self, path: str) -> None:
        self._run([self.command, path, self.base_dir], verb="index", path=path)

    def remove(self, path: str) -> None:
        self._run([self.command, "--delete", path, self.base_dir], verb="remove", path=path)

    def _run(self, argv: List[str], *, verb: str, path: str) -> None:
        with telemetry.span(
            f"scanner::{verb}", component="scanner", metadata={"path": path}
        ) as handle:
            try:
                completed = self._runner(
                    argv, capture_output=True, text=True, timeout=self.timeout
                )
            except (OSError, subprocess.SubprocessError) as exc:
                raise ScannerError(str(exc)) from exc
            handle.add_metadata("returncode", completed.returncode)
            if completed.returncode != 0:
                raise ScannerError(completed.stderr or "", returncode=completed.returncode)


__all__ = ["ScannerIndexer"]
