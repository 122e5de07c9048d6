"""Infrastructure: external command execution.

This module is the **only** place in the codebase that spawns child
processes.  Standard streams are inherited so cargo's own output
reaches the terminal untouched, and the exit status is returned as-is
(a signal-killed child is reported as ``128 + signal``).
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from crate_tasks.exceptions import ExternalCommandError

# Shell conventions for "command not found" / "not executable".
NOT_FOUND_STATUS = 127
NOT_EXECUTABLE_STATUS = 126
# A child killed by signal N reports 128 + N, as a shell would.
SIGNAL_STATUS_BASE = 128


class SubprocessCommandRunner:
    """Concrete :class:`~crate_tasks.core.protocols.CommandRunner`.

    Blocks until the child exits.  No timeout: cancellation is left to
    the signal delivered to the process group.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd: Path | None = cwd

    def run(self, argv: Sequence[str]) -> int:
        """Execute *argv* and return its exit status.

        Raises
        ------
        ExternalCommandError
            When the program cannot be started.
        """
        program = argv[0] if argv else ""
        try:
            completed = subprocess.run(list(argv), cwd=self.cwd, check=False)
        except FileNotFoundError as exc:
            raise ExternalCommandError(
                f"Command not found: {program}",
                returncode=NOT_FOUND_STATUS,
                hint=f"Make sure `{program}` is installed and on PATH.",
            ) from exc
        except OSError as exc:
            raise ExternalCommandError(
                f"Cannot execute {program}: {exc}",
                returncode=NOT_EXECUTABLE_STATUS,
            ) from exc
        if completed.returncode < 0:
            return SIGNAL_STATUS_BASE - completed.returncode
        return completed.returncode
