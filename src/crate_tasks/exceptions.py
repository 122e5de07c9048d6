"""Custom exception hierarchy for crate-tasks.

All exceptions that cross layer boundaries must inherit from
:class:`CrateTasksError`.  Raw OS exceptions (e.g. from ``subprocess``
or ``shutil``) must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as a typed subclass defined here.

A non-zero exit status from cargo is *not* an exception: it travels
back to the CLI as a plain ``int`` so that it can become the process
exit code unchanged.

Hierarchy
---------
CrateTasksError
├── ConfigError
├── UnknownTargetError
├── ExternalCommandError
├── DocOutputError
└── EnvironmentError
"""

from __future__ import annotations


class CrateTasksError(Exception):
    """Base exception for all crate-tasks errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(CrateTasksError):
    """Raised for a missing/malformed manifest or bad feature/flag syntax."""


# --- Target resolution -----------------------------------------------------

class UnknownTargetError(CrateTasksError):
    """Raised when the requested target name is not registered."""


# --- External collaborators ------------------------------------------------

class ExternalCommandError(CrateTasksError):
    """Raised when an external command cannot be started at all.

    The CLI exits with :attr:`returncode` so that the failure looks the
    same as it would from a shell.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int = returncode


class DocOutputError(CrateTasksError):
    """Raised when the documentation output directory cannot be updated."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CrateTasksError):
    """Raised when an optional runtime dependency is not available."""
