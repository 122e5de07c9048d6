"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so every side effect can be swapped for a stub in
tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CommandRunner(Protocol):
    """Contract for executing one external command.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(self, argv: Sequence[str]) -> int:
        """Execute *argv*, wait for it, and return its exit status unchanged.

        Standard streams are inherited; output is never inspected.

        Raises
        ------
        ExternalCommandError
            When the program cannot be started at all.
        """
        ...  # pragma: no cover


class DocOutput(Protocol):
    """Contract for the generated-documentation output directory."""

    def clear(self) -> None:
        """Remove the output directory; absence is not an error.

        Raises
        ------
        DocOutputError
            When the directory exists but cannot be removed.
        """
        ...  # pragma: no cover

    def write_redirect(self, content: str) -> None:
        """Write *content* verbatim as the root ``index.html``.

        Raises
        ------
        DocOutputError
            When the file cannot be written.
        """
        ...  # pragma: no cover
