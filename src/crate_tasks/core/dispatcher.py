"""Target dispatcher — runs a resolved target and returns its exit status.

Failure is carried as a plain ``int`` status rather than an exception:
:func:`run_sequence` folds over the steps and stops at the first
non-zero result, which then becomes the process exit code unchanged.
"""

from __future__ import annotations

import shlex
import time
from collections.abc import Callable, Iterable
from functools import partial
from dataclasses import dataclass
from pathlib import Path

from crate_tasks.core.commands import DEFAULT_DOC_DIR, build_command
from crate_tasks.core.doc_publisher import DocPublisher
from crate_tasks.core.iteration import IterationRunner
from crate_tasks.core.models import (
    Action,
    BuildParameters,
    PackageMetadata,
    TargetKind,
)
from crate_tasks.core.protocols import CommandRunner, DocOutput
from crate_tasks.core.registry import TargetRegistry

LONGTEST_PAUSE_SECONDS = 2.0


def run_sequence(steps: Iterable[Callable[[], int]]) -> int:
    """Run *steps* in order; return the first non-zero status, else 0."""
    for step in steps:
        status = step()
        if status != 0:
            return status
    return 0


@dataclass(frozen=True, slots=True)
class RunContext:
    """Everything fixed at startup and shared by every action of a run."""

    metadata: PackageMetadata
    params: BuildParameters
    registry: TargetRegistry
    cargo: str = "cargo"
    doc_dir: Path = DEFAULT_DOC_DIR


class Dispatcher:
    """Resolve a target name and drive its actions through *runner*.

    Parameters
    ----------
    context:
        Frozen run configuration.
    runner:
        Executes command lines; see :class:`CommandRunner`.
    doc_output:
        Output directory adapter used by ``publish-doc``.
    notify:
        Receives informational lines (commands, notices, iterations).
    pause:
        Sleep function used before the longtest loop starts.
    """

    def __init__(
        self,
        context: RunContext,
        runner: CommandRunner,
        doc_output: DocOutput,
        *,
        notify: Callable[[str], None],
        pause: Callable[[float], None] = time.sleep,
    ) -> None:
        self._context = context
        self._runner = runner
        self._doc_output = doc_output
        self._notify = notify
        self._pause = pause

    # ------------------------------------------------------------------
    # Single action
    # ------------------------------------------------------------------

    def command_for(self, action: Action) -> tuple[str, ...]:
        ctx = self._context
        return build_command(
            action,
            ctx.params,
            ctx.metadata,
            cargo=ctx.cargo,
            doc_dir=ctx.doc_dir,
        )

    def run_action(self, action: Action) -> int:
        """Execute one action and return its exit status unmodified."""
        argv = self.command_for(action)
        self._notify(f"$ {shlex.join(argv)}")
        return self._runner.run(argv)

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def dispatch(self, name: str | None) -> int:
        """Run target *name* (``None`` → default target).

        Raises
        ------
        UnknownTargetError
            When *name* is not registered.
        """
        target = self._context.registry.resolve(name)
        if target.notice:
            self._notify(target.notice)

        if target.kind is TargetKind.ITERATIVE:
            self._pause(LONGTEST_PAUSE_SECONDS)
            return self._run_iterative(target.actions)

        if target.kind is TargetKind.PUBLISH:
            publisher = DocPublisher(
                self._doc_output,
                self.run_action,
                self._context.metadata.doc_module,
            )
            return publisher.publish()

        return self._run_actions(target.actions)

    def _run_iterative(self, actions: tuple[Action, ...]) -> int:
        runner = IterationRunner(
            partial(self._run_actions, actions),
            on_iteration=lambda n: self._notify(f"Iteration {n}"),
        )
        return runner.run()

    def _run_actions(self, actions: tuple[Action, ...]) -> int:
        return run_sequence(partial(self.run_action, action) for action in actions)
