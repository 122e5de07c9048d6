"""Documentation publish pipeline.

Steps run strictly in order and stop at the first failure::

    START → CLEANED → REGENERATED → STUBBED → IMPORTED → PUBLISHED
              ↘           ↘            ↘          ↘          ↘
                              FAILED

Nothing already done is rolled back when a later step fails.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

from crate_tasks.core.models import Action, ActionVerb
from crate_tasks.core.protocols import DocOutput
from crate_tasks.exceptions import DocOutputError


class PublishStage(enum.Enum):
    START = "start"
    CLEANED = "cleaned"
    REGENERATED = "regenerated"
    STUBBED = "stubbed"
    IMPORTED = "imported"
    PUBLISHED = "published"
    FAILED = "failed"


def redirect_stub(doc_module: str) -> str:
    """Return the ``index.html`` body redirecting to *doc_module*'s index."""
    return f'<meta http-equiv="refresh" content="0;url={doc_module}/index.html">'


class DocPublisher:
    """Drive the publish pipeline for one run.

    Parameters
    ----------
    output:
        Documentation output directory adapter.
    run_action:
        Executes one :class:`Action` and returns its exit status.
    doc_module:
        Directory name rustdoc uses for the package.
    """

    def __init__(
        self,
        output: DocOutput,
        run_action: Callable[[Action], int],
        doc_module: str,
    ) -> None:
        self._output = output
        self._run_action = run_action
        self._doc_module = doc_module
        self.stage: PublishStage = PublishStage.START

    def _run(self, verb: ActionVerb, next_stage: PublishStage) -> int:
        status = self._run_action(Action(verb))
        self.stage = PublishStage.FAILED if status != 0 else next_stage
        return status

    def publish(self) -> int:
        """Run the pipeline and return the first non-zero status (or 0).

        Raises
        ------
        DocOutputError
            When clearing the output or writing the redirect stub fails.
        """
        try:
            self._output.clear()
        except DocOutputError:
            self.stage = PublishStage.FAILED
            raise
        self.stage = PublishStage.CLEANED

        status = self._run(ActionVerb.DOC, PublishStage.REGENERATED)
        if status != 0:
            return status

        try:
            self._output.write_redirect(redirect_stub(self._doc_module))
        except DocOutputError:
            self.stage = PublishStage.FAILED
            raise
        self.stage = PublishStage.STUBBED

        status = self._run(ActionVerb.PUBLISH_PAGES, PublishStage.IMPORTED)
        if status != 0:
            return status
        return self._run(ActionVerb.PUSH_PAGES, PublishStage.PUBLISHED)
