"""Core / service layer — pure orchestration logic and data models.

Rules
-----
* No ``print()`` calls.
* No filesystem or subprocess I/O — side effects arrive as injected
  protocols and callables.
* No imports from ``cli`` or ``infra``.
"""

from crate_tasks.core.dispatcher import Dispatcher, RunContext, run_sequence
from crate_tasks.core.doc_publisher import DocPublisher, PublishStage, redirect_stub
from crate_tasks.core.environment import build_mode_notice, resolve_build_parameters
from crate_tasks.core.iteration import IterationRunner
from crate_tasks.core.models import (
    Action,
    ActionVerb,
    BuildMode,
    BuildParameters,
    PackageMetadata,
    Target,
    TargetKind,
)
from crate_tasks.core.protocols import CommandRunner, DocOutput
from crate_tasks.core.registry import TargetRegistry

__all__: list[str] = [
    "Action",
    "ActionVerb",
    "BuildMode",
    "BuildParameters",
    "CommandRunner",
    "Dispatcher",
    "DocOutput",
    "DocPublisher",
    "IterationRunner",
    "PackageMetadata",
    "PublishStage",
    "RunContext",
    "Target",
    "TargetKind",
    "TargetRegistry",
    "build_mode_notice",
    "redirect_stub",
    "resolve_build_parameters",
    "run_sequence",
]
