"""Infrastructure layer — operating-system integration.

This layer wraps all interaction with the filesystem and child
processes.  Every raw OS exception must be caught here and re-raised
as a :class:`~crate_tasks.exceptions.CrateTasksError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from crate_tasks.infra.doc_output import DocOutputDirectory
from crate_tasks.infra.examples import discover_examples
from crate_tasks.infra.manifest import read_package_metadata
from crate_tasks.infra.process import SubprocessCommandRunner

__all__: list[str] = [
    "DocOutputDirectory",
    "SubprocessCommandRunner",
    "discover_examples",
    "read_package_metadata",
]
