"""crate-tasks — build-orchestration front end for a Rust crate.

Resolves named targets into parameterized cargo invocations with a
strict layered architecture.
"""

from crate_tasks.version import __version__

__all__: list[str] = ["__version__"]
