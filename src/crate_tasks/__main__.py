"""Allow ``python -m crate_tasks`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m crate_tasks`` behaves identically to the ``crate-tasks``
console script.
"""

from __future__ import annotations

from crate_tasks.cli.app import cli

if __name__ == "__main__":
    cli()
