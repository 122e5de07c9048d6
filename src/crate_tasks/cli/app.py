"""CLI application entry point and target routing for crate-tasks.

This module is the **sole error boundary** for the entire application.
It catches :class:`~crate_tasks.exceptions.CrateTasksError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No orchestration logic lives here — target resolution and command
  sequencing are delegated to the core layer.
* This is the only module that reads ``os.environ``; the values are
  frozen into a :class:`~crate_tasks.core.dispatcher.RunContext` once.
* This module is the only place that translates between the domain world
  and the OS process exit code.  A failing cargo status is returned
  unchanged.
"""

from __future__ import annotations

import argparse
import os
import shlex
import sys
from collections.abc import Mapping
from pathlib import Path

from crate_tasks.cli import exit_codes
from crate_tasks.cli.console import console, escape_markup
from crate_tasks.core.commands import build_command
from crate_tasks.core.dispatcher import Dispatcher, RunContext
from crate_tasks.core.environment import (
    build_mode_notice,
    is_release_requested,
    resolve_build_parameters,
)
from crate_tasks.core.registry import TargetRegistry
from crate_tasks.exceptions import CrateTasksError, ExternalCommandError
from crate_tasks.infra.doc_output import DocOutputDirectory
from crate_tasks.infra.examples import DEFAULT_EXAMPLES_DIR, discover_examples
from crate_tasks.infra.manifest import DEFAULT_MANIFEST, read_package_metadata
from crate_tasks.infra.process import SubprocessCommandRunner
from crate_tasks.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Targets are positional rather than sub-commands because the example
    targets are only known after scanning the examples directory.
    """
    parser = argparse.ArgumentParser(
        prog="crate-tasks",
        description="Run build, test, doc and publish targets for a Rust crate.",
        epilog=(
            "Environment: RELEASE (release build when non-empty), "
            "CARGO_FEATURES, CARGO_FLAGS, CARGO."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Target to run (default: build). Use --list to see all targets.",
    )
    parser.add_argument(
        "--release",
        action="store_true",
        help="Build in release mode (same as RELEASE=true).",
    )
    parser.add_argument(
        "--features",
        action="append",
        default=[],
        metavar="LIST",
        help="Extra comma-separated cargo features; may be repeated.",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=Path("."),
        metavar="DIR",
        help="Run in DIR, the crate root holding Cargo.toml (default: current directory).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the commands that would run without executing them.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available targets and exit.",
    )
    return parser


# ---------------------------------------------------------------------------
# Run assembly
# ---------------------------------------------------------------------------

def _notify(message: str) -> None:
    console.print(message, markup=False)


def _build_context(args: argparse.Namespace, environ: Mapping[str, str]) -> RunContext:
    """Read manifest, environment and examples once and freeze them."""
    root: Path = args.directory
    metadata = read_package_metadata(root / DEFAULT_MANIFEST)
    params = resolve_build_parameters(
        release=args.release or is_release_requested(environ.get("RELEASE")),
        features=[environ.get("CARGO_FEATURES"), *args.features],
        flags=environ.get("CARGO_FLAGS"),
    )
    return RunContext(
        metadata=metadata,
        params=params,
        registry=TargetRegistry.build(discover_examples(root / DEFAULT_EXAMPLES_DIR)),
        cargo=environ.get("CARGO") or "cargo",
    )


def _print_dry_run(context: RunContext, target: str | None) -> int:
    """Show the command lines *target* would run, executing nothing."""
    for action in context.registry.expand(target):
        argv = build_command(
            action,
            context.params,
            context.metadata,
            cargo=context.cargo,
            doc_dir=context.doc_dir,
        )
        _notify(f"$ {shlex.join(argv)}")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the crate-tasks CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    environ:
        Environment mapping.  When ``None`` (default), ``os.environ`` is
        used.  Accepting both enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code — the status of the first failing command,
        or 0 when every command succeeded.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    env = os.environ if environ is None else environ

    context = _build_context(args, env)

    if args.list:
        from crate_tasks.cli.target_list import run_list

        return run_list(context.registry, context.metadata, context.params)

    _notify(build_mode_notice(context.params, context.metadata.name))

    if args.dry_run:
        return _print_dry_run(context, args.target)

    dispatcher = Dispatcher(
        context,
        SubprocessCommandRunner(cwd=args.directory),
        DocOutputDirectory(args.directory / context.doc_dir),
        notify=_notify,
    )
    return dispatcher.dispatch(args.target)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: CrateTasksError) -> None:
    # Messages and hints may carry user input such as target names.
    console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ExternalCommandError as exc:
        _print_error(exc)
        sys.exit(exc.returncode)
    except CrateTasksError as exc:
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
