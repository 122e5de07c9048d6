"""``crate-tasks --list`` — show every registered target.

Renders a Rich table when Rich is installed and a fixed-width plain
table on stderr otherwise.  Pure display; the registry is built by
the caller.
"""

from __future__ import annotations

import sys

from crate_tasks.cli import exit_codes
from crate_tasks.cli.console import console
from crate_tasks.core.models import BuildParameters, PackageMetadata
from crate_tasks.core.registry import ALIASES, DEFAULT_TARGET, TargetRegistry


def _rows(registry: TargetRegistry) -> list[tuple[str, str, str]]:
    """Return (name, kind, description) rows, aliases folded into names."""
    aliases_by_target: dict[str, list[str]] = {}
    for alias, canonical in ALIASES.items():
        aliases_by_target.setdefault(canonical, []).append(alias)

    rows: list[tuple[str, str, str]] = []
    for target in registry:
        label = target.name
        if target.name == DEFAULT_TARGET:
            label += " (default)"
        if target.name in aliases_by_target:
            label += " | " + " | ".join(aliases_by_target[target.name])
        rows.append((label, target.kind.value, target.description))
    return rows


def _print_plain_table(title: str, rows: list[tuple[str, str, str]]) -> None:
    print(f"\n{title}", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Target':<28} {'Kind':<10} Description", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for name, kind, description in rows:
        print(f"{name:<28} {kind:<10} {description}", file=sys.stderr)
    print(file=sys.stderr)


def run_list(
    registry: TargetRegistry,
    metadata: PackageMetadata,
    params: BuildParameters,
) -> int:
    """Render the target table and return :data:`exit_codes.SUCCESS`."""
    title = f"{metadata.name} targets ({params.mode.value})"
    rows = _rows(registry)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(title, rows)
        return exit_codes.SUCCESS

    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Target", style="bold", min_width=12)
    table.add_column("Kind", min_width=9)
    table.add_column("Description")

    for name, kind, description in rows:
        table.add_row(name, kind, description)

    console.print()
    console.print(table)
    if params.features:
        console.print(f"[dim]features:[/dim] {','.join(params.features)}")
    console.print()
    return exit_codes.SUCCESS
