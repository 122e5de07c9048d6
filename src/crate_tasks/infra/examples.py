"""Infrastructure: example program discovery.

Examples are optional — a crate without an ``examples/`` directory
simply has no example targets.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_EXAMPLES_DIR = Path("examples")
SOURCE_EXTENSION = ".rs"


def discover_examples(
    directory: Path = DEFAULT_EXAMPLES_DIR,
    extension: str = SOURCE_EXTENSION,
) -> tuple[str, ...]:
    """Return the base names of the example sources directly in *directory*.

    Names are sorted so discovery order is stable across platforms.
    A missing directory yields an empty tuple.
    """
    if not directory.is_dir():
        return ()
    return tuple(
        sorted(
            entry.stem
            for entry in directory.iterdir()
            if entry.is_file() and entry.suffix == extension
        )
    )
