"""Infrastructure: crate manifest reading.

Only the package name is needed, so the manifest is scanned line by
line for the first ``name = "..."`` assignment rather than parsed as
a whole TOML document.
"""

from __future__ import annotations

import re
from pathlib import Path

from crate_tasks.core.models import PackageMetadata
from crate_tasks.exceptions import ConfigError

DEFAULT_MANIFEST = Path("Cargo.toml")

_NAME_RE = re.compile(r"""^\s*name\s*=\s*(["'])(?P<name>[^"']+)\1""")


def read_package_metadata(path: Path = DEFAULT_MANIFEST) -> PackageMetadata:
    """Return the :class:`PackageMetadata` declared in *path*.

    Raises
    ------
    ConfigError
        If the manifest is missing, unreadable, or has no ``name`` field.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            f"Manifest not found: {path}",
            hint="Run from the crate root or pass -C/--directory.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read manifest {path}: {exc}") from exc

    for line in text.splitlines():
        match = _NAME_RE.match(line)
        if match:
            return PackageMetadata(name=match.group("name"))

    raise ConfigError(
        f"No package name found in {path}",
        hint='Add a `name = "..."` entry under [package].',
    )
