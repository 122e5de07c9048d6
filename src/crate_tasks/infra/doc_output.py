"""Infrastructure: the generated-documentation output directory.

Everything under the directory belongs to rustdoc except the root
``index.html`` redirect stub written by :meth:`write_redirect`.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from crate_tasks.exceptions import DocOutputError

REDIRECT_FILENAME = "index.html"


class DocOutputDirectory:
    """Concrete :class:`~crate_tasks.core.protocols.DocOutput` on disk."""

    def __init__(self, root: Path) -> None:
        self.root: Path = root

    def clear(self) -> None:
        """Remove the directory tree; a missing directory is fine."""
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise DocOutputError(f"Cannot remove {self.root}: {exc}") from exc

    def write_redirect(self, content: str) -> None:
        """Write *content* verbatim to ``<root>/index.html``."""
        target = self.root / REDIRECT_FILENAME
        try:
            target.write_text(content, encoding="utf-8", newline="")
        except OSError as exc:
            raise DocOutputError(
                f"Cannot write {target}: {exc}",
                hint="Did the documentation build produce the output directory?",
            ) from exc
