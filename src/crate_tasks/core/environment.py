"""Environment resolver — turns invocation input into :class:`BuildParameters`.

The resolver never reads ``os.environ`` itself; the CLI layer passes
the raw values in.  Given the same inputs it always returns an equal,
frozen parameter set.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterable

from crate_tasks.core.models import RELEASE_FLAG, BuildMode, BuildParameters
from crate_tasks.exceptions import ConfigError

BASELINE_FEATURES: tuple[str, ...] = ("serde",)

_FEATURE_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_+/.-]*$")
_FEATURE_SEPARATORS = re.compile(r"[,\s]+")


def is_release_requested(value: str | None) -> bool:
    """A release toggle counts as set when it is present and non-empty."""
    return bool(value)


def parse_features(raw: Iterable[str | None]) -> tuple[str, ...]:
    """Split comma/space separated feature lists into an ordered set.

    Raises
    ------
    ConfigError
        When a feature name contains characters cargo would reject.
    """
    features: list[str] = []
    for chunk in raw:
        if not chunk:
            continue
        for name in _FEATURE_SEPARATORS.split(chunk.strip()):
            if not name:
                continue
            if not _FEATURE_RE.match(name):
                raise ConfigError(
                    f"Invalid feature name: {name!r}",
                    hint="Features are comma-separated, e.g. --features serde,std",
                )
            if name not in features:
                features.append(name)
    return tuple(features)


def parse_flags(raw: str | None) -> tuple[str, ...]:
    """Split extra cargo flags using shell quoting rules."""
    if not raw:
        return ()
    try:
        return tuple(shlex.split(raw))
    except ValueError as exc:
        raise ConfigError(
            f"Malformed cargo flags {raw!r}: {exc}",
            hint="Check the quoting in CARGO_FLAGS.",
        ) from exc


def resolve_build_parameters(
    *,
    release: bool,
    features: Iterable[str | None] = (),
    flags: str | None = None,
) -> BuildParameters:
    """Build the frozen parameter set for a single run.

    Parameters
    ----------
    release:
        Whether the release toggle is set.
    features:
        Raw feature lists (from ``CARGO_FEATURES`` and ``--features``).
        They are appended after the baseline features.
    flags:
        Raw extra cargo flags (from ``CARGO_FLAGS``).
    """
    merged = parse_features([*BASELINE_FEATURES, *features])
    extra_flags = tuple(flag for flag in parse_flags(flags) if flag != RELEASE_FLAG)

    if release:
        return BuildParameters(
            mode=BuildMode.RELEASE,
            features=merged,
            flags=(RELEASE_FLAG, *extra_flags),
        )
    return BuildParameters(mode=BuildMode.DEBUG, features=merged, flags=extra_flags)


def build_mode_notice(params: BuildParameters, package_name: str) -> str:
    """Return the diagnostic line announcing the active build mode."""
    if params.mode is BuildMode.RELEASE:
        return f"RELEASE BUILD: {package_name}"
    return (
        f"DEBUG BUILD: {package_name}; "
        "use `RELEASE=true crate-tasks [target]` for release build"
    )
