"""Domain models for crate-tasks.

All models are **frozen** dataclasses or enums — immutable value
objects constructed once at startup and shared read-only by every
component for the rest of the run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageMetadata:
    """Values extracted from the crate manifest."""

    name: str
    """Package name as written in ``Cargo.toml`` (e.g. ``my-pkg``)."""

    @property
    def doc_module(self) -> str:
        """Module directory rustdoc generates for this package (``my_pkg``)."""
        return self.name.replace("-", "_")


# ---------------------------------------------------------------------------
# Build parameters
# ---------------------------------------------------------------------------

class BuildMode(enum.Enum):
    DEBUG = "debug"
    RELEASE = "release"


class ActionVerb(enum.Enum):
    """Every kind of external invocation the orchestrator can make."""

    BUILD = "build"
    RUN = "run"
    TEST = "test"
    CHECK = "check"
    CLEAN = "clean"
    BENCH = "bench"
    DOC = "doc"
    LINT = "lint"
    EXAMPLE = "example"
    OPEN_DOC = "open-doc"
    PUBLISH_PAGES = "publish-pages"
    PUSH_PAGES = "push-pages"


RELEASE_FLAG = "--release"
LINT_FEATURE = "clippy"


@dataclass(frozen=True, slots=True)
class BuildParameters:
    """Mode, features and cargo flags applied to every action of a run.

    ``features`` is an ordered set (a tuple without duplicates) that
    always starts with the baseline feature.  ``flags`` carries
    ``--release`` iff :attr:`mode` is :attr:`BuildMode.RELEASE`.
    """

    mode: BuildMode
    features: tuple[str, ...]
    flags: tuple[str, ...] = ()
    bench_excludes_release: bool = True

    def features_for(self, verb: ActionVerb) -> tuple[str, ...]:
        """Return the feature set for *verb* (the lint action adds ``clippy``)."""
        if verb is ActionVerb.LINT and LINT_FEATURE not in self.features:
            return (*self.features, LINT_FEATURE)
        return self.features

    def flags_for(self, verb: ActionVerb) -> tuple[str, ...]:
        """Return the cargo flags for *verb* (bench never builds in release)."""
        if verb is ActionVerb.BENCH and self.bench_excludes_release:
            return tuple(flag for flag in self.flags if flag != RELEASE_FLAG)
        return self.flags


# ---------------------------------------------------------------------------
# Actions and targets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Action:
    """One external-toolchain invocation."""

    verb: ActionVerb
    example: str | None = None
    """Example name; only meaningful for :attr:`ActionVerb.EXAMPLE`."""


class TargetKind(enum.Enum):
    DIRECT = "direct"
    AGGREGATE = "aggregate"
    EXAMPLE_BUILD = "example"
    ITERATIVE = "iterative"
    PUBLISH = "publish"


@dataclass(frozen=True, slots=True)
class Target:
    """A user-addressable name resolving to one or more actions.

    Aggregate targets list other target names in :attr:`members` rather
    than carrying actions of their own.
    """

    name: str
    kind: TargetKind
    actions: tuple[Action, ...] = ()
    members: tuple[str, ...] = ()
    notice: str | None = None
    """Informational line shown before the target runs."""

    description: str = field(default="", compare=False)
