"""Target registry — maps user-facing target names onto actions.

The registry is built once at startup from the static target table
plus one example target per discovered example file, and is never
mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from crate_tasks.core.models import Action, ActionVerb, Target, TargetKind
from crate_tasks.exceptions import UnknownTargetError

DEFAULT_TARGET = "build"
AGGREGATE_TARGET = "all"

CHECK_NOTICE = "Running check; use `build` to actually build"
LONGTEST_NOTICE = "Running longtest. Press Ctrl+C to stop at any time"

ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "travistest": "test",
        "publishdoc": "publish-doc",
        "docview": "doc-view",
    }
)


def _direct(name: str, *verbs: ActionVerb, description: str, notice: str | None = None) -> Target:
    return Target(
        name=name,
        kind=TargetKind.DIRECT,
        actions=tuple(Action(verb) for verb in verbs),
        notice=notice,
        description=description,
    )


def _static_targets() -> tuple[Target, ...]:
    """The fixed part of the registry, in display order."""
    return (
        _direct("build", ActionVerb.BUILD, description="Compile the crate"),
        _direct("run", ActionVerb.RUN, description="Build and run the crate binary"),
        _direct("test", ActionVerb.TEST, description="Run the test suite"),
        _direct(
            "check",
            ActionVerb.CHECK,
            description="Type-check without producing artifacts",
            notice=CHECK_NOTICE,
        ),
        _direct("clean", ActionVerb.CLEAN, description="Remove build artifacts"),
        _direct("bench", ActionVerb.BENCH, description="Run benchmarks (never in release mode)"),
        _direct("clippy", ActionVerb.LINT, description="Build with the clippy feature enabled"),
        _direct("doc", ActionVerb.DOC, description="Generate API documentation"),
        _direct(
            "doc-view",
            ActionVerb.DOC,
            ActionVerb.OPEN_DOC,
            description="Generate documentation and open it in a browser",
        ),
        Target(
            name="longtest",
            kind=TargetKind.ITERATIVE,
            actions=(Action(ActionVerb.TEST),),
            notice=LONGTEST_NOTICE,
            description="Repeat the test suite until it fails",
        ),
        Target(
            name="publish-doc",
            kind=TargetKind.PUBLISH,
            actions=(
                Action(ActionVerb.DOC),
                Action(ActionVerb.PUBLISH_PAGES),
                Action(ActionVerb.PUSH_PAGES),
            ),
            description="Regenerate documentation and push it to gh-pages",
        ),
    )


class TargetRegistry:
    """Immutable name → :class:`Target` lookup.

    Use :meth:`build` to construct one; the constructor accepts an
    already-assembled mapping and is mostly useful in tests.
    """

    def __init__(self, targets: Mapping[str, Target], examples: tuple[str, ...] = ()) -> None:
        self._targets: Mapping[str, Target] = MappingProxyType(dict(targets))
        self._examples: tuple[str, ...] = examples

    @classmethod
    def build(cls, examples: Iterable[str] = ()) -> TargetRegistry:
        """Create the registry for a run with the given discovered examples."""
        example_names = tuple(examples)
        targets: dict[str, Target] = {t.name: t for t in _static_targets()}

        example_actions = tuple(Action(ActionVerb.EXAMPLE, example=name) for name in example_names)
        for name, action in zip(example_names, example_actions):
            # Static names take precedence; the example still builds under "all".
            targets.setdefault(
                name,
                Target(
                    name=name,
                    kind=TargetKind.EXAMPLE_BUILD,
                    actions=(action,),
                    description=f"Build examples/{name}.rs",
                ),
            )

        targets[AGGREGATE_TARGET] = Target(
            name=AGGREGATE_TARGET,
            kind=TargetKind.AGGREGATE,
            actions=(
                *targets["build"].actions,
                *example_actions,
                *targets["test"].actions,
                *targets["doc"].actions,
            ),
            members=("build", *example_names, "test", "doc"),
            description="build, every example, test, then doc",
        )
        return cls(targets, example_names)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def examples(self) -> tuple[str, ...]:
        return self._examples

    def names(self) -> tuple[str, ...]:
        """Every canonical target name, in registry order."""
        return tuple(self._targets)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and ALIASES.get(name, name) in self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets.values())

    def resolve(self, name: str | None) -> Target:
        """Return the target for *name* (``None`` → the default target).

        Raises
        ------
        UnknownTargetError
            When *name* is neither a registered target nor an alias.
        """
        if name is None:
            name = DEFAULT_TARGET
        canonical = ALIASES.get(name, name)
        try:
            return self._targets[canonical]
        except KeyError:
            raise UnknownTargetError(
                f"Unknown target: {name!r}",
                hint="Available targets: " + ", ".join(self.names()),
            ) from None

    def expand(self, name: str | None) -> tuple[Action, ...]:
        """Return the ordered, non-empty action sequence for *name*."""
        return self.resolve(name).actions
