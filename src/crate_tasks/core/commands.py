"""Command-line construction for every :class:`ActionVerb`.

Pure functions only: the returned argv tuples are handed to a
:class:`~crate_tasks.core.protocols.CommandRunner` by the dispatcher.
"""

from __future__ import annotations

from pathlib import Path

from crate_tasks.core.models import (
    Action,
    ActionVerb,
    BuildParameters,
    PackageMetadata,
)

DEFAULT_DOC_DIR = Path("target/doc")

# Verbs that map 1:1 onto a cargo subcommand with features and flags.
_CARGO_SUBCOMMANDS: dict[ActionVerb, str] = {
    ActionVerb.BUILD: "build",
    ActionVerb.RUN: "run",
    ActionVerb.TEST: "test",
    ActionVerb.CHECK: "check",
    ActionVerb.BENCH: "bench",
    ActionVerb.DOC: "doc",
    ActionVerb.LINT: "build",
}


def _features_arg(params: BuildParameters, verb: ActionVerb) -> tuple[str, ...]:
    features = params.features_for(verb)
    if not features:
        return ()
    return ("--features", ",".join(features))


def build_command(
    action: Action,
    params: BuildParameters,
    metadata: PackageMetadata,
    *,
    cargo: str = "cargo",
    doc_dir: Path = DEFAULT_DOC_DIR,
) -> tuple[str, ...]:
    """Return the argv for *action* under *params*.

    Raises
    ------
    ValueError
        If an ``EXAMPLE`` action carries no example name.
    """
    verb = action.verb

    if verb in _CARGO_SUBCOMMANDS:
        return (
            cargo,
            _CARGO_SUBCOMMANDS[verb],
            *_features_arg(params, verb),
            *params.flags_for(verb),
        )

    if verb is ActionVerb.CLEAN:
        return (cargo, "clean", *params.flags_for(verb))

    if verb is ActionVerb.EXAMPLE:
        if not action.example:
            raise ValueError("EXAMPLE action requires an example name")
        return (
            cargo,
            "build",
            "--example",
            action.example,
            *_features_arg(params, verb),
            *params.flags_for(verb),
        )

    if verb is ActionVerb.OPEN_DOC:
        return ("xdg-open", str(doc_dir / metadata.doc_module / "index.html"))

    if verb is ActionVerb.PUBLISH_PAGES:
        return ("ghp-import", "-n", str(doc_dir))

    if verb is ActionVerb.PUSH_PAGES:
        return ("git", "push", "-f", "origin", "gh-pages")

    raise ValueError(f"Unsupported action verb: {verb}")  # pragma: no cover
