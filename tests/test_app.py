"""CLI integration tests (cli/app.py).

:class:`SubprocessCommandRunner` is patched where ``app`` imports it,
so every external command is recorded instead of executed.

Coverage:
* Routing a target from argv to the runner, with -C.
* Environment variables feeding BuildParameters.
* Exit status propagation.
* --list and --dry-run.
* The ``cli()`` error boundary.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from crate_tasks.cli import app as app_module
from crate_tasks.cli import exit_codes
from crate_tasks.cli.app import cli, main
from crate_tasks.exceptions import ConfigError, ExternalCommandError, UnknownTargetError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _patch_runner(statuses: Sequence[int] = ()) -> tuple[MagicMock, list[tuple[str, ...]]]:
    calls: list[tuple[str, ...]] = []
    remaining = list(statuses)

    def run(argv: Sequence[str]) -> int:
        calls.append(tuple(argv))
        return remaining.pop(0) if remaining else 0

    runner_cls = MagicMock()
    runner_cls.return_value.run.side_effect = run
    return runner_cls, calls


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

class TestRouting:
    def test_default_target(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            code = main(["-C", str(crate_dir)], environ={})

        assert code == exit_codes.SUCCESS
        assert calls == [("cargo", "build", "--features", "serde")]
        runner_cls.assert_called_once_with(cwd=crate_dir)

    def test_all_with_discovered_examples(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir), "all"], environ={})

        examples = [call[3] for call in calls if "--example" in call]
        assert examples == ["bar", "foo"]
        assert [call[1] for call in calls] == ["build", "build", "build", "test", "doc"]

    def test_example_target(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir), "foo"], environ={})

        assert calls == [("cargo", "build", "--example", "foo", "--features", "serde")]

    def test_failure_status_is_exit_code(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner([0, 101])
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            code = main(["-C", str(crate_dir), "all"], environ={})

        assert code == 101
        assert len(calls) == 2

    def test_unknown_target_raises(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            with pytest.raises(UnknownTargetError):
                main(["-C", str(crate_dir), "deploy"], environ={})
        assert calls == []

    def test_missing_manifest_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Manifest not found"):
            main(["-C", str(tmp_path)], environ={})


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

class TestEnvironment:
    def test_release_env(self, crate_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir), "bench"], environ={"RELEASE": "true"})
            main(["-C", str(crate_dir), "test"], environ={"RELEASE": "true"})

        assert "--release" not in calls[0]
        assert "--release" in calls[1]
        assert "RELEASE BUILD: my-pkg" in capsys.readouterr().err

    def test_debug_notice(self, crate_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        runner_cls, _ = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir)], environ={"RELEASE": ""})

        assert "DEBUG BUILD: my-pkg" in capsys.readouterr().err

    def test_release_switch(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir), "--release"], environ={})

        assert calls[0][-1] == "--release"

    def test_features_and_flags(self, crate_dir: Path) -> None:
        runner_cls, calls = _patch_runner()
        environ = {"CARGO_FEATURES": "std", "CARGO_FLAGS": "--locked", "CARGO": "cargo-nightly"}
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            main(["-C", str(crate_dir), "--features", "alloc", "build"], environ=environ)

        assert calls == [("cargo-nightly", "build", "--features", "serde,std,alloc", "--locked")]

    def test_bad_flags_raise_config_error(self, crate_dir: Path) -> None:
        with pytest.raises(ConfigError):
            main(["-C", str(crate_dir)], environ={"CARGO_FLAGS": "'open"})


# ---------------------------------------------------------------------------
# --list / --dry-run / publish-doc
# ---------------------------------------------------------------------------

class TestListAndDryRun:
    def test_list_shows_targets(self, crate_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            code = main(["-C", str(crate_dir), "--list"], environ={})

        err = capsys.readouterr().err
        assert code == exit_codes.SUCCESS
        assert calls == []
        for name in ("build", "longtest", "publish-doc", "foo", "bar"):
            assert name in err

    def test_dry_run_executes_nothing(
        self, crate_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (crate_dir / "target" / "doc").mkdir(parents=True)
        runner_cls, calls = _patch_runner()
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            code = main(["-C", str(crate_dir), "--dry-run", "publish-doc"], environ={})

        assert code == exit_codes.SUCCESS
        assert calls == []
        runner_cls.assert_not_called()
        assert (crate_dir / "target" / "doc").is_dir()
        assert "ghp-import" in capsys.readouterr().err

    def test_dry_run_longtest_terminates(self, crate_dir: Path) -> None:
        code = main(["-C", str(crate_dir), "--dry-run", "longtest"], environ={})
        assert code == exit_codes.SUCCESS


class TestPublishDoc:
    def test_writes_redirect_stub(self, crate_dir: Path) -> None:
        calls: list[tuple[str, ...]] = []

        def run(argv: Sequence[str]) -> int:
            calls.append(tuple(argv))
            if argv[1] == "doc":
                (crate_dir / "target" / "doc" / "my_pkg").mkdir(parents=True)
            return 0

        runner_cls = MagicMock()
        runner_cls.return_value.run.side_effect = run
        with patch.object(app_module, "SubprocessCommandRunner", runner_cls):
            code = main(["-C", str(crate_dir), "publish-doc"], environ={})

        assert code == exit_codes.SUCCESS
        index = crate_dir / "target" / "doc" / "index.html"
        assert index.read_text(encoding="utf-8") == (
            '<meta http-equiv="refresh" content="0;url=my_pkg/index.html">'
        )
        assert calls[1][0] == "ghp-import"
        assert calls[2] == ("git", "push", "-f", "origin", "gh-pages")


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _exit_code(self, monkeypatch: pytest.MonkeyPatch, outcome: object) -> int | str | None:
        def fake_main() -> int:
            if isinstance(outcome, BaseException):
                raise outcome
            assert isinstance(outcome, int)
            return outcome

        monkeypatch.setattr(app_module, "main", fake_main)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return exc_info.value.code

    def test_status_passthrough(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._exit_code(monkeypatch, 101) == 101

    def test_known_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        err = UnknownTargetError("Unknown target: 'x'", hint="Available targets: build")
        assert self._exit_code(monkeypatch, err) == exit_codes.GENERAL_ERROR
        output = capsys.readouterr().err
        assert "Unknown target" in output
        assert "Available targets" in output

    def test_external_command_error_uses_returncode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        err = ExternalCommandError("Command not found: cargo", returncode=127)
        assert self._exit_code(monkeypatch, err) == 127

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._exit_code(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._exit_code(monkeypatch, RuntimeError("boom")) == exit_codes.UNEXPECTED_ERROR

    def test_bracketed_target_name_is_printed_verbatim(
        self,
        monkeypatch: pytest.MonkeyPatch,
        crate_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["crate-tasks", "-C", str(crate_dir), "[/x]"])

        with pytest.raises(SystemExit) as exc_info:
            cli()

        output = capsys.readouterr().err
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "Unknown target: '[/x]'" in output
        assert "Available targets" in output

    def test_markup_in_hint_is_escaped(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        err = ConfigError("Invalid CARGO_FLAGS", hint="got '[bold]--x'")
        assert self._exit_code(monkeypatch, err) == exit_codes.GENERAL_ERROR
        assert "got '[bold]--x'" in capsys.readouterr().err
