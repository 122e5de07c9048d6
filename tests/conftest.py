"""Shared pytest fixtures and configuration for the crate-tasks test suite.

Guidelines
----------
* No external command is ever executed — runners are mocked.
* Core tests must be pure — no side effects.
* Filesystem tests work inside ``tmp_path`` only.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from crate_tasks.core.environment import resolve_build_parameters
from crate_tasks.core.models import BuildParameters, PackageMetadata

MANIFEST_TEMPLATE = """\
[package]
name = "{name}"
version = "0.1.0"
edition = "2021"

[dependencies]
serde = {{ version = "1", optional = true }}
"""


def write_manifest(directory: Path, name: str = "my-pkg") -> Path:
    path = directory / "Cargo.toml"
    path.write_text(MANIFEST_TEMPLATE.format(name=name), encoding="utf-8")
    return path


@pytest.fixture
def crate_dir(tmp_path: Path) -> Path:
    """A crate root with a manifest and two examples (``bar``, ``foo``)."""
    write_manifest(tmp_path)
    examples = tmp_path / "examples"
    examples.mkdir()
    (examples / "foo.rs").write_text("fn main() {}\n", encoding="utf-8")
    (examples / "bar.rs").write_text("fn main() {}\n", encoding="utf-8")
    (examples / "README.md").write_text("not an example\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def metadata() -> PackageMetadata:
    return PackageMetadata(name="my-pkg")


@pytest.fixture
def debug_params() -> BuildParameters:
    return resolve_build_parameters(release=False)


@pytest.fixture
def release_params() -> BuildParameters:
    return resolve_build_parameters(release=True)
