"""Shared fixtures for build component tests."""

import io
from unittest.mock import patch

import pytest

from mason.build.build_hints import BuildHints
from mason.build.context import BuildContext
from mason.config.target_specs import resolve_target
from mason.packages.toolchain import Toolchain
from tool_mocks import completed


@pytest.fixture
def mock_run():
    """Patch subprocess.run to succeed without running anything."""
    with patch("subprocess.run", return_value=completed()) as run:
        yield run


@pytest.fixture
def hint_stream():
    return io.StringIO()


@pytest.fixture
def context(tmp_path, hint_stream):
    """Build context for riscv64gc writing into tmp/out."""
    target = resolve_target("riscv64gc-unknown-none-elf")
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return BuildContext(
        output_dir=output_dir,
        target=target,
        toolchain=Toolchain.from_target(target),
        hints=BuildHints(hint_stream),
    )
