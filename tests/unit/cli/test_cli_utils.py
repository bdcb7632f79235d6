"""Unit tests for CLI utilities: environment inputs and error formatting."""

from pathlib import Path

import pytest

from mason.cli_utils import BuildEnvironment, ErrorFormatter, split_path_list
from mason.errors import ConfigurationError, IntegrityError


class TestSplitPathList:
    """Tests for split_path_list."""

    def test_split(self):
        assert split_path_list("a.bin:src/b.bin") == ["a.bin", "src/b.bin"]

    def test_empty_segments_dropped(self):
        assert split_path_list(":a::b:") == ["a", "b"]

    def test_none_and_empty(self):
        assert split_path_list(None) == []
        assert split_path_list("") == []


class TestBuildEnvironment:
    """Tests for BuildEnvironment."""

    def test_from_environ(self):
        """Test every variable is read."""
        env = BuildEnvironment.from_environ(
            {
                "TARGET": "riscv64gc-unknown-none-elf",
                "OUT_DIR": "/tmp/out",
                "MASON_FILES": "a.bin:b.bin",
                "MASON_ASM_DIRS": "src/boot",
                "MASON_TOOLCHAIN_SUFFIX": "elf",
                "MASON_TOOLCHAIN_DIR": "/opt/riscv/bin",
                "MASON_ARCHIVE_NAME": "boot",
                "MASON_VERBOSE": "1",
            }
        )

        assert env.triple == "riscv64gc-unknown-none-elf"
        assert env.output_dir == Path("/tmp/out")
        assert env.include_files == ["a.bin", "b.bin"]
        assert env.asm_dirs == ["src/boot"]
        assert env.toolchain_suffix == "elf"
        assert env.toolchain_dir == Path("/opt/riscv/bin")
        assert env.archive_name == "boot"
        assert env.verbose is True

    def test_empty_environ(self):
        """Test nothing set gives empty inputs."""
        env = BuildEnvironment.from_environ({})

        assert env.triple is None
        assert env.output_dir is None
        assert env.include_files == []
        assert env.asm_dirs == []
        assert env.verbose is False

    def test_verbose_zero(self):
        assert BuildEnvironment.from_environ({"MASON_VERBOSE": "0"}).verbose is False

    def test_reads_os_environ(self, monkeypatch):
        """Test os.environ is the default source."""
        monkeypatch.setenv("TARGET", "riscv32imac-unknown-none-elf")

        assert BuildEnvironment.from_environ().triple == "riscv32imac-unknown-none-elf"

    def test_require_triple(self):
        with pytest.raises(ConfigurationError, match="Missing target triple"):
            BuildEnvironment().require_triple()
        assert BuildEnvironment(triple="riscv64gc").require_triple() == "riscv64gc"

    def test_require_output_dir(self):
        with pytest.raises(ConfigurationError, match="No output directory"):
            BuildEnvironment().require_output_dir()
        assert BuildEnvironment(output_dir=Path("out")).require_output_dir() == Path("out")


class TestErrorFormatter:
    """Tests for ErrorFormatter."""

    def test_handle_mason_error(self, capsys):
        """Test a Mason error exits 1 with its category on stderr."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_mason_error(IntegrityError("Cannot register object x.o"))

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "integrity" in captured.err
        assert "Cannot register object x.o" in captured.err

    def test_handle_keyboard_interrupt(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_keyboard_interrupt()

        assert exc_info.value.code == 130

    def test_handle_unexpected_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_unexpected_error(RuntimeError("boom"))

        assert exc_info.value.code == 1
        assert "RuntimeError: boom" in capsys.readouterr().err
