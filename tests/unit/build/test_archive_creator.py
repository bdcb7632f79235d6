"""
Unit tests for the ArchiveCreator.
"""

import pytest

from tool_mocks import completed
from mason.build.archive_creator import ArchiveCreator
from mason.errors import ToolchainError


class TestArchiveCreator:
    """Test suite for ArchiveCreator."""

    def test_create_archive(self, context, mock_run, hint_stream):
        """Test one ar call with every registered object, then link directives."""
        for name in ["start.o", "font.bin.o"]:
            context.registry.register(context.output_dir / name)

        archive_path = ArchiveCreator().create_archive(context)

        assert archive_path == context.output_dir / "libhv.a"
        mock_run.assert_called_once()

        cmd = mock_run.call_args[0][0]
        assert cmd[:3] == ["riscv64-linux-gnu-ar", "crsD", str(archive_path)]
        assert sorted(cmd[3:]) == context.registry.paths()

        assert hint_stream.getvalue().splitlines() == [
            f"cargo:rustc-link-search={context.output_dir}",
            "cargo:rustc-link-lib=static=hv",
        ]

    def test_custom_archive_name(self, context, mock_run, hint_stream):
        """Test the archive and link directive follow archive_name."""
        context.archive_name = "boot"

        archive_path = ArchiveCreator().create_archive(context)

        assert archive_path.name == "libboot.a"
        assert "cargo:rustc-link-lib=static=boot" in hint_stream.getvalue()

    def test_no_objects(self, context, mock_run):
        """Test an empty registry still produces an archive."""
        ArchiveCreator().create_archive(context)

        cmd = mock_run.call_args[0][0]
        assert cmd == ["riscv64-linux-gnu-ar", "crsD", str(context.archive_path)]

    def test_stale_archive_removed(self, context, mock_run):
        """Test a previous run's archive is not reused."""
        context.archive_path.write_bytes(b"!<arch>\nstale")

        ArchiveCreator().create_archive(context)

        assert not context.archive_path.exists()

    def test_failure(self, context, mock_run, hint_stream):
        """Test archiver failure is fatal and emits no link directives."""
        mock_run.return_value = completed(1, "", "ar: start.o: file format not recognized")
        context.registry.register(context.output_dir / "start.o")

        with pytest.raises(ToolchainError, match="file format not recognized"):
            ArchiveCreator().create_archive(context)

        assert hint_stream.getvalue() == ""
