"""
Unit tests for target triple resolution.
"""

import dataclasses

import pytest

from mason.config.target_specs import (
    TARGET_SPECS,
    Target,
    get_target_spec,
    resolve_target,
    supported_architectures,
    target_arch,
)
from mason.errors import ConfigurationError, MasonError


class TestResolveTarget:
    """Test suite for resolve_target."""

    @pytest.mark.parametrize(
        "triple,expected",
        [
            ("riscv32imac-unknown-none-elf", ("rv32imac", "riscv32", "riscv", 32, 0, "ilp32")),
            ("riscv64imac-unknown-none-elf", ("rv64imac", "riscv64", "riscv", 64, 0, "lp64")),
            ("riscv64gc-unknown-none-elf", ("rv64gc", "riscv64", "riscv", 64, 64, "lp64")),
        ],
    )
    def test_known_triples(self, triple, expected):
        """Test each supported family resolves to its fixed parameters."""
        target = resolve_target(triple)

        assert (
            target.cpu_arch,
            target.gnu_prefix,
            target.platform,
            target.ptr_width,
            target.flt_width,
            target.abi,
        ) == expected

    def test_only_first_segment_matters(self):
        """Test the vendor/OS part of the triple is ignored."""
        assert resolve_target("riscv64gc-foo-bar") == resolve_target("riscv64gc-unknown-none-elf")
        assert resolve_target("riscv64gc") == TARGET_SPECS["riscv64gc"]

    @pytest.mark.parametrize(
        "triple",
        [
            "x86_64-unknown-linux-gnu",
            "riscv64-unknown-none-elf",
            "riscv64gcx-unknown-none-elf",
            "RISCV64GC-unknown-none-elf",
            "aarch64-unknown-none",
            " riscv64gc-unknown-none-elf",
            "riscv64gc -unknown-none-elf",
        ],
    )
    def test_unknown_triples(self, triple):
        """Test unknown architectures fail with no partial matching."""
        with pytest.raises(ConfigurationError, match="Unsupported target"):
            resolve_target(triple)

    def test_empty_triple(self):
        """Test an empty triple is a configuration error."""
        with pytest.raises(ConfigurationError, match="Badly formatted"):
            resolve_target("")

    def test_error_lists_supported(self):
        """Test the error message names the supported architectures."""
        with pytest.raises(MasonError) as exc_info:
            resolve_target("mips-unknown-none")

        assert "riscv64gc" in str(exc_info.value)
        assert exc_info.value.category == "configuration"


class TestTargetTable:
    """Test suite for the target table helpers."""

    def test_target_is_immutable(self):
        """Test Target records cannot be modified."""
        target = resolve_target("riscv32imac-unknown-none-elf")

        with pytest.raises(dataclasses.FrozenInstanceError):
            target.ptr_width = 64

    def test_get_target_spec(self):
        """Test direct lookup by architecture."""
        assert get_target_spec("riscv64imac") is TARGET_SPECS["riscv64imac"]
        assert get_target_spec("arm") is None

    def test_supported_architectures_sorted(self):
        """Test the architecture list comes from the table."""
        archs = supported_architectures()

        assert archs == sorted(TARGET_SPECS)
        assert "riscv32imac" in archs

    def test_target_arch(self):
        """Test extracting the architecture component."""
        assert target_arch("riscv64gc-unknown-none-elf") == "riscv64gc"
        assert target_arch("riscv64gc") == "riscv64gc"

    def test_table_entries_are_targets(self):
        """Test every table entry is a complete Target."""
        for arch, target in TARGET_SPECS.items():
            assert isinstance(target, Target)
            assert target.ptr_width in (32, 64)
            assert target.flt_width in (0, 32, 64, 128)
