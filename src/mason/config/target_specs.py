"""
Target specifications for supported CPU architectures.

This module centralizes the toolchain parameters for each architecture Mason
can build for. The table below is the only place architectures are defined:
supporting a new CPU is a matter of adding an entry to TARGET_SPECS.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Target:
    """Toolchain parameters derived from a build triple."""

    cpu_arch: str  # Passed to the assembler as -march
    gnu_prefix: str  # Prefix of the GNU binutils executables
    platform: str  # Platform tag, e.g. 'riscv' for src/platform-riscv
    ptr_width: int  # Pointer width in bits
    flt_width: int  # Floating-point register width in bits (0 = no FPU)
    abi: str  # Passed to the assembler as -mabi


# Keyed by the leading component of the build triple
TARGET_SPECS = {
    "riscv32imac": Target(
        cpu_arch="rv32imac",
        gnu_prefix="riscv32",
        platform="riscv",
        ptr_width=32,
        flt_width=0,
        abi="ilp32",
    ),
    "riscv64imac": Target(
        cpu_arch="rv64imac",
        gnu_prefix="riscv64",
        platform="riscv",
        ptr_width=64,
        flt_width=0,
        abi="lp64",
    ),
    "riscv64gc": Target(
        cpu_arch="rv64gc",
        gnu_prefix="riscv64",
        platform="riscv",
        ptr_width=64,
        flt_width=64,
        abi="lp64",
    ),
}


def target_arch(triple: str) -> str:
    """
    Get the architecture component of a build triple.

    Args:
        triple: Build triple (e.g., 'riscv64gc-unknown-none-elf')

    Returns:
        Leading component of the triple (e.g., 'riscv64gc')
    """
    return triple.split("-", 1)[0]


def get_target_spec(arch: str) -> Optional[Target]:
    """
    Get target specification by architecture name.

    Args:
        arch: Architecture identifier (e.g., 'riscv64gc')

    Returns:
        Target if found, None otherwise
    """
    return TARGET_SPECS.get(arch)


def supported_architectures() -> List[str]:
    """Get the sorted list of supported architecture identifiers."""
    return sorted(TARGET_SPECS)


def resolve_target(triple: str) -> Target:
    """
    Resolve a full build triple to its toolchain parameters.

    Only the leading component of the triple is considered and it must match
    an entry in TARGET_SPECS exactly.

    Args:
        triple: Build triple (e.g., 'riscv64gc-unknown-none-elf')

    Returns:
        Target for the triple's architecture

    Raises:
        ConfigurationError: If the triple is empty or its architecture is unsupported
    """
    arch = target_arch(triple or "")
    if not arch:
        raise ConfigurationError(f"Badly formatted target triple '{triple}'")

    target = get_target_spec(arch)
    if target is None:
        raise ConfigurationError(
            f"Unsupported target '{arch}' (from triple '{triple}'). "
            + f"Supported architectures: {', '.join(supported_architectures())}"
        )
    return target
