"""Toolchain management for Mason.

This module resolves the GNU binutils executables used for a target.
"""

from .toolchain import DEFAULT_SUFFIX, Toolchain

__all__ = [
    "DEFAULT_SUFFIX",
    "Toolchain",
]
