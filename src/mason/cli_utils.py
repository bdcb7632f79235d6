"""CLI utility functions for Mason.

This module provides common utilities used across CLI commands including:
- Reading build inputs from the Cargo build-script environment
- Error handling and formatting

Everything here writes to stderr: stdout carries cargo directives.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from mason.errors import ConfigurationError, MasonError


def split_path_list(value: Optional[str]) -> List[str]:
    """Split a colon-separated path list, dropping empty entries.

    Args:
        value: String such as "a.bin:b/c.bin" (None is treated as empty)

    Returns:
        List of paths in the order given
    """
    if not value:
        return []
    return [part for part in value.split(":") if part]


@dataclass
class BuildEnvironment:
    """Build inputs taken from environment variables."""

    triple: Optional[str] = None
    output_dir: Optional[Path] = None
    include_files: List[str] = field(default_factory=list)
    asm_dirs: List[str] = field(default_factory=list)
    toolchain_suffix: Optional[str] = None
    toolchain_dir: Optional[Path] = None
    archive_name: Optional[str] = None
    verbose: bool = False

    @staticmethod
    def from_environ(environ: Optional[Mapping[str, str]] = None) -> "BuildEnvironment":
        """Read Mason's inputs from the environment.

        Variables:
            TARGET: build triple (set by cargo)
            OUT_DIR: output directory (set by cargo)
            MASON_FILES: colon-separated binaries to package
            MASON_ASM_DIRS: colon-separated assembly directories
            MASON_TOOLCHAIN_SUFFIX: binutils name suffix (default 'linux-gnu')
            MASON_TOOLCHAIN_DIR: directory holding binutils
            MASON_ARCHIVE_NAME: archive name (default 'hv')
            MASON_VERBOSE: '1' for debug logging

        Args:
            environ: Mapping to read (defaults to os.environ)
        """
        env = os.environ if environ is None else environ

        out_dir = env.get("OUT_DIR")
        tool_dir = env.get("MASON_TOOLCHAIN_DIR")

        return BuildEnvironment(
            triple=env.get("TARGET") or None,
            output_dir=Path(out_dir) if out_dir else None,
            include_files=split_path_list(env.get("MASON_FILES")),
            asm_dirs=split_path_list(env.get("MASON_ASM_DIRS")),
            toolchain_suffix=env.get("MASON_TOOLCHAIN_SUFFIX"),
            toolchain_dir=Path(tool_dir) if tool_dir else None,
            archive_name=env.get("MASON_ARCHIVE_NAME") or None,
            verbose=env.get("MASON_VERBOSE", "") not in ("", "0"),
        )

    def require_triple(self) -> str:
        """Get the target triple.

        Raises:
            ConfigurationError: If no triple was supplied
        """
        if not self.triple:
            raise ConfigurationError(
                "Missing target triple: set TARGET or pass --target (use --target with cargo)"
            )
        return self.triple

    def require_output_dir(self) -> Path:
        """Get the output directory.

        Raises:
            ConfigurationError: If no output directory was supplied
        """
        if self.output_dir is None:
            raise ConfigurationError(
                "No output directory specified: set OUT_DIR or pass --out-dir"
            )
        return self.output_dir


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Configuration error")
            message: Error message details
        """
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}", file=sys.stderr)
        print(message, file=sys.stderr)

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}", file=sys.stderr)

    @staticmethod
    def handle_mason_error(error: MasonError) -> None:
        """Report a Mason failure and exit.

        Args:
            error: The failure to report
        """
        ErrorFormatter.print_error(f"Mason {error.category} error", str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        print(f"{ErrorFormatter.YELLOW}✗ Build interrupted{ErrorFormatter.RESET}", file=sys.stderr)
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:", file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

        sys.exit(1)
