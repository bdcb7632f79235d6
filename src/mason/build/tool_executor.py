"""Tool Executor.

This module runs the external binutils programs Mason depends on and turns
their exit status and captured output into results or errors.

Design:
    - Wraps subprocess.run; every call blocks until the tool exits
    - No timeouts and no retries: a failed tool fails the run
    - Captured stdout/stderr are carried verbatim into error messages
    - Thin helpers build the command line for each binutils operation
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from ..errors import ToolchainError

PathLike = Union[str, Path]


@dataclass
class ToolResult:
    """Result of one external tool invocation."""

    cmd: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        """Render the captured output for an error message."""
        return f"stdout: {self.stdout}\nstderr: {self.stderr}"


class ToolExecutor:
    """Executes binutils commands one at a time."""

    def run(self, cmd: Sequence[PathLike], description: str) -> ToolResult:
        """Run a command and capture its output.

        Args:
            cmd: Command line, executable first
            description: What the command does, for error messages

        Returns:
            ToolResult with exit status and captured output

        Raises:
            ToolchainError: If the executable cannot be started
        """
        cmd = [str(part) for part in cmd]
        logging.debug(f"Running: {' '.join(cmd)}")

        try:
            # Tools may print paths that aren't valid UTF-8
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except OSError as e:
            raise ToolchainError(f"Couldn't run {cmd[0]} to {description}: {e}") from e

        return ToolResult(
            cmd=cmd,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def check(self, cmd: Sequence[PathLike], description: str) -> ToolResult:
        """Run a command and require a zero exit status.

        Raises:
            ToolchainError: If the tool cannot be started or exits nonzero
        """
        result = self.run(cmd, description)
        if not result.success:
            raise ToolchainError(
                f"Failed to {description} (exit code {result.returncode})\n"
                + result.describe()
            )
        return result

    def link_binary(self, ld: PathLike, source: PathLike, output: PathLike) -> ToolResult:
        """Wrap a raw binary file as a relocatable object."""
        cmd = [ld, "-r", "--format=binary", source, "-o", output]
        return self.check(cmd, f"convert {source} into object {output}")

    def redefine_symbols(
        self,
        objcopy: PathLike,
        object_file: PathLike,
        renames: Sequence[Tuple[str, str]],
    ) -> ToolResult:
        """Rename symbols in an object file in place, in a single invocation."""
        cmd: List[PathLike] = [objcopy]
        for old, new in renames:
            cmd.extend(["--redefine-sym", f"{old}={new}"])
        cmd.append(object_file)
        return self.check(cmd, f"rename symbols in {object_file}")

    def assemble(
        self,
        as_exec: PathLike,
        source: PathLike,
        output: PathLike,
        march: str,
        mabi: str,
        defsyms: Dict[str, int],
    ) -> ToolResult:
        """Assemble a source file into an object file."""
        cmd: List[PathLike] = [as_exec, "-march", march, "-mabi", mabi]
        for name, value in defsyms.items():
            cmd.extend(["--defsym", f"{name}={value}"])
        cmd.extend(["-o", output, source])
        return self.check(cmd, f"assemble {source}")

    def archive(
        self,
        ar: PathLike,
        archive_path: PathLike,
        object_files: Sequence[PathLike],
    ) -> ToolResult:
        """Create or update a static archive.

        'crsD' flags: c=create, r=insert/replace, s=index, D=deterministic
        """
        cmd: List[PathLike] = [ar, "crsD", archive_path]
        cmd.extend(object_files)
        return self.check(cmd, f"archive {archive_path}")
