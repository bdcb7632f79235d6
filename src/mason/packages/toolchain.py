"""Toolchain resolution for GNU binutils.

This module maps a Target onto the four binutils executables Mason drives:
the assembler, the linker, the archiver and objcopy. Names follow the GNU
cross-toolchain convention <prefix>-<suffix>-<tool>, for example
riscv64-linux-gnu-as.
"""

import os
import shutil
from pathlib import Path
from typing import Dict, List, Optional

from ..config.target_specs import Target
from ..errors import ToolchainError

DEFAULT_SUFFIX = "linux-gnu"


class Toolchain:
    """Locates the cross binutils for a target."""

    # Tool roles mapped to their binutils names
    REQUIRED_TOOLS = {
        "as": "as",
        "ld": "ld",
        "ar": "ar",
        "objcopy": "objcopy",
    }

    def __init__(self, tools: Dict[str, str]):
        """Initialize toolchain.

        Args:
            tools: Mapping of tool role ('as', 'ld', 'ar', 'objcopy') to executable

        Raises:
            ToolchainError: If a required role is missing
        """
        missing = [role for role in self.REQUIRED_TOOLS if role not in tools]
        if missing:
            raise ToolchainError(f"Toolchain is missing tools: {', '.join(missing)}")
        self.tools = dict(tools)

    @classmethod
    def from_target(
        cls,
        target: Target,
        suffix: str = DEFAULT_SUFFIX,
        tool_dir: Optional[Path] = None,
    ) -> "Toolchain":
        """Build the toolchain for a target.

        Args:
            target: Resolved build target
            suffix: Middle part of the executable names (e.g., 'linux-gnu', 'elf')
            tool_dir: Directory holding the executables. When None the bare
                names are used and looked up on PATH at invocation time.

        Returns:
            Toolchain with all four tools resolved
        """
        prefix = f"{target.gnu_prefix}-{suffix}-" if suffix else f"{target.gnu_prefix}-"

        tools = {}
        for role, name in cls.REQUIRED_TOOLS.items():
            executable = f"{prefix}{name}"
            if tool_dir is not None:
                executable = str(Path(tool_dir) / executable)
            tools[role] = executable

        return cls(tools)

    @property
    def as_exec(self) -> str:
        return self.tools["as"]

    @property
    def ld_exec(self) -> str:
        return self.tools["ld"]

    @property
    def ar_exec(self) -> str:
        return self.tools["ar"]

    @property
    def objcopy_exec(self) -> str:
        return self.tools["objcopy"]

    def get_tool_path(self, role: str) -> str:
        """Get the executable for a tool role.

        Raises:
            ToolchainError: If the role is unknown
        """
        if role not in self.tools:
            raise ToolchainError(f"Unknown tool: {role}")
        return self.tools[role]

    def find_missing(self) -> List[str]:
        """List executables that cannot be found on disk or on PATH."""
        missing = []
        for executable in self.tools.values():
            if os.sep in executable:
                if not Path(executable).exists():
                    missing.append(executable)
            elif shutil.which(executable) is None:
                missing.append(executable)
        return missing

    def verify(self) -> None:
        """Check that every tool is available.

        Raises:
            ToolchainError: If any executable is missing
        """
        missing = self.find_missing()
        if missing:
            raise ToolchainError(
                f"Toolchain executables not found: {', '.join(missing)}. "
                + "Ensure GNU binutils for the target are installed."
            )
