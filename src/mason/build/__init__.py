"""
Build system components for Mason.

This module provides the build pipeline including:
- Tool execution (as, ld, ar, objcopy)
- Binary packaging and symbol renaming
- Assembly source discovery and assembly
- Object registration and archiving
- Build orchestration
"""

from .archive_creator import ArchiveCreator
from .assembler import assemble_directory, asm_leaf_name, discover_sources
from .binary_packager import boundary_symbols, package_binary
from .build_hints import BuildHints
from .context import BuildContext, ObjectRegistry
from .orchestrator import BuildOrchestrator, BuildPlan, BuildResult
from .tool_executor import ToolExecutor, ToolResult

__all__ = [
    'ArchiveCreator',
    'assemble_directory',
    'asm_leaf_name',
    'discover_sources',
    'boundary_symbols',
    'package_binary',
    'BuildHints',
    'BuildContext',
    'ObjectRegistry',
    'BuildOrchestrator',
    'BuildPlan',
    'BuildResult',
    'ToolExecutor',
    'ToolResult',
]
