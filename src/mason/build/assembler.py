"""
Assembly source discovery and assembly.

This module handles:
- Scanning a directory (non-recursively) for .s assembly sources
- Deriving each object's name from the source's leaf name
- Running the target's GNU assembler with architecture, ABI and width symbols
"""

import logging
import string
from pathlib import Path
from typing import List, Optional, Union

from ..errors import FileSystemError
from .context import BuildContext

ASM_SUFFIX = ".s"
LEAF_CHARS = frozenset(string.ascii_letters + string.digits + "_")

# Symbols defined for every assembled file, visible to .if/.ifdef in sources
PTR_WIDTH_SYMBOL = "ptrwidth"
FLT_WIDTH_SYMBOL = "fltwidth"


def asm_leaf_name(filename: str) -> Optional[str]:
    """
    Get the object leaf name for an assembly source filename.

    Accepts names made of letters, digits and underscores ending in '.s'.
    'start.s' -> 'start'; 'README.md', 'start.S' and '.s' are rejected.

    Args:
        filename: Filename (not a path) to check

    Returns:
        Name without the extension, or None if it is not an assembly source
    """
    if not filename.endswith(ASM_SUFFIX):
        return None
    stem = filename[: -len(ASM_SUFFIX)]
    if not stem or not all(c in LEAF_CHARS for c in stem):
        return None
    return stem


def discover_sources(directory: Union[str, Path]) -> List[Path]:
    """
    Find the assembly sources directly inside a directory.

    Subdirectories and files that are not assembly sources are skipped.

    Args:
        directory: Directory to scan

    Returns:
        Source files sorted by name (may be empty)

    Raises:
        FileSystemError: If the directory doesn't exist or can't be read
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileSystemError(f"Cannot assemble directory {directory}: not found")

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FileSystemError(f"Cannot assemble directory {directory}: {e}") from e

    sources = [
        entry for entry in entries
        if entry.is_file() and asm_leaf_name(entry.name) is not None
    ]
    return sorted(sources, key=lambda p: p.name)


def assemble_file(source: Path, context: BuildContext) -> Path:
    """
    Assemble one source file into <output_dir>/<leaf>.o and register it.

    Raises:
        ToolchainError: If the assembler fails
        IntegrityError: If another input already produced this object
    """
    leafname = asm_leaf_name(source.name)
    if leafname is None:
        raise FileSystemError(f"Not an assembly source: {source}")

    target = context.target
    object_file = context.object_path(leafname)

    context.executor.assemble(
        context.toolchain.as_exec,
        source,
        object_file,
        march=target.cpu_arch,
        mabi=target.abi,
        defsyms={
            PTR_WIDTH_SYMBOL: target.ptr_width,
            FLT_WIDTH_SYMBOL: target.flt_width,
        },
    )

    context.registry.register(object_file)
    context.hints.rerun_if_changed(source)
    return object_file


def assemble_directory(directory: Union[str, Path], context: BuildContext) -> List[Path]:
    """
    Assemble every assembly source in a directory.

    Args:
        directory: Directory of .s files
        context: Build context

    Returns:
        Object files produced (empty for a directory with no sources)

    Raises:
        FileSystemError: If the directory doesn't exist
        ToolchainError: If any file fails to assemble
        IntegrityError: If two sources map to the same object
    """
    sources = discover_sources(directory)
    logging.debug(f"Found {len(sources)} assembly sources in {directory}")

    # New files in the directory should trigger a rerun too
    context.hints.rerun_if_changed(directory)

    return [assemble_file(source, context) for source in sources]
