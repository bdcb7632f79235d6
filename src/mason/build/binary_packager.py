"""Binary Packager.

This module turns raw binary files (fonts, device trees, boot images and
the like) into relocatable objects that can be archived and linked.

Linking a binary with `ld -r --format=binary` defines three symbols marking
where the data starts and ends and how large it is:

    _binary_<mangled path>_start
    _binary_<mangled path>_end
    _binary_<mangled path>_size

The mangled path is the full path given to ld, which drags the project
layout into the symbol name. The packager renames them to use only the
file's leaf name, so `src/blobs/font.bin` is reachable from code as
`_binary_font_bin_start` and friends wherever it lives in the tree.
"""

import logging
import os
import string
from pathlib import Path
from typing import List, Tuple, Union

from ..errors import FileSystemError
from .context import BuildContext

BOUNDARY_SUFFIXES = ("start", "end", "size")
ALNUM = frozenset(string.ascii_letters + string.digits)


def mangle(name: str) -> str:
    """Replace every byte ld would not keep in a symbol with '_'.

    ld works on the encoded path, so a multi-byte character becomes one
    underscore per byte: 'données/font.bin' -> 'donn__es_font_bin'
    """
    return "".join(
        chr(b) if chr(b) in ALNUM else "_" for b in os.fsencode(name)
    )


def symbol_prefix(binary_path: Union[str, Path]) -> str:
    """Prefix of the symbols ld generates for a binary, from its full path."""
    return f"_binary_{mangle(str(binary_path))}_"


def renamed_prefix(binary_path: Union[str, Path]) -> str:
    """Prefix of the renamed symbols, from the leaf name with dots replaced."""
    return f"_binary_{Path(binary_path).name.replace('.', '_')}_"


def boundary_symbols(binary_path: Union[str, Path]) -> List[Tuple[str, str]]:
    """
    Get the (generated, renamed) symbol pairs for a binary file.

    Args:
        binary_path: Path to the binary, exactly as passed to the linker

    Returns:
        List of (old, new) pairs for the start, end and size symbols
    """
    old = symbol_prefix(binary_path)
    new = renamed_prefix(binary_path)
    return [(f"{old}{suffix}", f"{new}{suffix}") for suffix in BOUNDARY_SUFFIXES]


def package_binary(binary_path: Union[str, Path], context: BuildContext) -> Path:
    """
    Convert a binary file into a linkable object and register it.

    Args:
        binary_path: Path to the binary file to package
        context: Build context

    Returns:
        Path to the generated object file

    Raises:
        FileSystemError: If the binary does not exist
        ToolchainError: If linking or symbol renaming fails
        IntegrityError: If another input already produced this object
    """
    source = Path(binary_path)
    if not source.is_file():
        raise FileSystemError(f"Binary file not found: {binary_path}")

    object_file = context.object_path(source.name)
    logging.debug(f"Packaging {binary_path} -> {object_file}")

    # Generate an object file with ld's path-derived symbols
    context.executor.link_binary(context.toolchain.ld_exec, binary_path, object_file)

    # Swap the path-derived symbol names for leaf-derived ones
    context.executor.redefine_symbols(
        context.toolchain.objcopy_exec, object_file, boundary_symbols(binary_path)
    )

    context.registry.register(object_file)
    context.hints.rerun_if_changed(binary_path)
    return object_file
