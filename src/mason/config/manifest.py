"""
mason.toml manifest discovery and parsing.

This module locates the project manifest by walking up from the working
directory, parses it, and merges its default and per-target sections into
the sets of binaries and assembly directories to process.

Example mason.toml:
    [defaults]
    include_files = ["blob.bin"]
    asm_dirs = ["src/common/asm"]

    [target.riscv64gc]
    asm_dirs = ["src/platform-riscv/asm"]

    [target."riscv64gc-unknown-none-elf"]
    include_files = ["boot/dtb.bin"]

Usage:
    path = locate_manifest()
    manifest = Manifest.load(path)
    merged = manifest.merge("riscv64gc-unknown-none-elf")
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import toml

from ..errors import ConfigurationError, FileSystemError
from .target_specs import target_arch

MANIFEST_FILENAME = "mason.toml"

# Upper bound on parent directories visited while searching for the manifest
MAX_SEARCH_STEPS = 100

FIELDS = ("include_files", "asm_dirs")


def locate_manifest(
    start_dir: Optional[Path] = None,
    filename: str = MANIFEST_FILENAME,
    max_steps: int = MAX_SEARCH_STEPS,
) -> Optional[Path]:
    """
    Search upwards from a directory for the manifest file.

    The start directory is examined first, then each parent in turn, until
    the file is found, the filesystem root has been examined, or max_steps
    directories have been examined.

    Args:
        start_dir: Directory to start from (defaults to the current directory)
        filename: Manifest filename to look for
        max_steps: Maximum number of directories to examine

    Returns:
        Path to the manifest, or None if it was not found
    """
    current = Path(start_dir) if start_dir is not None else Path.cwd()
    current = current.absolute()

    for _ in range(max_steps):
        candidate = current / filename
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            return None
        current = parent

    logging.debug(f"Gave up looking for {filename} after {max_steps} directories")
    return None


@dataclass
class ManifestEntry:
    """One section of the manifest: binaries to package and asm dirs to assemble."""

    include_files: List[str] = field(default_factory=list)
    asm_dirs: List[str] = field(default_factory=list)

    @staticmethod
    def from_table(table: Any, where: str) -> "ManifestEntry":
        """
        Build an entry from a parsed manifest table.

        Args:
            table: Parsed TOML table for the section
            where: Section name, for error messages

        Returns:
            ManifestEntry with absent fields left empty

        Raises:
            ConfigurationError: If the section or one of its fields is malformed
        """
        if not isinstance(table, dict):
            raise ConfigurationError(f"Manifest section '{where}' must be a table")

        values: Dict[str, List[str]] = {}
        for key in FIELDS:
            value = table.get(key, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigurationError(
                    f"Manifest field '{where}.{key}' must be a list of path strings"
                )
            values[key] = list(value)

        return ManifestEntry(**values)


@dataclass
class MergedPaths:
    """Deduplicated paths to process. Both collections are sets."""

    include_files: Set[str] = field(default_factory=set)
    asm_dirs: Set[str] = field(default_factory=set)

    def add_entry(self, entry: Optional[ManifestEntry]) -> None:
        """Union a manifest entry into the sets. None contributes nothing."""
        if entry is None:
            return
        self.add_paths(entry.include_files, entry.asm_dirs)

    def add_paths(
        self,
        include_files: Iterable[str] = (),
        asm_dirs: Iterable[str] = (),
    ) -> None:
        """Union raw path lists into the sets."""
        self.include_files.update(include_files)
        self.asm_dirs.update(asm_dirs)

    def is_empty(self) -> bool:
        return not self.include_files and not self.asm_dirs


def merge_entries(*entries: Optional[ManifestEntry]) -> MergedPaths:
    """
    Merge manifest entries into one pair of path sets.

    Args:
        entries: Entries to merge; None entries are skipped

    Returns:
        MergedPaths holding the union of every entry
    """
    merged = MergedPaths()
    for entry in entries:
        merged.add_entry(entry)
    return merged


class Manifest:
    """
    Parsed mason.toml manifest.

    Holds the optional [defaults] entry and the per-target entries from the
    [target] table, keyed exactly as written in the file.
    """

    def __init__(
        self,
        path: Optional[Path],
        defaults: Optional[ManifestEntry],
        targets: Dict[str, ManifestEntry],
    ):
        self.path = path
        self.defaults = defaults
        self.targets = targets

    @staticmethod
    def load(path: Path) -> "Manifest":
        """
        Load and parse a manifest file.

        Args:
            path: Path to mason.toml

        Returns:
            Parsed Manifest

        Raises:
            ConfigurationError: If the file doesn't exist or cannot be parsed
            FileSystemError: If the file exists but cannot be read
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError(f"Manifest not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Cannot read manifest {path}: {e}") from e

        try:
            data = toml.loads(text)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Failed to parse {path}: {e}") from e

        return Manifest.from_dict(data, path)

    @staticmethod
    def from_dict(data: Dict[str, Any], path: Optional[Path] = None) -> "Manifest":
        """
        Build a manifest from an already-parsed tree.

        Raises:
            ConfigurationError: If [defaults] or [target] is not a table
        """
        defaults = None
        if "defaults" in data:
            defaults = ManifestEntry.from_table(data["defaults"], "defaults")

        target_table = data.get("target", {})
        if not isinstance(target_table, dict):
            raise ConfigurationError("Manifest section 'target' must be a table")

        targets = {
            key: ManifestEntry.from_table(table, f"target.{key}")
            for key, table in target_table.items()
        }
        return Manifest(path, defaults, targets)

    def entry_for(self, key: str) -> Optional[ManifestEntry]:
        """Get the target entry with exactly this key, if any."""
        return self.targets.get(key)

    def entries_for(self, triple: str) -> List[ManifestEntry]:
        """
        Get the target entries that apply to a build triple.

        An entry keyed by the full triple applies, as does an entry keyed by
        the triple's architecture component. Both apply if both exist.
        """
        keys = [triple]
        arch = target_arch(triple)
        if arch and arch != triple:
            keys.append(arch)

        entries = [e for e in map(self.entry_for, keys) if e is not None]
        if not entries and self.targets:
            logging.debug(
                f"No [target] section matches '{triple}'; "
                + f"manifest defines: {', '.join(sorted(self.targets))}"
            )
        return entries

    def merge(self, triple: str) -> MergedPaths:
        """
        Merge the defaults and the target-specific entries for a triple.

        Returns:
            MergedPaths with the union of all applicable entries
        """
        return merge_entries(self.defaults, *self.entries_for(triple))
