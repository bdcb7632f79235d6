"""
Build context and object registry.

A BuildContext is created once per run by the orchestrator and passed
explicitly to every stage. The ObjectRegistry inside it is the single record
of which object files the archive will contain.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Set, Union

from ..config.target_specs import Target
from ..errors import IntegrityError
from ..packages.toolchain import Toolchain
from .build_hints import BuildHints
from .tool_executor import ToolExecutor

DEFAULT_ARCHIVE_NAME = "hv"


class ObjectRegistry:
    """
    Set of object files produced during a run, by absolute path.

    Each path may be registered once. A second registration means two inputs
    would write the same object file, which is never recoverable.

    Iteration order is unspecified; the archive index makes symbol lookup
    independent of the order objects are added in.
    """

    def __init__(self):
        self._objects: Set[str] = set()

    def register(self, path: Union[str, Path]) -> str:
        """
        Add an object file to the registry.

        Args:
            path: Object file path

        Returns:
            The absolute path string that was registered

        Raises:
            IntegrityError: If the path is already registered
        """
        key = str(Path(path).absolute())
        if key in self._objects:
            raise IntegrityError(
                f"Cannot register object {key} - an object already exists in that location"
            )
        self._objects.add(key)
        logging.debug(f"Registered object {key}")
        return key

    def paths(self) -> List[str]:
        """Registered paths, sorted for display."""
        return sorted(self._objects)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, Path)):
            return str(Path(path).absolute()) in self._objects
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)


@dataclass
class BuildContext:
    """Shared state of one build run."""

    output_dir: Path
    target: Target
    toolchain: Toolchain
    executor: ToolExecutor = field(default_factory=ToolExecutor)
    registry: ObjectRegistry = field(default_factory=ObjectRegistry)
    hints: BuildHints = field(default_factory=BuildHints)
    archive_name: str = DEFAULT_ARCHIVE_NAME

    def object_path(self, leafname: str) -> Path:
        """Path of the object file generated for an input's leaf name."""
        return self.output_dir / f"{leafname}.o"

    @property
    def archive_path(self) -> Path:
        return self.output_dir / f"lib{self.archive_name}.a"
