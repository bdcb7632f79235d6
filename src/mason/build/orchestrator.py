"""
Build orchestration for Mason.

This module coordinates a complete run, from the target triple to the
static archive:
- Target resolution (build triple -> toolchain parameters)
- Manifest discovery and merging (mason.toml)
- Binary packaging (ld + objcopy)
- Assembly (as)
- Archiving (ar) and link directives
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from tqdm import tqdm

from ..config.manifest import (
    MANIFEST_FILENAME,
    MAX_SEARCH_STEPS,
    Manifest,
    MergedPaths,
    locate_manifest,
)
from ..config.target_specs import Target, resolve_target
from ..errors import ConfigurationError, FileSystemError
from ..packages.toolchain import DEFAULT_SUFFIX, Toolchain
from .archive_creator import ArchiveCreator
from .assembler import assemble_directory
from .binary_packager import package_binary
from .build_hints import BuildHints
from .context import DEFAULT_ARCHIVE_NAME, BuildContext
from .tool_executor import ToolExecutor


@dataclass
class BuildPlan:
    """Everything resolved before any tool runs."""

    triple: str
    target: Target
    manifest_path: Path
    paths: MergedPaths


@dataclass
class BuildResult:
    """Result of a complete run."""

    archive_path: Path
    objects: List[str]
    target: Target
    manifest_path: Path
    build_time: float
    directives: List[str] = field(default_factory=list)


class BuildOrchestrator:
    """
    Orchestrates a complete Mason run.

    Phases run strictly in order and each external tool finishes before the
    next one starts:
    1. Resolve the target triple
    2. Locate and merge mason.toml
    3. Package each binary into an object
    4. Assemble each assembly directory
    5. Archive every object into lib<name>.a

    Any failure raises a MasonError subclass and aborts the run.

    Example usage:
        orchestrator = BuildOrchestrator()
        result = orchestrator.build(
            triple="riscv64gc-unknown-none-elf",
            output_dir=Path(os.environ["OUT_DIR"]),
        )
    """

    def __init__(
        self,
        executor: Optional[ToolExecutor] = None,
        hints: Optional[BuildHints] = None,
        show_progress: bool = False,
    ):
        """
        Initialize build orchestrator.

        Args:
            executor: Tool executor (defaults to a subprocess-backed one)
            hints: Build-system directive emitter (defaults to stdout)
            show_progress: Show a progress bar on stderr
        """
        self.executor = executor or ToolExecutor()
        self.hints = hints or BuildHints()
        self.show_progress = show_progress

    def plan(
        self,
        triple: str,
        start_dir: Optional[Path] = None,
        extra_files: Iterable[str] = (),
        extra_asm_dirs: Iterable[str] = (),
        max_steps: int = MAX_SEARCH_STEPS,
    ) -> BuildPlan:
        """
        Resolve the target and the merged input sets without running tools.

        Raises:
            ConfigurationError: If the triple is unsupported or the manifest
                is missing or malformed
        """
        target = resolve_target(triple)

        manifest_path = locate_manifest(start_dir, MANIFEST_FILENAME, max_steps)
        if manifest_path is None:
            raise ConfigurationError(
                f"Cannot find {MANIFEST_FILENAME} in "
                + f"{start_dir or Path.cwd()} or its parent directories"
            )
        logging.debug(f"Using manifest {manifest_path}")

        manifest = Manifest.load(manifest_path)
        paths = manifest.merge(triple)
        paths.add_paths(extra_files, extra_asm_dirs)
        if paths.is_empty():
            logging.warning(
                f"Nothing to build for {triple}: {manifest_path} lists no "
                + "include_files or asm_dirs for it; the archive will be empty"
            )

        return BuildPlan(triple=triple, target=target, manifest_path=manifest_path, paths=paths)

    def build(
        self,
        triple: str,
        output_dir: Path,
        start_dir: Optional[Path] = None,
        extra_files: Iterable[str] = (),
        extra_asm_dirs: Iterable[str] = (),
        archive_name: str = DEFAULT_ARCHIVE_NAME,
        toolchain_suffix: str = DEFAULT_SUFFIX,
        toolchain_dir: Optional[Path] = None,
        max_steps: int = MAX_SEARCH_STEPS,
    ) -> BuildResult:
        """
        Execute a complete run.

        Args:
            triple: Build target triple
            output_dir: Directory for objects and the archive
            start_dir: Where to start looking for mason.toml (defaults to cwd)
            extra_files: Binaries to package in addition to the manifest's
            extra_asm_dirs: Assembly directories in addition to the manifest's
            archive_name: Archive is written as lib<archive_name>.a
            toolchain_suffix: Middle part of the binutils names
            toolchain_dir: Directory holding binutils (defaults to PATH lookup)
            max_steps: Bound on the manifest search

        Returns:
            BuildResult describing the archive

        Raises:
            MasonError: If any phase fails
        """
        start_time = time.time()

        plan = self.plan(triple, start_dir, extra_files, extra_asm_dirs, max_steps)
        self.hints.rerun_if_changed(plan.manifest_path)

        output_dir = Path(output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot create output directory {output_dir}: {e}") from e

        context = BuildContext(
            output_dir=output_dir,
            target=plan.target,
            toolchain=Toolchain.from_target(plan.target, toolchain_suffix, toolchain_dir),
            executor=self.executor,
            hints=self.hints,
            archive_name=archive_name,
        )

        logging.info(
            f"Building for {triple}: {len(plan.paths.include_files)} binaries, "
            + f"{len(plan.paths.asm_dirs)} assembly directories"
        )

        work: List[Tuple[str, str]] = [("binary", p) for p in sorted(plan.paths.include_files)]
        work.extend(("asm", d) for d in sorted(plan.paths.asm_dirs))

        with tqdm(
            total=len(work),
            desc="mason",
            unit="input",
            file=sys.stderr,
            disable=not self.show_progress,
        ) as progress_bar:
            for kind, path in work:
                if kind == "binary":
                    package_binary(path, context)
                else:
                    assemble_directory(path, context)
                progress_bar.update(1)

        archive_path = ArchiveCreator().create_archive(context)

        return BuildResult(
            archive_path=archive_path,
            objects=context.registry.paths(),
            target=plan.target,
            manifest_path=plan.manifest_path,
            build_time=time.time() - start_time,
            directives=self.hints.link_directives(),
        )
