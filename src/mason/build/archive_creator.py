"""Archive Creator.

This module bundles every registered object file into the static archive
the downstream linker consumes, then tells the build system where to find
it.

Design:
    - One archiver invocation covering every registered object
    - Deterministic archive members (no timestamps or uids)
    - Object order is irrelevant; the archive index resolves symbols
"""

import logging
from pathlib import Path

from .context import BuildContext


class ArchiveCreator:
    """Creates lib<name>.a from the objects in a build context."""

    def create_archive(self, context: BuildContext) -> Path:
        """Create the static archive and emit the link directives.

        Args:
            context: Build context holding the registry and toolchain

        Returns:
            Path to the generated archive

        Raises:
            ToolchainError: If the archiver fails
        """
        archive_path = context.archive_path
        archive_path.parent.mkdir(parents=True, exist_ok=True)

        # Stale members from a previous run must not survive
        if archive_path.exists():
            archive_path.unlink()

        objects = list(context.registry)
        logging.info(f"Creating {archive_path.name} from {len(objects)} object files")

        context.executor.archive(context.toolchain.ar_exec, archive_path, objects)

        context.hints.link_search(context.output_dir)
        context.hints.link_static(context.archive_name)
        return archive_path
