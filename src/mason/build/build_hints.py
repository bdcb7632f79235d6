"""Build-system directives.

Mason runs as a Cargo build script, so everything it tells the invoking
build system is a `cargo:` line on stdout. Diagnostics go to the log
(stderr) and never to this stream.
"""

import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union


class BuildHints:
    """Writes cargo directives and remembers what was written."""

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize hint emitter.

        Args:
            stream: Where to write directives (defaults to sys.stdout at emit time)
        """
        self.stream = stream
        self.emitted: List[str] = []

    def emit(self, directive: str) -> None:
        line = f"cargo:{directive}"
        self.emitted.append(line)
        out = self.stream if self.stream is not None else sys.stdout
        print(line, file=out, flush=True)

    def rerun_if_changed(self, path: Union[str, Path]) -> None:
        """Ask the build system to rerun Mason when this input changes."""
        self.emit(f"rerun-if-changed={path}")

    def link_search(self, directory: Union[str, Path]) -> None:
        """Add a directory to the library search path."""
        self.emit(f"rustc-link-search={directory}")

    def link_static(self, name: str) -> None:
        """Link statically against lib<name>.a."""
        self.emit(f"rustc-link-lib=static={name}")

    def link_directives(self) -> List[str]:
        """Directives emitted so far that affect linking."""
        return [line for line in self.emitted if line.startswith("cargo:rustc-link-")]
