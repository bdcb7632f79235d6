"""Mason - assemble and package low-level code for linking into a kernel."""

from .errors import (
    ConfigurationError,
    FileSystemError,
    IntegrityError,
    MasonError,
    ToolchainError,
)

__version__ = "0.2.0"

__all__ = [
    "ConfigurationError",
    "FileSystemError",
    "IntegrityError",
    "MasonError",
    "ToolchainError",
    "__version__",
]
