"""Error types for Mason.

Every failure in a Mason run is fatal. Stages raise one of the tagged
subclasses below and the CLI renders it once, at the top level, before
exiting with a nonzero status.
"""


class MasonError(Exception):
    """Base class for all Mason failures."""

    category = "error"


class ConfigurationError(MasonError):
    """Raised for bad or missing configuration.

    Covers unrecognized target triples, missing environment inputs, a
    manifest that cannot be found or parsed, and malformed manifest fields.
    """

    category = "configuration"


class FileSystemError(MasonError):
    """Raised when an input path is missing or unreadable."""

    category = "filesystem"


class ToolchainError(MasonError):
    """Raised when an external tool cannot be run or exits nonzero."""

    category = "toolchain"


class IntegrityError(MasonError):
    """Raised when two inputs would produce the same output object."""

    category = "integrity"
