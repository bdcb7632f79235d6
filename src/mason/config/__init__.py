"""Configuration modules for Mason: target specs and the mason.toml manifest."""

from .manifest import (
    MANIFEST_FILENAME,
    Manifest,
    ManifestEntry,
    MergedPaths,
    locate_manifest,
    merge_entries,
)
from .target_specs import (
    TARGET_SPECS,
    Target,
    get_target_spec,
    resolve_target,
    supported_architectures,
)

__all__ = [
    "MANIFEST_FILENAME",
    "Manifest",
    "ManifestEntry",
    "MergedPaths",
    "locate_manifest",
    "merge_entries",
    "TARGET_SPECS",
    "Target",
    "get_target_spec",
    "resolve_target",
    "supported_architectures",
]
