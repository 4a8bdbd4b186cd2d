"""
Run configuration for shim-api.

Provides the check flags and the resolution of packages to validate.
"""

from shim_api.config.settings import ValidationConfiguration
from shim_api.config.manifest import (
    Manifest,
    ManifestError,
    ManifestNameError,
    ManifestNotFoundError,
    load_manifest,
    resolve_targets,
)

__all__ = [
    "ValidationConfiguration",
    "Manifest",
    "ManifestError",
    "ManifestNameError",
    "ManifestNotFoundError",
    "load_manifest",
    "resolve_targets",
]
