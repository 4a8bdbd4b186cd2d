"""
shim-api: Contract checks for shim/polyfill packages.

Verifies that a package exports a callable wired to its `implementation`,
`polyfill` and `shim` companions, and that its `auto` module installs the shim.
"""

__version__ = "0.1.0"

from shim_api.validator import run_validation, format_results
from shim_api.config import ValidationConfiguration, resolve_targets

__all__ = [
    "run_validation",
    "format_results",
    "ValidationConfiguration",
    "resolve_targets",
]
