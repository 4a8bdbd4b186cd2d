"""
Contract validation for shim packages.

This module checks that a package follows the shim API:
- Main export is callable and is get_polyfill() unless bound
- implementation, polyfill and shim companions are wired to the main export
- shim() returns get_polyfill()
- Importing auto installs the shim (checked in a fresh interpreter)
- Multi-package roots list their sub-packages in __all__
"""

from shim_api.validator.types import (
    Assertion,
    Outcome,
    PackageReference,
    PackageTree,
    UnitReport,
)
from shim_api.validator.loader import Failed, Loaded, LoadResult, ModuleLoader
from shim_api.validator.core import (
    run_validation,
    validate_package,
    validate_tree,
    validate_unit,
)
from shim_api.validator.multi import eligible_subdirectories, enumerable_keys
from shim_api.validator.probe import probe_auto
from shim_api.validator.report import format_results, format_tap, summarize

__all__ = [
    # Types
    "Assertion",
    "Outcome",
    "PackageReference",
    "PackageTree",
    "UnitReport",
    # Loading
    "Failed",
    "Loaded",
    "LoadResult",
    "ModuleLoader",
    # Validation
    "run_validation",
    "validate_package",
    "validate_tree",
    "validate_unit",
    "summarize",
    "eligible_subdirectories",
    "enumerable_keys",
    "probe_auto",
    # Reporting
    "format_results",
    "format_tap",
]
