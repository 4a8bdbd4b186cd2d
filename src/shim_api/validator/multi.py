"""
Root-level checks for multi-package shims.

A multi-package root is a package whose `__all__` lists its sub-packages in
order. Each sub-package lives in a directory of the same name next to the
root's `__init__.py` and is validated as a single package by core.py.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from shim_api.validator.loader import Failed, Loaded, ModuleLoader
from shim_api.validator.types import PackageTree, UnitReport

# Directories that never hold sub-packages
RESERVED_DIRS = {"helpers", "test"}
DEPENDENCY_DIRS = {"node_modules", "__pycache__"}


def eligible_subdirectories(directory: Path) -> list[str]:
    """
    List the directories of a multi-package root that should be sub-packages.

    Hidden entries, dependency/cache directories and the reserved `helpers`
    and `test` directories are left out. Names come back sorted.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []

    names = []
    for entry in directory.iterdir():
        name = entry.name
        if name.startswith("."):
            continue
        if name in DEPENDENCY_DIRS or name in RESERVED_DIRS or name.endswith(".egg-info"):
            continue
        if entry.is_dir():
            names.append(name)
    return sorted(names)


def is_ordered_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def enumerable_keys(value: Any) -> list[str]:
    """
    Enumerate the keys a value exposes: indices for sequences, keys for
    mappings, plus any instance attributes hung on the object.
    """
    if isinstance(value, Mapping):
        keys = [str(k) for k in value]
    elif is_ordered_sequence(value):
        keys = [str(i) for i in range(len(value))]
    else:
        keys = []
    keys.extend(str(k) for k in getattr(value, "__dict__", {}))
    return keys


def index_keys(value: Any) -> list[str]:
    """The canonical `"0".."n-1"` key list for a sized value."""
    try:
        return [str(i) for i in range(len(value))]
    except TypeError:
        return []


def declared_subpackages(module: Any) -> Any:
    return getattr(module, "__all__", None)


def root_directory(module: Any, fallback: Path) -> Path:
    """Directory holding the root's `__init__.py`, where sub-packages live."""
    location = getattr(module, "__file__", None)
    if location:
        return Path(location).resolve().parent
    return Path(fallback)


def check_root(
    tree: PackageTree,
    module: Any,
    report: UnitReport,
    loader: ModuleLoader,
) -> None:
    """
    Run the structural checks on a multi-package root.

    The auto-install check is not run here; it is scheduled after the
    sub-packages by the caller.

    Args:
        tree: The root and its declared children (filled in from `__all__`)
        module: The loaded root module
        report: Where assertions go
        loader: Loader used for the root's companions
    """
    directory = tree.root.directory
    exported = declared_subpackages(module)

    report.check(
        "main export is a sequence of sub packages",
        is_ordered_sequence(exported),
        details=f"__all__ is {type(exported).__name__}",
    )

    keys = enumerable_keys(exported)
    expected_keys = index_keys(exported) if is_ordered_sequence(exported) else []
    report.check(
        "main export has no additional properties",
        keys == expected_keys,
        details=f"expected keys {expected_keys}, got {keys}",
    )

    report.check(
        "sequence is not empty",
        is_ordered_sequence(exported) and len(exported) > 0,
    )

    dirs = eligible_subdirectories(directory)
    declared = list(exported) if is_ordered_sequence(exported) else exported
    report.check(
        "main export sub packages match dirs in the package root",
        declared == dirs,
        details=f"expected {dirs}, got {declared}",
    )

    shim = loader.load_companion(directory, "shim")
    if isinstance(shim, Loaded):
        report.check(
            "root shim is callable",
            callable(shim.module),
            details=f"shim is {type(shim.module).__name__}",
        )
    else:
        report.add_fail("root shim is callable", details=f"shim failed to load: {shim.message}")

    implementation = loader.load_companion(directory, "implementation")
    report.check(
        "root lacks an `implementation` module",
        isinstance(implementation, Failed),
        details="implementation loaded",
    )

    if is_ordered_sequence(exported):
        tree.children = [name for name in exported if isinstance(name, str)]
