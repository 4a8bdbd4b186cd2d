"""
Module loading for contract checks.

Every module under test is loaded through `ModuleLoader.load`, which never
raises: a missing module or a module that throws while it initializes comes
back as a `Failed` value carrying the original error text.
"""

import importlib
import importlib.util
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loaded:
    """A module that imported cleanly."""
    module: Any


@dataclass(frozen=True)
class Failed:
    """A module that could not be imported."""
    message: str


LoadResult = Union[Loaded, Failed]


def looks_like_path(target: str) -> bool:
    """True if `target` should be resolved on disk instead of as a dotted name."""
    if os.sep in target or (os.altsep and os.altsep in target):
        return True
    if target.endswith(".py") or target in (".", ".."):
        return True
    return False


def module_name_for_path(path: Path) -> tuple[Path, str]:
    """
    Resolve a filesystem location to an import root and a dotted module name.

    `path` may point at a package directory, a `.py` file, or a module path
    without its suffix (`pkg/shim` for `pkg/shim.py` or `pkg/shim/`). Parent
    directories are folded into the dotted name for as long as they carry an
    `__init__.py`; the first one that does not becomes the import root.

    Args:
        path: Location of the module

    Returns:
        (import root, dotted module name)
    """
    path = Path(path).resolve()
    parts = [path.stem if path.suffix == ".py" else path.name]
    current = path.parent

    while (current / "__init__.py").exists() and current.parent != current:
        parts.insert(0, current.name)
        current = current.parent

    return current, ".".join(parts)


def package_directory(name: str) -> Path | None:
    """Locate the directory of an importable module without importing it."""
    try:
        spec = importlib.util.find_spec(name)
    except (ImportError, ValueError):
        return None
    if spec is None:
        return None
    if spec.submodule_search_locations:
        return Path(list(spec.submodule_search_locations)[0])
    if spec.origin and spec.has_location:
        return Path(spec.origin).parent
    return None


class ShadowedModuleError(ImportError):
    """A path target's dotted name is taken by a module loaded from elsewhere."""


def module_locations(module: Any) -> list[Path]:
    """Where a loaded module came from: its `__path__` entries, else its `__file__`."""
    search = getattr(module, "__path__", None)
    if search is not None and not isinstance(search, str):
        try:
            entries = [entry for entry in search if isinstance(entry, str)]
        except TypeError:
            entries = []
        if entries:
            return [Path(entry).resolve() for entry in entries]
    location = getattr(module, "__file__", None)
    if isinstance(location, str) and location:
        return [Path(location).resolve()]
    return []


def shadowing_module(root: Path, name: str) -> tuple[str, Path] | None:
    """
    Find a module in `sys.modules` that would be returned for `name` instead of
    the one under `root`.

    Every loaded prefix of `name` is checked, so a companion whose export
    carries no location is still caught through its package.

    Returns:
        (dotted name, location) of the conflicting module, or None
    """
    parts = name.split(".")
    for i in range(len(parts), 0, -1):
        dotted = ".".join(parts[:i])
        module = sys.modules.get(dotted)
        if module is None:
            continue
        locations = module_locations(module)
        if not locations:
            continue
        expected = Path(root).resolve().joinpath(*parts[:i])
        allowed = {expected, expected / "__init__.py", expected.with_suffix(".py")}
        if not any(location in allowed for location in locations):
            return dotted, locations[0]
    return None


def describe_error(error: BaseException) -> str:
    """Render an exception as `Type: message`."""
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


class ModuleLoader:
    """
    Loads modules by dotted name or filesystem path.

    Path targets have their import root prepended to `sys.path` once, so a
    companion loaded here is the same object the package sees through its own
    relative imports.
    """

    def load(self, target: str | Path) -> LoadResult:
        """
        Load a module and convert any failure into a `Failed` value.

        A path target only loads the module at that path: if its dotted name
        already belongs to a module from another location (a stdlib module of
        the same name, or a same-named package validated earlier), the result
        is `Failed` instead of the other module.

        Args:
            target: Dotted module name, or a path to a package/module

        Returns:
            Loaded(module) or Failed(message)
        """
        try:
            if isinstance(target, Path) or looks_like_path(target):
                root, name = module_name_for_path(Path(target))
                self._ensure_not_shadowed(root, name)
                self._add_search_path(root)
                module = importlib.import_module(name)
                self._ensure_not_shadowed(root, name)
            else:
                name = target
                module = importlib.import_module(name)
        except (Exception, SystemExit) as e:
            logger.debug("Failed to load %s: %s", target, e)
            return Failed(message=describe_error(e))

        logger.debug("Loaded %s as %s", target, name)
        return Loaded(module=module)

    def load_companion(self, directory: Path, name: str) -> LoadResult:
        """Load the companion module `name` that lives in `directory`."""
        return self.load(Path(directory) / name)

    @staticmethod
    def _ensure_not_shadowed(root: Path, name: str) -> None:
        conflict = shadowing_module(root, name)
        if conflict is not None:
            dotted, location = conflict
            raise ShadowedModuleError(f"{dotted} is shadowed by already-loaded module at {location}")

    @staticmethod
    def _add_search_path(root: Path) -> None:
        entry = str(root)
        if entry not in sys.path:
            sys.path.insert(0, entry)
            importlib.invalidate_caches()
