"""
Resolution of the packages to validate.

Module names given on the command line are used as-is. With none given, the
project's `pyproject.toml` in the working directory names the package.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli

from shim_api.config.settings import ValidationConfiguration
from shim_api.validator.loader import looks_like_path, package_directory
from shim_api.validator.types import PackageReference

MANIFEST_NAME = "pyproject.toml"
TOOL_TABLE = "shim-api"


class ManifestError(Exception):
    """A default target could not be taken from the project manifest."""
    exit_code = 1


class ManifestNotFoundError(ManifestError):
    exit_code = 1

    def __init__(self, path: Path):
        super().__init__(
            f"Error: No {MANIFEST_NAME} found in {path.parent}\n"
            f"at least one module name is required when not run in a directory with a {MANIFEST_NAME}"
        )


class ManifestNameError(ManifestError):
    exit_code = 2

    def __init__(self, path: Path):
        super().__init__(f'Error: No "name" found in the [project] table of {path}')


@dataclass
class Manifest:
    """The parts of pyproject.toml that shim-api reads."""
    path: Path
    name: str
    settings: dict[str, Any]

    @property
    def import_name(self) -> str:
        return re.sub(r"[-.]+", "_", self.name).lower()

    @property
    def configuration(self) -> ValidationConfiguration:
        return ValidationConfiguration.from_table(self.settings)

    def main_location(self) -> Path:
        """
        Where the project's package lives.

        `[tool.shim-api].main` wins; otherwise the flat and src layouts are
        tried before falling back to the project root.
        """
        root = self.path.parent
        if "main" in self.settings:
            return (root / self.settings["main"]).resolve()
        for candidate in (root / self.import_name, root / "src" / self.import_name):
            if candidate.is_dir():
                return candidate.resolve()
        return root.resolve()


def load_manifest(directory: Path) -> Manifest:
    """
    Read the project manifest from `directory`.

    Raises:
        ManifestNotFoundError: No pyproject.toml (exit status 1)
        ManifestNameError: pyproject.toml has no [project].name (exit status 2)
    """
    path = Path(directory) / MANIFEST_NAME
    if not path.exists():
        raise ManifestNotFoundError(path)

    with open(path, "rb") as f:
        data = tomli.load(f)

    name = data.get("project", {}).get("name")
    if not name:
        raise ManifestNameError(path)

    settings = data.get("tool", {}).get(TOOL_TABLE, {})
    return Manifest(path=path, name=name, settings=settings)


def reference_for(target: str) -> PackageReference:
    """Turn a command-line module argument into a PackageReference."""
    if looks_like_path(target) or Path(target).is_dir():
        path = Path(target).resolve()
        directory = path if path.is_dir() else path.parent
        return PackageReference(name=str(path), directory=directory, label=target)

    directory = package_directory(target)
    if directory is None:
        directory = Path.cwd() / target.replace(".", "/")
    return PackageReference(name=target, directory=directory, label=target)


def resolve_targets(
    names: list[str],
    cwd: Path | None = None,
) -> tuple[list[PackageReference], ValidationConfiguration]:
    """
    Resolve the packages to validate.

    Args:
        names: Module names or paths from the command line
        cwd: Directory searched for pyproject.toml when `names` is empty

    Returns:
        (references, configuration taken from the manifest's [tool.shim-api] table)
    """
    if names:
        return [reference_for(name) for name in names], ValidationConfiguration()

    manifest = load_manifest(cwd or Path.cwd())
    location = manifest.main_location()
    directory = location if location.is_dir() else location.parent
    reference = PackageReference(
        name=str(location),
        directory=directory,
        label=f"{manifest.name} (current directory)",
    )
    return [reference], manifest.configuration
