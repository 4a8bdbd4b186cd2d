"""
Probe scripts run in a fresh interpreter by the side-effect prober.

Each probe runs with the package under test as its working directory, puts a
recording stand-in where a `shim` module would be imported from, imports
`auto`, and reports through its exit status:

    0  every expected shim was invoked
    1  a shim was not invoked
    2  importing `auto` raised
"""

import sys
import traceback
from pathlib import Path

from shim_api.validator.loader import module_name_for_path

EXIT_OK = 0
EXIT_NOT_INVOKED = 1
EXIT_IMPORT_ERROR = 2


class RecordingShim:
    """Stands in for a shim module and remembers whether it was called."""

    def __init__(self, name: str):
        self.name = name
        self.called = False

    def __call__(self, *args, **kwargs):
        self.called = True

    def __getattr__(self, attr: str):
        # `from .shim import shim` resolves to the stand-in too
        if attr.startswith("__"):
            raise AttributeError(attr)
        return self


def prepare_package(directory: Path) -> str:
    """Make the package in `directory` importable and return its dotted name."""
    directory = directory.resolve()
    root, name = module_name_for_path(directory)
    sys.path[:] = [p for p in sys.path if p not in ("", str(directory))]
    sys.path.insert(0, str(root))
    return name


def install_recorder(module_name: str) -> RecordingShim:
    recorder = RecordingShim(module_name)
    sys.modules[module_name] = recorder
    return recorder


def import_auto(package: str) -> int | None:
    """Import `<package>.auto`; returns an exit status if that failed."""
    import importlib

    try:
        importlib.import_module(f"{package}.auto")
    except (Exception, SystemExit):
        traceback.print_exc()
        return EXIT_IMPORT_ERROR
    return None
