"""Shared fixtures: shim packages generated on disk with unique import names."""

import builtins
import itertools
import sys
import uuid
from pathlib import Path

import pytest


EXAMPLES_DIR = Path(__file__).parent.parent / "examples"

INIT_TEMPLATE = '''\
import sys
import types

@IMPORTS@


class _ShimModule(types.ModuleType):
    def __call__(self, value):
        return value


sys.modules[__name__].__class__ = _ShimModule
'''

IMPLEMENTATION_TEMPLATE = '''\
import sys


def implementation(value):
    return value


sys.modules[__name__] = @EXPORT@
'''

POLYFILL_TEMPLATE = '''\
import builtins
import sys

@IMPORTS@


def get_polyfill():
    return getattr(builtins, "@GLOBAL@", @FALLBACK@)


sys.modules[__name__] = get_polyfill
'''

SHIM_TEMPLATE = '''\
import builtins
import sys

from . import polyfill as get_polyfill


def shim():
    polyfill = get_polyfill()
    if getattr(builtins, "@GLOBAL@", None) is not polyfill:
        setattr(builtins, "@GLOBAL@", polyfill)
    return polyfill


sys.modules[__name__] = shim
'''

AUTO_TEMPLATE = '''\
from . import shim

shim()
'''

MULTI_INIT_TEMPLATE = '''\
__all__ = @NAMES@
'''

MULTI_SHIM_TEMPLATE = '''\
import importlib
import sys


def shim():
    package = sys.modules[__package__]
    return [importlib.import_module(__package__ + "." + name + ".shim")() for name in package.__all__]


sys.modules[__name__] = shim
'''


def _render(template: str, **values: str) -> str:
    for key, value in values.items():
        template = template.replace(f"@{key}@", value)
    return template


def write_shim_package(
    parent: Path,
    name: str,
    bound: bool = False,
    omit: tuple[str, ...] = (),
    data_implementation: bool = False,
    overrides: dict[str, str] | None = None,
) -> Path:
    """
    Write a package that follows the shim contract.

    Args:
        parent: Directory the package is created in
        name: Package directory name
        bound: Main export is a wrapper, not get_polyfill()
        omit: Companion modules to leave out
        data_implementation: implementation exports a plain value
        overrides: Replacement source per file stem (e.g. {"auto": "..."})
    """
    package = parent / name
    package.mkdir(parents=True)
    global_name = f"_shim_api_test_{uuid.uuid4().hex}"
    present = [c for c in ("implementation", "polyfill", "shim") if c not in omit]

    imports = f"from . import {', '.join(present)}" if present else ""
    if "polyfill" in present:
        imports += "\n\nget_polyfill = polyfill"

    sources = {
        "__init__": _render(INIT_TEMPLATE, IMPORTS=imports),
        "implementation": _render(
            IMPLEMENTATION_TEMPLATE,
            EXPORT="{'value': 42}" if data_implementation else "implementation",
        ),
        "polyfill": _render(
            POLYFILL_TEMPLATE,
            GLOBAL=global_name,
            IMPORTS="from . import implementation" if bound else "",
            FALLBACK="implementation" if bound else "sys.modules[__package__]",
        ),
        "shim": _render(SHIM_TEMPLATE, GLOBAL=global_name),
        "auto": AUTO_TEMPLATE,
    }
    sources.update(overrides or {})

    for stem, source in sources.items():
        if stem in omit:
            continue
        (package / f"{stem}.py").write_text(source)

    return package


def write_multi_package(
    parent: Path,
    name: str,
    declared: list[str],
    on_disk: list[str] | None = None,
    root_implementation: bool = False,
    **sub_options,
) -> Path:
    """Write a multi-package root declaring `declared` with `on_disk` sub-packages."""
    root = parent / name
    root.mkdir(parents=True)
    (root / "__init__.py").write_text(_render(MULTI_INIT_TEMPLATE, NAMES=repr(declared)))
    (root / "shim.py").write_text(MULTI_SHIM_TEMPLATE)
    (root / "auto.py").write_text(AUTO_TEMPLATE)
    if root_implementation:
        (root / "implementation.py").write_text(_render(IMPLEMENTATION_TEMPLATE, EXPORT="implementation"))

    for sub in declared if on_disk is None else on_disk:
        write_shim_package(root, sub, **sub_options)
    return root


def _forget(prefixes: list[str], search_root: Path) -> None:
    for key in list(sys.modules):
        if any(key == p or key.startswith(p + ".") for p in prefixes):
            del sys.modules[key]
    roots = (str(search_root), str(search_root.resolve()))
    sys.path[:] = [p for p in sys.path if not p.startswith(roots)]
    for attr in [a for a in vars(builtins) if a.startswith("_shim_api_test_")]:
        delattr(builtins, attr)


@pytest.fixture
def shim_factory(tmp_path):
    """Create shim packages under tmp_path and unload them afterwards."""
    created = []

    class Factory:
        root = tmp_path

        def unique(self, stem: str = "shimpkg") -> str:
            name = f"{stem}_{uuid.uuid4().hex[:10]}"
            created.append(name)
            return name

        def single(self, name: str | None = None, parent: Path | None = None, **options) -> Path:
            # An explicit name is not unloaded afterwards (it may be a stdlib module)
            return write_shim_package(parent or tmp_path, name or self.unique(), **options)

        def multi(self, declared: list[str], **options) -> Path:
            return write_multi_package(tmp_path, self.unique("multipkg"), declared, **options)

    yield Factory()
    _forget(created, tmp_path)


@pytest.fixture
def restore_itertools():
    """The example packages install into itertools; put it back afterwards."""
    saved = {name: getattr(itertools, name, None) for name in ("batched", "pairwise")}
    before = set(sys.modules)
    yield
    for name, value in saved.items():
        if value is None:
            if hasattr(itertools, name):
                delattr(itertools, name)
        else:
            setattr(itertools, name, value)
    for key in set(sys.modules) - before:
        if key.split(".")[0] in ("batched_shim", "seq_shims"):
            del sys.modules[key]
    sys.path[:] = [p for p in sys.path if p != str(EXAMPLES_DIR.resolve())]
