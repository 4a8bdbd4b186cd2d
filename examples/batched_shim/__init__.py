"""
itertools.batched for interpreters that lack it.

    import batched_shim
    list(batched_shim("abcdefg", 3))  # [('a', 'b', 'c'), ('d', 'e', 'f'), ('g',)]

The package object itself is callable and forwards to the best available
implementation, so it is a bound export (check it with `--bound`).
"""

import sys
import types

from . import implementation, polyfill, shim

get_polyfill = polyfill


class _BatchedModule(types.ModuleType):
    def __call__(self, iterable, n):
        return get_polyfill()(iterable, n)


sys.modules[__name__].__class__ = _BatchedModule
