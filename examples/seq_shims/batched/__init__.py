"""itertools.batched for interpreters that lack it."""

import sys
import types

from . import implementation, polyfill, shim

get_polyfill = polyfill


class _BatchedModule(types.ModuleType):
    def __call__(self, iterable, n):
        return get_polyfill()(iterable, n)


sys.modules[__name__].__class__ = _BatchedModule
