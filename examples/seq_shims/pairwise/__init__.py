"""itertools.pairwise for interpreters that lack it."""

import sys
import types

from . import implementation, polyfill, shim

get_polyfill = polyfill


class _PairwiseModule(types.ModuleType):
    def __call__(self, iterable):
        return get_polyfill()(iterable)


sys.modules[__name__].__class__ = _PairwiseModule
