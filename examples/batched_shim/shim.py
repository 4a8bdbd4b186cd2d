import itertools
import sys

from . import polyfill as get_polyfill


def shim():
    polyfill = get_polyfill()
    if getattr(itertools, "batched", None) is not polyfill:
        itertools.batched = polyfill
    return polyfill


sys.modules[__name__] = shim
