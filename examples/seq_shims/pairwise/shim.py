import itertools
import sys

from . import polyfill as get_polyfill


def shim():
    polyfill = get_polyfill()
    if getattr(itertools, "pairwise", None) is not polyfill:
        itertools.pairwise = polyfill
    return polyfill


sys.modules[__name__] = shim
