import itertools
import sys

from . import implementation


def get_polyfill():
    return getattr(itertools, "batched", implementation)


sys.modules[__name__] = get_polyfill
