import itertools
import sys

from . import implementation


def get_polyfill():
    return getattr(itertools, "pairwise", implementation)


sys.modules[__name__] = get_polyfill
