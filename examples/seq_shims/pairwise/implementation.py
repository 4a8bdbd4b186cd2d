"""Pure-Python itertools.pairwise."""

import sys


def pairwise(iterable):
    it = iter(iterable)
    for previous in it:
        for current in it:
            yield previous, current
            previous = current


sys.modules[__name__] = pairwise
