"""Pure-Python itertools.batched."""

import sys
from itertools import islice


def batched(iterable, n):
    if n < 1:
        raise ValueError("n must be at least one")
    it = iter(iterable)
    while batch := tuple(islice(it, n)):
        yield batch


sys.modules[__name__] = batched
