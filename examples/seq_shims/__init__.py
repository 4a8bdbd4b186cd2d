"""
A multi-package root: one sub-package per itertools function.

Check it with `shim-api examples/seq_shims --multi --bound`.
"""

__all__ = ["batched", "pairwise"]
