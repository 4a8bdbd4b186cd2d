"""Importing this module installs itertools.batched."""

from . import shim

shim()
