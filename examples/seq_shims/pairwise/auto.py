"""Importing this module installs itertools.pairwise."""

from . import shim

shim()
