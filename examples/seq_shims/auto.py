"""Importing this module installs every sub-package shim."""

from . import shim

shim()
