from importlib import import_module

from covmerge._meta import __version__, logger

core = import_module("covmerge.core")

__all__ = ["__version__", "core", "logger"]
