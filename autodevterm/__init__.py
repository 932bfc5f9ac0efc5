"""Installable terminal modules, a module registry and wizard screens."""

__version__ = "0.1.0"