"""Dockside installer — provisions a host for the Dockside desktop manager."""

__version__ = "0.1.0"
