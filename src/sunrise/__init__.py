"""Sunrise - pick a Compute Engine VM from a terminal tree and SSH into it."""

__version__ = "0.1.0"
