"""Assemble deployable subsets of the files changed on a branch."""

__version__ = "1.0.0"
