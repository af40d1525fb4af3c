"""Lint tooling for the framework skills corpus."""

__version__ = "0.1.0"
