"""Shared domain package for the RV Stay marketplace backend."""

__version__ = "0.1.0"
