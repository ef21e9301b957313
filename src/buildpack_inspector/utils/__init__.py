"""Utility functions for the buildpack inspector."""

from .digest import blob_path, strip_algorithm

__all__ = ["blob_path", "strip_algorithm"]
