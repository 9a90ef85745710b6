"""Folder Commander: reusable folder/file templates materialized on disk."""

__version__ = "1.0.0"

__all__ = ["__version__"]
