"""Packaged JSON schemas for Folder Commander."""
