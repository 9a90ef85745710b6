"""Application services for Folder Commander."""
