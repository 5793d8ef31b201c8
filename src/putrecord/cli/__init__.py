"""
Command-line interface for putrecord.

Provides commands for uploading a file as a record and for
initializing a project with a GitHub Actions workflow.
"""

from .main import app, main

__all__ = ["main", "app"]
