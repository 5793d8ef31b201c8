"""
Helper tools for the upload workflow.
"""

from putrecord.tools.files import read_file

__all__ = ["read_file"]
