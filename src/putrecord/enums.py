"""
Enums for record upload metadata.

These enums define the valid values for upload modes and blog visibility.
"""

from enum import Enum


class UploadMode(str, Enum):
    """How a record is written to the PDS."""

    CREATE = "create"
    UPDATE = "update"


class Visibility(str, Enum):
    """WhiteWind blog entry visibility levels."""

    PUBLIC = "public"
    URL = "url"
    AUTHOR = "author"
