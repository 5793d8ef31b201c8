"""
putrecord - Upload files as AT Protocol records to a PDS.

This package builds records from file content (plain text, markdown for
WhiteWind blog entries, or self-describing JSON) and writes them to a
PDS with createRecord or putRecord.
"""

__version__ = "0.1.0"

from putrecord.client import Session, XrpcClient
from putrecord.config import Config, load_config
from putrecord.enums import UploadMode, Visibility
from putrecord.exceptions import (
    AuthenticationError,
    ConfigError,
    FileReadError,
    MissingRkeyError,
    PutRecordError,
    XrpcError,
)
from putrecord.templates import init_project
from putrecord.tools import read_file
from putrecord.workflow import (
    RecordUploader,
    UploadResult,
    build_record,
    extract_markdown_title,
    upload_file,
)

__all__ = [
    # Configuration
    "Config",
    "load_config",
    # Enums
    "UploadMode",
    "Visibility",
    # Errors
    "PutRecordError",
    "ConfigError",
    "FileReadError",
    "AuthenticationError",
    "MissingRkeyError",
    "XrpcError",
    # Client
    "XrpcClient",
    "Session",
    # Workflow
    "build_record",
    "extract_markdown_title",
    "RecordUploader",
    "UploadResult",
    "upload_file",
    # Files
    "read_file",
    "init_project",
]
