"""
Workflow module for building and uploading records.

Module structure:
- result.py: UploadResult dataclass
- record_builders.py: Record builder functions (generic, WhiteWind, pass-through)
- uploader.py: Main RecordUploader orchestrator class
"""

from typing import Optional

from putrecord.client import XrpcClient
from putrecord.config import Config

# Re-export builders for advanced use
from .record_builders import (
    DEFAULT_VISIBILITY,
    WHITEWIND_COLLECTION,
    build_record,
    extract_markdown_title,
    parse_structured_record,
)

# Re-export result types
from .result import UploadResult

# Re-export uploader
from .uploader import RecordUploader

__all__ = [
    # Main classes
    "RecordUploader",
    "UploadResult",
    # Record builders
    "build_record",
    "extract_markdown_title",
    "parse_structured_record",
    "WHITEWIND_COLLECTION",
    "DEFAULT_VISIBILITY",
    # Convenience function
    "upload_file",
]


def upload_file(config: Config, client: Optional[XrpcClient] = None) -> UploadResult:
    """
    Convenience function to read, authenticate and upload in one step.

    When no client is given, one is created for config.pds_url, logged in
    with the configured credentials, and closed afterwards. A supplied
    client must already be authenticated.

    Args:
        config: Upload configuration
        client: Authenticated XrpcClient to reuse (optional)

    Returns:
        UploadResult for the written record

    Example:
        result = upload_file(load_config())
        print(result.summary())
    """
    from putrecord.tools import read_file

    content = read_file(config.file_path)

    if client is not None:
        return RecordUploader(client).upload(config, content)

    with XrpcClient(config.pds_url) as own_client:
        own_client.login(config.identifier, config.password)
        return RecordUploader(own_client).upload(config, content)
