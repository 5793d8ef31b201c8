"""
File reading utilities.
"""

import logging
from pathlib import Path
from typing import Union

from putrecord.exceptions import FileReadError

logger = logging.getLogger(__name__)


def read_file(path: Union[str, Path]) -> str:
    """
    Read file content as UTF-8 text, dropping a leading byte order mark.

    Args:
        path: Absolute or relative path to the file

    Returns:
        The file content

    Raises:
        FileReadError: If the file is missing, unreadable, or not UTF-8
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Failed to read file {path}: {e}") from e

    logger.debug(f"Read {len(content)} characters from {file_path}")
    return content
