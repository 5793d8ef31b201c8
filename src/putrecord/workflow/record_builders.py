"""
Record builders for the upload workflow.

Converts raw file content into an AT Protocol record (a plain dict with a
``$type`` key) ready to send to createRecord or putRecord.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from putrecord.enums import Visibility

logger = logging.getLogger(__name__)


WHITEWIND_COLLECTION = "com.whtwnd.blog.entry"

DEFAULT_VISIBILITY = Visibility.PUBLIC.value

# First level-1 heading; whitespace after '#' may not cross a line break
MARKDOWN_TITLE_PATTERN = re.compile(r"^#[^\S\n]+(.+)$", re.MULTILINE)


def current_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def extract_markdown_title(content: str) -> Optional[str]:
    """
    Extract the title from markdown content (first ``#`` heading).

    Args:
        content: Markdown content

    Returns:
        The stripped heading text, or None if no heading was found
    """
    match = MARKDOWN_TITLE_PATTERN.search(content)
    if match is None:
        return None
    return match.group(1).strip() or None


def _reject_constant(name: str) -> None:
    """Refuse NaN and Infinity, which are not valid JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_structured_record(content: str) -> Optional[dict[str, Any]]:
    """
    Parse content as a self-describing record.

    Args:
        content: Raw file content

    Returns:
        The parsed dict if content is a JSON object with a string ``$type``,
        otherwise None
    """
    try:
        parsed = json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None

    if isinstance(parsed, dict) and isinstance(parsed.get("$type"), str):
        return parsed
    return None


def build_blog_entry_record(
    content: str,
    existing_record: Optional[Mapping[str, Any]] = None,
    force_fields: bool = False,
) -> dict[str, Any]:
    """
    Build a WhiteWind blog entry record.

    ``visibility`` is always set; ``title`` only when one can be preserved
    or extracted. Truthy values on the existing record win unless
    ``force_fields`` is set.

    Args:
        content: Markdown content of the entry
        existing_record: Previously stored record (for updates)
        force_fields: Re-derive both fields from content and defaults

    Returns:
        Dict matching the com.whtwnd.blog.entry lexicon
    """
    preserve = existing_record is not None and not force_fields

    record: dict[str, Any] = {
        "$type": WHITEWIND_COLLECTION,
        "content": content,
        "createdAt": current_timestamp(),
    }

    if preserve and existing_record.get("visibility"):
        record["visibility"] = existing_record["visibility"]
    else:
        record["visibility"] = DEFAULT_VISIBILITY

    extracted_title = extract_markdown_title(content)
    if preserve and existing_record.get("title"):
        record["title"] = existing_record["title"]
    elif extracted_title:
        record["title"] = extracted_title

    return record


def build_generic_record(collection: str, content: str) -> dict[str, Any]:
    """Wrap content in a simple record for any other collection."""
    return {
        "$type": collection,
        "content": content,
        "createdAt": current_timestamp(),
    }


def build_record(
    collection: str,
    content: str,
    existing_record: Optional[Mapping[str, Any]] = None,
    force_fields: bool = False,
) -> dict[str, Any]:
    """
    Build an AT Protocol record from file content.

    Rules, first match wins:
    1. Content that is a JSON object with a string ``$type`` is used as-is.
       No ``createdAt`` is added and nothing is merged.
    2. ``com.whtwnd.blog.entry`` gets a blog record with ``visibility`` and
       an optional ``title``, preserved from ``existing_record`` unless
       ``force_fields`` is set.
    3. Anything else is wrapped as ``{$type, content, createdAt}``.

    Never raises for string input; malformed JSON falls through to rule 2/3.

    Args:
        collection: Lexicon collection NSID (e.g. "com.example.note")
        content: The file content to convert
        existing_record: Existing record value, for updates
        force_fields: Always re-derive blog fields from content

    Returns:
        Record dict ready to upload

    Example:
        record = build_record("com.whtwnd.blog.entry", "# My Post\\n\\nBody")
        # {"$type": "com.whtwnd.blog.entry", "content": "# My Post\\n\\nBody",
        #  "createdAt": "...", "visibility": "public", "title": "My Post"}
    """
    structured = parse_structured_record(content)
    if structured is not None:
        logger.debug(f"Using structured record of type {structured['$type']} as-is")
        return structured

    if collection == WHITEWIND_COLLECTION:
        logger.debug("Building WhiteWind blog entry record")
        return build_blog_entry_record(content, existing_record, force_fields)

    return build_generic_record(collection, content)
