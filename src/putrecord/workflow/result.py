"""
Upload result dataclass.

Holds the output of a create or update call.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from putrecord.enums import UploadMode


def rkey_from_uri(uri: str) -> str:
    """Extract the record key from an at:// URI (at://did/collection/rkey)."""
    return uri.rstrip("/").rsplit("/", 1)[-1] if uri else ""


@dataclass
class UploadResult:
    """
    Result of uploading one record.

    Attributes:
        uri: at:// URI of the written record
        cid: Content hash of the written record
        rkey: Record key (generated by the PDS in create mode)
        mode: Whether the record was created or updated
        collection: Collection NSID written to
        record: The record that was sent
        previous_record: Record value fetched before an update, if any
    """

    uri: str
    cid: str
    rkey: str
    mode: UploadMode
    collection: str
    record: dict[str, Any] = field(default_factory=dict)
    previous_record: Optional[dict[str, Any]] = None

    @property
    def is_update(self) -> bool:
        """Check if an existing record was overwritten."""
        return self.mode == UploadMode.UPDATE

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "mode": self.mode.value,
            "collection": self.collection,
            "uri": self.uri,
            "cid": self.cid,
            "rkey": self.rkey,
            "record": self.record,
        }

    def summary(self) -> str:
        """Generate a human-readable summary."""
        if self.is_update:
            lines = ["Record updated successfully!"]
        else:
            lines = ["New record created successfully!"]

        lines.append(f"  URI: {self.uri}")
        lines.append(f"  CID: {self.cid}")
        if not self.is_update:
            lines.append(f"  RKEY: {self.rkey}")

        return "\n".join(lines)
