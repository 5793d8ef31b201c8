"""
Upload configuration loaded from environment variables.

Provides the Config model shared by the CLI and library consumers.
"""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from putrecord.enums import UploadMode
from putrecord.exceptions import ConfigError

logger = logging.getLogger(__name__)


# Checked in this order; the first missing one is reported
REQUIRED_VARIABLES = (
    "PDS_URL",
    "IDENTIFIER",
    "APP_PASSWORD",
    "COLLECTION",
    "FILE_PATH",
)

TRUTHY_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """
    Settings for uploading one file as a record.

    Attributes:
        pds_url: PDS endpoint URL (e.g. "https://bsky.social")
        identifier: Handle or DID used to log in and as the repo
        password: App password (not the main account password)
        collection: Lexicon collection NSID (e.g. "com.example.note")
        rkey: Record key to update; None creates a new record
        file_path: Path to the file to upload
        force_fields: Re-derive blog fields instead of preserving them
    """

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )

    pds_url: str = Field(alias="PDS_URL")
    identifier: str = Field(alias="IDENTIFIER")
    password: str = Field(alias="APP_PASSWORD", repr=False)
    collection: str = Field(alias="COLLECTION")
    rkey: Optional[str] = Field(default=None, alias="RKEY")
    file_path: str = Field(alias="FILE_PATH")
    force_fields: bool = Field(default=False, alias="FORCE_FIELDS")

    @field_validator("pds_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("rkey", mode="before")
    @classmethod
    def _empty_rkey_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("force_fields", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_VALUES
        return bool(value)

    @property
    def mode(self) -> UploadMode:
        """Upload mode implied by the presence of a record key."""
        return UploadMode.UPDATE if self.rkey else UploadMode.CREATE


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Load and validate configuration from environment variables.

    RKEY and FORCE_FIELDS are optional. Without RKEY a new record is
    created and the PDS generates its key.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        The validated Config

    Raises:
        ConfigError: If a required variable is missing or empty
    """
    env = os.environ if environ is None else environ

    for key in REQUIRED_VARIABLES:
        if not env.get(key):
            raise ConfigError(f"Missing required environment variable: {key}")

    config = Config(
        PDS_URL=env["PDS_URL"],
        IDENTIFIER=env["IDENTIFIER"],
        APP_PASSWORD=env["APP_PASSWORD"],
        COLLECTION=env["COLLECTION"],
        RKEY=env.get("RKEY"),
        FILE_PATH=env["FILE_PATH"],
        FORCE_FIELDS=env.get("FORCE_FIELDS", ""),
    )
    logger.debug(f"Loaded config for {config.identifier} ({config.mode.value} mode)")
    return config
