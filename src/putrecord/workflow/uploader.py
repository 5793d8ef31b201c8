"""
Record uploader for the create/update workflow.

The main orchestrator: fetch the previous record, build, then write.
"""

import logging
from typing import Optional

from putrecord.client import XrpcClient
from putrecord.config import Config
from putrecord.enums import UploadMode
from putrecord.exceptions import XrpcError

from .record_builders import build_record
from .result import UploadResult, rkey_from_uri

logger = logging.getLogger(__name__)


class RecordUploader:
    """
    Uploads file content as a record using an authenticated XrpcClient.

    Workflow:
    1. Update mode (RKEY set) → fetch the existing record for field reconciliation
    2. Build the record from content (and the existing record, if any)
    3. putRecord (update mode) or createRecord (create mode)

    Example:
        with XrpcClient(config.pds_url) as client:
            client.login(config.identifier, config.password)
            result = RecordUploader(client).upload(config, content)
            print(result.summary())
    """

    def __init__(self, client: XrpcClient):
        self.client = client

    def fetch_existing(self, config: Config) -> Optional[dict]:
        """
        Fetch the record currently stored at the configured RKEY.

        A missing record or failed fetch is not fatal; the update continues
        as if there were no previous record.

        Args:
            config: Configuration with repo, collection and RKEY

        Returns:
            The existing record value, or None
        """
        if not config.rkey:
            return None

        try:
            existing = self.client.get_record(config.identifier, config.collection, config.rkey)
        except XrpcError as e:
            logger.warning(f"Could not fetch existing record {config.collection}/{config.rkey}: {e}")
            return None

        if existing is None:
            logger.warning(f"No existing record at {config.collection}/{config.rkey}")
        return existing

    def upload(
        self,
        config: Config,
        content: str,
        force_fields: Optional[bool] = None,
    ) -> UploadResult:
        """
        Build a record from content and write it to the PDS.

        Args:
            config: Upload configuration
            content: Raw file content
            force_fields: Overrides config.force_fields when not None

        Returns:
            UploadResult describing the written record
        """
        if force_fields is None:
            force_fields = config.force_fields

        if config.mode == UploadMode.UPDATE:
            existing = self.fetch_existing(config)
            record = build_record(config.collection, content, existing, force_fields)

            logger.info(f"Updating existing record: {config.collection}/{config.rkey}")
            response = self.client.put_record(
                config.identifier, config.collection, config.rkey, record
            )
            return UploadResult(
                uri=response.get("uri", ""),
                cid=response.get("cid", ""),
                rkey=config.rkey,
                mode=UploadMode.UPDATE,
                collection=config.collection,
                record=record,
                previous_record=existing,
            )

        record = build_record(config.collection, content, force_fields=force_fields)

        logger.info(f"Creating new record in {config.collection}")
        response = self.client.create_record(config.identifier, config.collection, record)
        uri = response.get("uri", "")
        return UploadResult(
            uri=uri,
            cid=response.get("cid", ""),
            rkey=rkey_from_uri(uri),
            mode=UploadMode.CREATE,
            collection=config.collection,
            record=record,
        )
