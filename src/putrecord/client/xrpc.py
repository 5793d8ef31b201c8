"""XRPC client for the AT Protocol repository endpoints.

Wraps a synchronous httpx.Client with the four calls the upload workflow
needs: session creation, getRecord, createRecord and putRecord.

Usage:

    with XrpcClient("https://bsky.social") as client:
        client.login("alice.bsky.social", "xxxx-xxxx-xxxx-xxxx")
        result = client.create_record(
            "alice.bsky.social", "com.example.note", {"$type": "com.example.note", ...}
        )
        print(result["uri"])

Errors from the PDS are raised as XrpcError carrying the HTTP status and the
XRPC error name from the response body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from putrecord.exceptions import AuthenticationError, MissingRkeyError, XrpcError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class Session:
    """Authenticated session returned by createSession."""

    did: str
    handle: str
    access_jwt: str
    refresh_jwt: str = ""


class XrpcClient:
    """Synchronous XRPC client bound to one PDS."""

    def __init__(
        self,
        service: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        # Normalize to avoid accidental double slashes in request URLs.
        self.service = service.rstrip("/")
        self.session: Optional[Session] = None
        self._http = httpx.Client(
            base_url=self.service,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> XrpcClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def login(self, identifier: str, password: str) -> Session:
        """Create a session with an app password.

        Args:
            identifier: Handle or DID
            password: App password

        Returns:
            The new Session; its access token is used for later calls

        Raises:
            AuthenticationError: If the PDS rejects the credentials
        """
        logger.info(f"Creating session for {identifier}")
        try:
            data = self._call(
                "POST",
                "com.atproto.server.createSession",
                json={"identifier": identifier, "password": password},
                auth=False,
            )
        except XrpcError as e:
            raise AuthenticationError(f"Authentication failed: {e}") from e

        self.session = Session(
            did=data.get("did", ""),
            handle=data.get("handle", identifier),
            access_jwt=data.get("accessJwt", ""),
            refresh_jwt=data.get("refreshJwt", ""),
        )
        logger.info(f"Session created for {self.session.handle} ({self.session.did})")
        return self.session

    def get_record(self, repo: str, collection: str, rkey: str) -> Optional[dict[str, Any]]:
        """Fetch a record's value.

        Returns:
            The record value, or None if the record does not exist
        """
        try:
            data = self._call(
                "GET",
                "com.atproto.repo.getRecord",
                params={"repo": repo, "collection": collection, "rkey": rkey},
            )
        except XrpcError as e:
            if e.is_not_found:
                logger.info(f"Record not found: {collection}/{rkey}")
                return None
            raise

        value = data.get("value")
        return value if isinstance(value, dict) else None

    def create_record(self, repo: str, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Create a record with a PDS-generated key.

        Returns:
            Response body with ``uri`` and ``cid``
        """
        return self._call(
            "POST",
            "com.atproto.repo.createRecord",
            json={"repo": repo, "collection": collection, "record": record},
        )

    def put_record(
        self, repo: str, collection: str, rkey: Optional[str], record: dict[str, Any]
    ) -> dict[str, Any]:
        """Create or overwrite the record at ``rkey``.

        Returns:
            Response body with ``uri`` and ``cid``

        Raises:
            MissingRkeyError: If no record key is given
        """
        if not rkey:
            raise MissingRkeyError("RKEY is required for updating records")

        return self._call(
            "POST",
            "com.atproto.repo.putRecord",
            json={"repo": repo, "collection": collection, "rkey": rkey, "record": record},
        )

    def _call(self, method: str, nsid: str, auth: bool = True, **kwargs: Any) -> dict[str, Any]:
        headers = {}
        if auth:
            if self.session is None:
                raise AuthenticationError("Not authenticated")
            headers["Authorization"] = f"Bearer {self.session.access_jwt}"

        logger.debug(f"XRPC {method} {nsid}")
        try:
            response = self._http.request(method, f"/xrpc/{nsid}", headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"XRPC connection error for {nsid}: {e}")
            raise XrpcError(0, None, f"Connection error: {e}") from e

        if response.is_error:
            raise _error_from_response(response)

        if not response.content:
            return {}
        data = response.json()
        return data if isinstance(data, dict) else {}


def _error_from_response(response: httpx.Response) -> XrpcError:
    """Build an XrpcError from an XRPC error body ({"error", "message"})."""
    error: Optional[str] = None
    message = response.reason_phrase
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error") or None
        message = body.get("message") or message

    logger.debug(f"XRPC error {response.status_code}: {error} {message}")
    return XrpcError(response.status_code, error, message)
