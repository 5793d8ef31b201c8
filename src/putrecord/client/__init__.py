"""
XRPC client for talking to a PDS.
"""

from putrecord.client.xrpc import DEFAULT_TIMEOUT, Session, XrpcClient

__all__ = [
    "XrpcClient",
    "Session",
    "DEFAULT_TIMEOUT",
]
