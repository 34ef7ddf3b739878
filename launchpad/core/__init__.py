from .exceptions import (
    BaseAPIException,
    InvalidPageSizeError,
    MalformedPageError,
    LaunchNotFoundError,
    UpstreamAPIError,
    ClientFetchError,
)
from .logging import setup_logging

__all__ = [
    "BaseAPIException",
    "InvalidPageSizeError",
    "MalformedPageError",
    "LaunchNotFoundError",
    "UpstreamAPIError",
    "ClientFetchError",
    "setup_logging",
]
