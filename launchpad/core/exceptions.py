from fastapi import HTTPException
from typing import Dict, Any


class BaseAPIException(HTTPException):
    """Base exception class for API errors"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str,
        additional_info: Dict[str, Any] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code
        self.additional_info = additional_info or {}


class InvalidPageSizeError(BaseAPIException):
    """Raised when a page size is not a positive integer"""

    def __init__(self, page_size: Any):
        super().__init__(
            status_code=400,
            detail=f"Page size must be a positive integer, got {page_size!r}",
            error_code="INVALID_PAGE_SIZE",
            additional_info={"page_size": page_size},
        )


class MalformedPageError(BaseAPIException):
    """Raised when a page's cursor and has_more flag contradict each other"""

    def __init__(self, detail: str, cursor: str | None = None):
        super().__init__(
            status_code=422,
            detail=detail,
            error_code="MALFORMED_PAGE",
            additional_info={"cursor": cursor},
        )


class LaunchNotFoundError(BaseAPIException):
    """Raised when the upstream API has no launch for a flight number"""

    def __init__(self, launch_id: int):
        super().__init__(
            status_code=404,
            detail=f"Launch not found: {launch_id}",
            error_code="LAUNCH_NOT_FOUND",
            additional_info={"launch_id": launch_id},
        )


class UpstreamAPIError(BaseAPIException):
    """Raised when the upstream launch API fails or answers with an error"""

    def __init__(
        self,
        detail: str,
        status_code: int = 502,
        host: str | None = None,
        upstream_status: int | None = None,
    ):
        additional_info: Dict[str, Any] = {"host": host} if host else {}
        if upstream_status is not None:
            additional_info["upstream_status"] = upstream_status
        super().__init__(
            status_code=status_code,
            detail=detail,
            error_code="UPSTREAM_API_ERROR",
            additional_info=additional_info,
        )


class ClientFetchError(Exception):
    """Raised by the API client when a page could not be fetched"""

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
