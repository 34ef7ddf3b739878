import httpx

from launchpad.core.config import settings
from launchpad.core.exceptions import ClientFetchError
from launchpad.core.logging import LogContext
from launchpad.models.launch import Launch
from launchpad.models.pagination import Page

logger = LogContext(__name__)


class LaunchesClient:
    """Fetches launch pages from the Launchpad API"""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or settings.CLIENT_API_URL).rstrip("/")
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=settings.CLIENT_TIMEOUT)
        return self._http_client

    async def fetch_page(
        self, after: str | None = None, page_size: int | None = None
    ) -> Page[Launch]:
        """
        Fetch the page of launches following a cursor

        Args:
            after: Cursor of the last launch already received
            page_size: Number of launches to request, server default when None

        Returns:
            The validated page

        Raises:
            ClientFetchError: On transport errors, timeouts, non-2xx answers
                and bodies that are not a launch page
            MalformedPageError: If the page's cursor and has_more disagree
        """
        params = {}
        if after is not None:
            params["after"] = after
        if page_size is not None:
            params["page_size"] = page_size

        try:
            response = await self.http_client.get(
                f"{self.base_url}/launches", params=params
            )
        except httpx.TimeoutException as e:
            logger.warning("Launch page request timed out", extra={"after": after})
            raise ClientFetchError("Launch page request timed out") from e
        except httpx.HTTPError as e:
            logger.error(
                "Launch page request failed",
                extra={"after": after, "error": str(e), "error_type": e.__class__.__name__},
            )
            raise ClientFetchError(f"Launch page request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.error(
                "Launch page request returned an error",
                extra={"after": after, "status_code": response.status_code},
            )
            raise ClientFetchError(
                f"Launch page request returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return Page[Launch].model_validate(response.json())
        except ValueError as e:
            logger.error(
                "Launch page response could not be parsed",
                extra={"after": after, "error": str(e), "error_type": e.__class__.__name__},
            )
            raise ClientFetchError(f"Invalid launch page response: {str(e)}") from e

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
