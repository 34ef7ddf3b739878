import asyncio
import time
from typing import Any, Dict, List, Protocol, Sequence
from urllib.parse import urljoin, urlparse

import httpx

from launchpad.core.config import settings
from launchpad.core.exceptions import LaunchNotFoundError, UpstreamAPIError
from launchpad.core.logging import LogContext
from launchpad.core.metrics import upstream_fetch_duration, upstream_fetch_operations
from launchpad.models.launch import Launch, Mission, Rocket

logger = LogContext(__name__)


class LaunchProvider(Protocol):
    """Source of the complete launch collection plus single-launch lookups"""

    async def fetch_all(self) -> List[Launch]: ...

    async def get_launch_by_id(self, launch_id: int) -> Launch: ...

    async def get_launches_by_ids(self, launch_ids: Sequence[int]) -> List[Launch]: ...


def launch_reducer(launch: Dict[str, Any]) -> Launch:
    """
    Transform a raw upstream launch into the shape the API serves

    Args:
        launch: A launch object as returned by the upstream REST API

    Returns:
        The reduced Launch model
    """
    links = launch.get("links") or {}
    rocket = launch.get("rocket") or {}
    launch_site = launch.get("launch_site") or {}

    return Launch(
        id=launch.get("flight_number") or 0,
        cursor=f"{launch.get('launch_date_unix')}",
        site=launch_site.get("site_name"),
        mission=Mission(
            name=launch.get("mission_name"),
            mission_patch_small=links.get("mission_patch_small"),
            mission_patch_large=links.get("mission_patch"),
        ),
        rocket=Rocket(
            id=rocket.get("rocket_id"),
            name=rocket.get("rocket_name"),
            type=rocket.get("rocket_type"),
        ),
    )


class LaunchAPI:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str | None = None,
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url or settings.LAUNCH_API_BASE_URL
        self.host = urlparse(self.base_url).netloc

    async def _get(
        self, path: str, params: Dict[str, Any] | None = None, operation: str = "get"
    ) -> Any:
        """Send a GET request to the upstream API and decode its JSON body"""
        url = urljoin(self.base_url, path)
        start_time = time.time()

        try:
            response = await self.http_client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            upstream_fetch_operations.labels(operation=operation, status="error").inc()
            logger.error(
                "Upstream API returned an error status",
                extra={
                    "url": url,
                    "upstream_status": e.response.status_code,
                    "operation": operation,
                },
            )
            raise UpstreamAPIError(
                detail=f"Upstream API responded with {e.response.status_code}",
                host=self.host,
                upstream_status=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            upstream_fetch_operations.labels(operation=operation, status="timeout").inc()
            logger.error(
                "Upstream API request timed out",
                extra={"url": url, "operation": operation},
            )
            raise UpstreamAPIError(
                detail="Upstream API request timed out",
                status_code=504,
                host=self.host,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            upstream_fetch_operations.labels(operation=operation, status="error").inc()
            logger.error(
                "Upstream API request failed",
                extra={
                    "url": url,
                    "operation": operation,
                    "error": str(e),
                    "error_type": e.__class__.__name__,
                },
            )
            raise UpstreamAPIError(
                detail=f"Upstream API request failed: {str(e)}", host=self.host
            ) from e
        finally:
            upstream_fetch_duration.labels(operation=operation).observe(
                time.time() - start_time
            )

        upstream_fetch_operations.labels(operation=operation, status="success").inc()
        return data

    async def get_all_launches(self) -> List[Launch]:
        """Fetch every launch from the upstream API, in upstream order"""
        response = await self._get("launches", operation="get_all_launches")

        if not isinstance(response, list):
            logger.warning(
                "Upstream launches response was not a list",
                extra={"response_type": type(response).__name__},
            )
            return []

        launches = [launch_reducer(launch) for launch in response]
        logger.debug("Fetched launches", extra={"launch_count": len(launches)})
        return launches

    async def get_launch_by_id(self, launch_id: int) -> Launch:
        response = await self._get(
            "launches",
            params={"flight_number": launch_id},
            operation="get_launch_by_id",
        )
        if not isinstance(response, list) or not response:
            raise LaunchNotFoundError(launch_id)
        return launch_reducer(response[0])

    async def get_launches_by_ids(self, launch_ids: Sequence[int]) -> List[Launch]:
        return list(
            await asyncio.gather(
                *(self.get_launch_by_id(launch_id) for launch_id in launch_ids)
            )
        )

    async def fetch_all(self) -> List[Launch]:
        return await self.get_all_launches()
