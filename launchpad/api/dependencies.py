from fastapi import Query, Request

from launchpad.core.config import settings
from launchpad.models.launch import LaunchQueryParameters
from launchpad.services.launch_service import LaunchService


def get_pagination_params(
    after: str | None = Query(
        None, description="Cursor of the last launch already received"
    ),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Number of launches per page",
    ),
) -> LaunchQueryParameters:
    """Get pagination parameters for launch list queries"""
    return LaunchQueryParameters(after=after, page_size=page_size)


async def get_launch_service(request: Request) -> LaunchService:
    """
    Get a launch service bound to the application's upstream client

    Args:
        request: The FastAPI request

    Returns:
        LaunchService: A service over the shared launch API and cache
    """
    return LaunchService(
        request.app.state.launch_api,
        cache_service=getattr(request.app.state, "cache_service", None),
    )
