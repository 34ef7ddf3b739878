from typing import List

from fastapi import APIRouter, Depends, Query

from launchpad.api.dependencies import get_launch_service, get_pagination_params
from launchpad.core.logging import LogContext
from launchpad.models.launch import Launch, LaunchQueryParameters
from launchpad.models.pagination import Page
from launchpad.services.launch_service import LaunchService

logger = LogContext(__name__)

router = APIRouter(prefix="/launches", tags=["launches"])


@router.get("", response_model=Page[Launch])
async def get_launches(
    params: LaunchQueryParameters = Depends(get_pagination_params),
    launch_service: LaunchService = Depends(get_launch_service),
) -> Page[Launch]:
    """
    Get a page of launches, newest first

    Pass the `cursor` of a previous page as `after` to get the page that
    follows it. `has_more` is false once the oldest launch has been served.
    """
    return await launch_service.get_launches(
        after=params.after, page_size=params.page_size
    )


@router.get("/batch", response_model=List[Launch])
async def get_launches_by_ids(
    ids: List[int] = Query(..., description="Flight numbers to fetch"),
    launch_service: LaunchService = Depends(get_launch_service),
) -> List[Launch]:
    logger.debug("Fetching launches by id", extra={"launch_ids": ids})
    return await launch_service.get_launches_by_ids(ids)


@router.get("/{launch_id}", response_model=Launch)
async def get_launch(
    launch_id: int,
    launch_service: LaunchService = Depends(get_launch_service),
) -> Launch:
    return await launch_service.get_launch(launch_id)
