from pydantic import BaseModel, Field

from launchpad.core.config import settings


class Mission(BaseModel):
    name: str | None = None
    mission_patch_small: str | None = None
    mission_patch_large: str | None = None


class Rocket(BaseModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None


class Launch(BaseModel):
    id: int
    cursor: str
    site: str | None = None
    mission: Mission
    rocket: Rocket


class LaunchQueryParameters(BaseModel):
    after: str | None = None
    page_size: int = Field(
        default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE
    )
