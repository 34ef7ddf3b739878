import os
import tempfile

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault(
    "LOG_FILE", os.path.join(tempfile.gettempdir(), "launchpad-test.log")
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from typing import List, Sequence  # noqa: E402

from launchpad.main import app  # noqa: E402
from launchpad.api.dependencies import get_launch_service  # noqa: E402
from launchpad.core.exceptions import LaunchNotFoundError  # noqa: E402
from launchpad.models.launch import Launch  # noqa: E402
from launchpad.services.launch_service import LaunchService  # noqa: E402
from tests.factories import LaunchFactory  # noqa: E402


class FakeLaunchProvider:
    """In-memory launch source returning launches oldest first"""

    def __init__(self, launches: List[Launch]):
        self.launches = launches
        self.fetch_count = 0
        self.error: Exception | None = None

    async def fetch_all(self) -> List[Launch]:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return list(self.launches)

    async def get_launch_by_id(self, launch_id: int) -> Launch:
        if self.error is not None:
            raise self.error
        for launch in self.launches:
            if launch.id == launch_id:
                return launch
        raise LaunchNotFoundError(launch_id)

    async def get_launches_by_ids(self, launch_ids: Sequence[int]) -> List[Launch]:
        return [await self.get_launch_by_id(launch_id) for launch_id in launch_ids]


@pytest.fixture
def launches():
    """Seven launches, oldest first, as the upstream API orders them"""
    return [LaunchFactory(id=flight_number) for flight_number in range(1, 8)]


@pytest.fixture
def launch_provider(launches):
    return FakeLaunchProvider(launches)


@pytest.fixture
def launch_service(launch_provider):
    return LaunchService(launch_provider)


@pytest.fixture
def client(launch_service):
    """Create a test client for the FastAPI app"""

    def override_get_launch_service():
        return launch_service

    app.dependency_overrides[get_launch_service] = override_get_launch_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides = {}

