from typing import Any, Callable

import pytest

from core.services.exercise_service import ExerciseService
from core.storage import MemoryStore, WorkoutStorage
from core.tests.helpers import CatalogTransport, make_settings
from core.workout import PageLocation, WorkoutManager


@pytest.fixture
def events() -> list[tuple[str, Any]]:
    return []


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float], events: list[tuple[str, Any]]) -> Callable[[float], Any]:
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)
        events.append(("sleep", delay))

    return _sleep


@pytest.fixture
def build_service(
    fake_sleep: Callable[[float], Any], events: list[tuple[str, Any]]
) -> Callable[..., tuple[ExerciseService, CatalogTransport]]:
    def _build(responses: dict[str, Any] | None = None, **kwargs: Any) -> tuple[ExerciseService, CatalogTransport]:
        transport = CatalogTransport(responses, events)
        kwargs.setdefault("sleep", fake_sleep)
        service = ExerciseService(transport.client(), make_settings(), **kwargs)
        return service, transport

    return _build


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def storage(store: MemoryStore) -> WorkoutStorage:
    return WorkoutStorage(store)


@pytest.fixture
def location() -> PageLocation:
    return PageLocation("/exercise.html", base_url="https://webfit.test")


@pytest.fixture
def manager(storage: WorkoutStorage, location: PageLocation) -> WorkoutManager:
    return WorkoutManager(storage, location)
