from typing import Any

import httpx
from dependency_injector import containers, providers

from config.app_settings import settings
from core.services.exercise_service import ExerciseService
from core.session import BrowserSession
from core.storage import MemoryStore, RedisStore, WorkoutStorage
from core.storage.stores import DurableStore
from core.workout.location import PageLocation
from core.workout.manager import WorkoutManager


def build_http_client() -> httpx.AsyncClient:
    options: dict[str, Any] = {
        "limits": httpx.Limits(
            max_connections=settings.API_MAX_CONNECTIONS,
            max_keepalive_connections=settings.API_MAX_KEEPALIVE_CONNECTIONS,
        ),
    }
    if settings.API_TIMEOUT:
        options["timeout"] = settings.API_TIMEOUT
    return httpx.AsyncClient(**options)


def build_store(client_id: str = "anonymous") -> DurableStore:
    if settings.REDIS_URL:
        return RedisStore(settings.REDIS_URL, client_id=client_id, namespace=settings.STORE_NAMESPACE)
    return MemoryStore()


class App(containers.DeclarativeContainer):
    http_client = providers.Singleton(build_http_client)

    exercise_service = providers.Factory(ExerciseService, client=http_client, settings=settings)
    store = providers.Factory(build_store)
    storage = providers.Factory(WorkoutStorage, store=store)
    location = providers.Factory(PageLocation.from_url)
    workout_manager = providers.Factory(WorkoutManager, storage=storage, location=location)
    session = providers.Factory(BrowserSession, exercise_service=exercise_service, manager=workout_manager)


_container: App | None = None


def create_container() -> App:
    return App()


def set_container(container: App) -> None:
    global _container
    _container = container


def get_container() -> App:
    if _container is None:
        raise RuntimeError("Container is not initialized")
    return _container


def create_session(page_url: str = "/", client_id: str = "anonymous") -> BrowserSession:
    container = get_container()
    storage = container.storage(store=container.store(client_id=client_id))
    manager = container.workout_manager(storage=storage, location=container.location(page_url))
    return container.session(manager=manager)


async def shutdown(container: App) -> None:
    client = container.http_client()
    await client.aclose()
    container.http_client.reset()
