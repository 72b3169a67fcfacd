import json
from typing import Any

import httpx

from config.app_settings import Settings
from core.exceptions import StoreError
from core.storage import MemoryStore
from core.workout import PageLocation

API_URL = "http://catalog.test/api/v1"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "EXERCISE_API_URL": API_URL,
        "EXERCISE_FETCH_THROTTLE": 0.3,
        "API_MAX_RETRIES": 0,
        "API_RETRY_INITIAL_DELAY": 0,
    }
    values.update(overrides)
    return Settings(**values)


def exercise_payload(
    name: str | None,
    *,
    equipments: Any = ("body weight",),
    exercise_id: str | None = None,
    gif_url: str = "",
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": name,
        "gifUrl": gif_url,
        "targetMuscles": ["biceps"],
        "secondaryMuscles": [],
        "instructions": ["Step:1 Lift.", "Step:2 Lower."],
    }
    if equipments is not None:
        payload["equipments"] = list(equipments) if isinstance(equipments, (list, tuple)) else equipments
    if exercise_id is not None:
        payload["exerciseId"] = exercise_id
    payload.update(extra)
    return payload


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("catalog unreachable", request=request)


class CatalogTransport:
    """Answers per-muscle catalog requests from a dict keyed by the decoded muscle name."""

    def __init__(self, responses: dict[str, Any] | None = None, events: list[tuple[str, Any]] | None = None) -> None:
        self.responses = responses or {}
        self.requests: list[httpx.Request] = []
        self.events = events if events is not None else []

    @property
    def muscles(self) -> list[str]:
        return [self._muscle(request) for request in self.requests]

    @staticmethod
    def _muscle(request: httpx.Request) -> str:
        return request.url.path.split("/muscles/", 1)[1].rsplit("/exercises", 1)[0]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        muscle = self._muscle(request)
        self.events.append(("fetch", muscle))
        result = self.responses.get(muscle, [])
        if isinstance(result, httpx.Response):
            return result
        if callable(result):
            return result(request)
        return httpx.Response(200, json=result)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class FailingStore(MemoryStore):
    def __init__(self, *, fail_get: bool = False, fail_set: bool = True, initial: dict[str, str] | None = None):
        super().__init__(initial)
        self.fail_get = fail_get
        self.fail_set = fail_set

    async def get(self, key: str) -> str | None:
        if self.fail_get:
            raise StoreError("get", key, "unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise StoreError("set", key, "quota exceeded")
        await super().set(key, value)


class BrokenLocation(PageLocation):
    def replace(self, query: str) -> None:
        raise RuntimeError("history unavailable")


def stored_workout(store: MemoryStore, key: str = "webfit-workout-state") -> dict[str, Any] | None:
    raw = store.snapshot().get(key)
    return json.loads(raw) if raw else None
