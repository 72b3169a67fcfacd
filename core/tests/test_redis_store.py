import asyncio

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from core.exceptions import StoreError
from core.storage import RedisStore, WorkoutStorage
from core.workout import PageLocation, WorkoutManager


class FakeRedis:
    def __init__(self, fail: int = 0) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.fail = fail
        self.closed = False

    def _maybe_fail(self) -> None:
        if self.fail:
            self.fail -= 1
            raise RedisConnectionError("connection reset")

    async def hget(self, name: str, key: str) -> str | None:
        self._maybe_fail()
        return self.hashes.get(name, {}).get(key)

    async def hset(self, name: str, key: str, value: str) -> int:
        self._maybe_fail()
        self.hashes.setdefault(name, {})[key] = value
        return 1

    async def hdel(self, name: str, key: str) -> int:
        self._maybe_fail()
        return 1 if self.hashes.get(name, {}).pop(key, None) is not None else 0

    async def ping(self) -> bool:
        self._maybe_fail()
        return True

    async def aclose(self) -> None:
        self.closed = True


def make_store(client: FakeRedis, mocker, replacement: FakeRedis | None = None) -> RedisStore:
    store = RedisStore("redis://cache.test:6379/0", client_id="visitor-1", namespace="webfit", client=client)
    mocker.patch.object(store, "_create_client", return_value=replacement or client)
    return store


def test_values_live_in_client_hash(mocker) -> None:
    async def runner() -> None:
        client = FakeRedis()
        store = make_store(client, mocker)
        await store.set("webfit-workout-state", "{}")
        assert client.hashes == {"webfit:visitor-1": {"webfit-workout-state": "{}"}}
        assert await store.get("webfit-workout-state") == "{}"
        await store.delete("webfit-workout-state")
        assert await store.get("webfit-workout-state") is None

    asyncio.run(runner())


def test_retries_once_with_fresh_client(mocker) -> None:
    async def runner() -> None:
        broken = FakeRedis(fail=1)
        fresh = FakeRedis()
        store = make_store(broken, mocker, replacement=fresh)
        await store.set("k", "v")
        assert broken.closed
        assert fresh.hashes == {"webfit:visitor-1": {"k": "v"}}

    asyncio.run(runner())


def test_persistent_failure_raises_store_error(mocker) -> None:
    async def runner() -> None:
        store = make_store(FakeRedis(fail=5), mocker)
        with pytest.raises(StoreError) as exc_info:
            await store.get("k")
        assert exc_info.value.operation == "get"
        assert exc_info.value.code == 503

    asyncio.run(runner())


def test_workout_storage_absorbs_redis_failure(mocker) -> None:
    async def runner() -> None:
        storage = WorkoutStorage(make_store(FakeRedis(fail=5), mocker))
        assert await storage.save_workout({"workoutTitle": "t", "workouts": []}) is False

    asyncio.run(runner())


def test_healthcheck(mocker) -> None:
    async def runner() -> None:
        assert await make_store(FakeRedis(), mocker).healthcheck() is True
        assert await make_store(FakeRedis(fail=5), mocker).healthcheck() is False

    asyncio.run(runner())


def test_close_resets_client(mocker) -> None:
    async def runner() -> None:
        client = FakeRedis()
        store = make_store(client, mocker)
        await store.close()
        assert client.closed

    asyncio.run(runner())


def test_malformed_url_raises_store_error() -> None:
    async def runner() -> None:
        store = RedisStore("localhost:6379", client_id="visitor-1")
        with pytest.raises(StoreError) as exc_info:
            await store.get("webfit-workout-state")
        assert exc_info.value.operation == "get"

    asyncio.run(runner())


def test_manager_survives_malformed_redis_url() -> None:
    async def runner() -> None:
        location = PageLocation("/exercise.html", base_url="https://webfit.test")
        manager = WorkoutManager(WorkoutStorage(RedisStore("localhost:6379", client_id="visitor-1")), location)
        state = await manager.initialize()
        assert state.items == []
        assert await manager.add_item("Squat", "Legs") is not None

    asyncio.run(runner())
