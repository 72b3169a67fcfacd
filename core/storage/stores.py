from typing import Any, Awaitable, Callable, ClassVar, Protocol, cast

from loguru import logger
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from core.exceptions import StoreError


class DurableStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class RedisStore:
    """Durable store kept in one Redis hash per client."""

    _socket_timeout: ClassVar[float] = 5.0
    _socket_connect_timeout: ClassVar[float] = 3.0

    def __init__(
        self,
        url: str,
        *,
        client_id: str,
        namespace: str = "webfit",
        client: Redis | None = None,
    ) -> None:
        self.url = url
        self.client_id = client_id
        self.namespace = namespace
        self._redis: Redis | None = client

    def _create_client(self) -> Redis:
        return from_url(
            url=self.url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=self._socket_timeout,
            socket_connect_timeout=self._socket_connect_timeout,
        )

    def _client(self) -> Redis:
        if self._redis is None:
            self._redis = self._create_client()
        return self._redis

    async def _reset_client(self) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.aclose()
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Redis client close failed: {exc}")
        finally:
            self._redis = None

    async def _with_client(self, func: Callable[[Redis], Awaitable[Any]], *, operation: str, key: str) -> Any:
        for attempt in (1, 2):
            try:
                return await func(self._client())
            except (RedisError, ValueError) as exc:
                # ValueError covers a malformed REDIS_URL rejected by from_url
                logger.warning(f"Redis {operation} failed (attempt {attempt}) [{key}]: {exc}")
                await self._reset_client()
                if attempt >= 2:
                    raise StoreError(operation, key, str(exc)) from exc
        return None

    @property
    def hash_key(self) -> str:
        return f"{self.namespace}:{self.client_id}"

    async def get(self, key: str) -> str | None:
        def _op(client: Redis) -> Awaitable[str | None]:
            return cast(Awaitable[str | None], client.hget(self.hash_key, key))

        return await self._with_client(_op, operation="get", key=key)

    async def set(self, key: str, value: str) -> None:
        def _op(client: Redis) -> Awaitable[int]:
            return cast(Awaitable[int], client.hset(self.hash_key, key, value))

        await self._with_client(_op, operation="set", key=key)

    async def delete(self, key: str) -> None:
        def _op(client: Redis) -> Awaitable[int]:
            return cast(Awaitable[int], client.hdel(self.hash_key, key))

        await self._with_client(_op, operation="delete", key=key)

    async def healthcheck(self) -> bool:
        try:
            return bool(await self._with_client(lambda c: c.ping(), operation="ping", key=self.hash_key))
        except StoreError as exc:
            logger.critical(f"Redis healthcheck failed: {exc}")
            return False

    async def close(self) -> None:
        await self._reset_client()
        logger.info("Redis connection closed.")


__all__ = ["DurableStore", "MemoryStore", "RedisStore"]
