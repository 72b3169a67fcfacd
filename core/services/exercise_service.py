import asyncio
from typing import Any, Awaitable, Callable, Mapping

import httpx
from loguru import logger
from pydantic import ValidationError

from core.exercise_catalog import MUSCLE_GROUPS, dedupe_exercises, resolve_group_muscles
from core.schemas import ExerciseRecord
from core.services.api_client import APIClient, APIClientHTTPError, APIClientTransportError, APISettings
from core.utils.text import encode_spaces

Sleeper = Callable[[float], Awaitable[Any]]


class ExerciseService(APIClient):
    """Per-muscle exercise lookups against the remote catalog.

    Results are cached per normalized muscle identifier for the lifetime of the instance. A cached
    entry, including an empty one left behind by a failed request, always short-circuits the network.
    Group lookups walk the catalog strictly in order, one request at a time, pausing ``throttle``
    seconds between sub-fetches.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: APISettings,
        *,
        catalog: Mapping[str, tuple[str, ...]] = MUSCLE_GROUPS,
        throttle: float | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        super().__init__(client, settings)
        self.catalog = catalog
        self.throttle = getattr(settings, "EXERCISE_FETCH_THROTTLE", 0.3) if throttle is None else throttle
        self.page_limit = getattr(settings, "EXERCISE_API_PAGE_LIMIT", 100)
        self.include_secondary = getattr(settings, "EXERCISE_API_INCLUDE_SECONDARY", False)
        self._sleep_between = sleep
        self._cache: dict[str, list[ExerciseRecord]] = {}

    @staticmethod
    def normalize_muscle_id(muscle_id: str) -> str:
        return encode_spaces(str(muscle_id or "").lower().strip())

    @staticmethod
    def normalize_response(payload: Any) -> list[ExerciseRecord]:
        if isinstance(payload, dict):
            data = payload.get("data")
            items = data if payload.get("success") and isinstance(data, list) else []
        elif isinstance(payload, list):
            items = payload
        else:
            items = []

        records: list[ExerciseRecord] = []
        for raw in items:
            if not isinstance(raw, dict):
                logger.warning(f"exercise_record_skipped reason=not_an_object type={type(raw).__name__}")
                continue
            try:
                records.append(ExerciseRecord.model_validate(raw))
            except ValidationError as exc:
                logger.warning(f"exercise_record_skipped reason=invalid error={exc}")
        return records

    def _muscle_url(self, muscle_key: str) -> str:
        return self._build_url(f"muscles/{muscle_key}/exercises")

    def _query_params(self) -> dict[str, Any]:
        return {
            "offset": 0,
            "limit": self.page_limit,
            "includeSecondary": "true" if self.include_secondary else "false",
        }

    async def fetch_by_muscle(self, muscle_id: str) -> list[ExerciseRecord]:
        muscle_key = self.normalize_muscle_id(muscle_id)
        if muscle_key in self._cache:
            logger.debug(f"exercise_cache_hit muscle={muscle_key}")
            return list(self._cache[muscle_key])

        try:
            _, payload = await self._api_request("get", self._muscle_url(muscle_key), params=self._query_params())
        except (APIClientHTTPError, APIClientTransportError) as exc:
            logger.warning(f"exercise_fetch_failed muscle={muscle_key} error={exc}")
            self._cache[muscle_key] = []
            return []
        except Exception as exc:  # noqa: BLE001
            logger.exception(f"exercise_fetch_crashed muscle={muscle_key} error={exc}")
            self._cache[muscle_key] = []
            return []

        records = self.normalize_response(payload)
        self._cache[muscle_key] = records
        logger.debug(f"exercise_fetch_done muscle={muscle_key} count={len(records)}")
        return list(records)

    async def fetch_group(self, group: str) -> list[ExerciseRecord]:
        muscles = resolve_group_muscles(group, catalog=self.catalog)
        if not muscles:
            logger.info(f"exercise_group_unknown group={group}")
            return []

        collected: list[ExerciseRecord] = []
        for position, muscle in enumerate(muscles):
            if position:
                logger.debug(f"exercise_fetch_throttle group={group} next={muscle} delay={self.throttle}")
                await self._sleep_between(self.throttle)
            records = await self.fetch_by_muscle(muscle)
            if records:
                collected.extend(records)

        unique = dedupe_exercises(collected)
        logger.info(f"exercise_group_loaded group={group} fetched={len(collected)} unique={len(unique)}")
        return unique

    async def find_by_name(self, name: str, group: str) -> ExerciseRecord | None:
        needle = str(name or "").lower()
        if not needle:
            return None
        for record in await self.fetch_group(group):
            if record.name and record.name.lower() == needle:
                return record
        return None

    def cache_snapshot(self) -> dict[str, list[ExerciseRecord]]:
        return {key: list(records) for key, records in self._cache.items()}

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["ExerciseService"]
