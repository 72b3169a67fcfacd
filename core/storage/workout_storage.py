import json
from datetime import datetime, timezone
from json import JSONDecodeError
from typing import Any, Mapping

from loguru import logger

from config.app_settings import settings
from core.exceptions import StoreError

from .stores import DurableStore


class WorkoutStorage:
    def __init__(
        self,
        store: DurableStore,
        *,
        workout_key: str = settings.WORKOUT_STORAGE_KEY,
        contact_key: str = settings.CONTACT_STORAGE_KEY,
    ) -> None:
        self.store = store
        self.workout_key = workout_key
        self.contact_key = contact_key

    async def _read_json(self, key: str) -> Any | None:
        try:
            raw = await self.store.get(key)
        except StoreError as exc:
            logger.error(f"store_read_failed key={key} error={exc}")
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (JSONDecodeError, TypeError) as exc:
            logger.error(f"store_payload_invalid key={key} error={exc}")
            return None

    async def _write_json(self, key: str, data: Any) -> bool:
        try:
            payload = json.dumps(data)
        except (TypeError, ValueError) as exc:
            logger.error(f"store_payload_unserializable key={key} error={exc}")
            return False
        try:
            await self.store.set(key, payload)
        except StoreError as exc:
            logger.error(f"store_write_failed key={key} error={exc}")
            return False
        return True

    async def save_workout(self, payload: Mapping[str, Any]) -> bool:
        return await self._write_json(self.workout_key, dict(payload))

    async def load_workout(self) -> dict[str, Any] | None:
        data = await self._read_json(self.workout_key)
        if data is not None and not isinstance(data, dict):
            logger.warning(f"store_payload_invalid key={self.workout_key} type={type(data).__name__}")
            return None
        return data

    async def clear_workout(self) -> bool:
        try:
            await self.store.delete(self.workout_key)
        except StoreError as exc:
            logger.error(f"store_delete_failed key={self.workout_key} error={exc}")
            return False
        return True

    async def save_contact_submission(self, form_data: Mapping[str, Any]) -> bool:
        submissions = await self.get_contact_submissions()
        submissions.append({**form_data, "submittedAt": datetime.now(timezone.utc).isoformat()})
        return await self._write_json(self.contact_key, submissions)

    async def get_contact_submissions(self) -> list[dict[str, Any]]:
        data = await self._read_json(self.contact_key)
        if not isinstance(data, list):
            return []
        return [entry for entry in data if isinstance(entry, dict)]


__all__ = ["WorkoutStorage"]
