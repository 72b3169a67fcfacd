from typing import Any, Mapping

from loguru import logger

from config.app_settings import settings
from core.schemas import WorkoutItem, WorkoutState, new_item_id
from core.storage import WorkoutStorage
from core.utils.text import parse_int, title_case

from .location import LinkLocation
from .share_link import decode_workout, encode_workout, has_workout_params, to_query

DEFAULT_ITEM_NAME = "Exercise"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _stored_count(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    return int(value) if value >= 1 else default


def _clamp_count(value: Any) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return 1
    return parsed


def normalize_stored_item(raw: Mapping[str, Any]) -> WorkoutItem:
    name = _text(raw.get("name")) or DEFAULT_ITEM_NAME
    return WorkoutItem(
        id=_text(raw.get("id")) or new_item_id(),
        name=name,
        display_name=_text(raw.get("displayName")) or title_case(name),
        muscle_group=_text(raw.get("muscleGroup")) or settings.CUSTOM_MUSCLE_GROUP,
        gif_url=_text(raw.get("gifUrl")),
        sets=_stored_count(raw.get("sets"), settings.DEFAULT_SETS),
        reps=_stored_count(raw.get("reps"), settings.DEFAULT_REPS),
    )


def normalize_stored_state(payload: Mapping[str, Any]) -> WorkoutState:
    title = _text(payload.get("workoutTitle")) or settings.DEFAULT_WORKOUT_TITLE
    workouts = payload.get("workouts")
    if not isinstance(workouts, list):
        workouts = []
    items = [normalize_stored_item(raw) for raw in workouts if isinstance(raw, Mapping)]
    return WorkoutState(title=title, items=items)


class WorkoutManager:
    """Owns the workout being assembled and mirrors it into the page link and the durable store.

    Every mutation rewrites both representations in full before returning. Either write may fail;
    failures are logged and the in-memory state stays as mutated. ``resolve_gif`` only touches the
    store because media is never part of the link.
    """

    def __init__(self, storage: WorkoutStorage, location: LinkLocation, *, state: WorkoutState | None = None) -> None:
        self.storage = storage
        self.location = location
        self._state = state or WorkoutState()

    @property
    def title(self) -> str:
        return self._state.title

    @property
    def items(self) -> tuple[WorkoutItem, ...]:
        return tuple(item.model_copy() for item in self._state.items)

    @property
    def state(self) -> WorkoutState:
        return self._state.model_copy(deep=True)

    @property
    def share_url(self) -> str:
        return self.location.href

    def __len__(self) -> int:
        return len(self._state.items)

    def get_item(self, item_id: str) -> WorkoutItem | None:
        item = self._state.find(item_id)
        return item.model_copy() if item is not None else None

    async def initialize(self) -> WorkoutState:
        params = self.location.read_params()
        if has_workout_params(params):
            self._state = decode_workout(params)
            logger.info(f"workout_restored source=link items={len(self._state.items)}")
            await self._sync()
            return self.state

        try:
            payload = await self.storage.load_workout()
        except Exception as exc:  # noqa: BLE001
            logger.error(f"workout_store_load_failed error={exc}")
            payload = None
        if payload is None:
            self._state = WorkoutState()
            logger.debug("workout_restored source=none")
            return self.state

        self._state = normalize_stored_state(payload)
        logger.info(f"workout_restored source=store items={len(self._state.items)}")
        if self._state.items:
            await self._sync()
        return self.state

    async def add_item(self, name: str, muscle_group: str, gif_url: str = "") -> WorkoutItem | None:
        if not name:
            return None
        group = muscle_group or settings.CUSTOM_MUSCLE_GROUP
        if any(item.key == (name, group) for item in self._state.items):
            logger.debug(f"workout_item_duplicate name={name} group={group}")
            return None

        item = WorkoutItem(name=name, muscle_group=group, gif_url=gif_url or "")
        self._state.items.append(item)
        logger.debug(f"workout_item_added id={item.id} name={name} group={group}")
        await self._sync()
        return item.model_copy()

    async def remove_item(self, item_id: str) -> bool:
        remaining = [item for item in self._state.items if item.id != item_id]
        removed = len(remaining) != len(self._state.items)
        self._state.items = remaining
        await self._sync()
        return removed

    async def set_sets(self, item_id: str, value: Any) -> int | None:
        item = self._state.find(item_id)
        if item is None:
            return None
        item.sets = _clamp_count(value)
        await self._sync()
        return item.sets

    async def set_reps(self, item_id: str, value: Any) -> int | None:
        item = self._state.find(item_id)
        if item is None:
            return None
        item.reps = _clamp_count(value)
        await self._sync()
        return item.reps

    async def rename(self, title: str) -> None:
        self._state.title = str(title or "").strip()
        await self._sync()

    async def resolve_gif(self, item_id: str, gif_url: str) -> bool:
        item = self._state.find(item_id)
        if item is None:
            return False
        item.gif_url = gif_url
        await self._persist()
        return True

    async def clear(self) -> None:
        self._state = WorkoutState()
        try:
            self.location.replace("")
        except Exception as exc:  # noqa: BLE001
            logger.error(f"workout_link_sync_failed error={exc}")
        if not await self.storage.clear_workout():
            logger.warning("workout_store_clear_failed")

    async def _sync(self) -> None:
        self._write_link()
        await self._persist()

    def _write_link(self) -> None:
        try:
            self.location.replace(to_query(encode_workout(self._state)))
        except Exception as exc:  # noqa: BLE001
            logger.error(f"workout_link_sync_failed error={exc}")

    async def _persist(self) -> None:
        try:
            saved = await self.storage.save_workout(self._state.to_payload())
        except Exception as exc:  # noqa: BLE001
            logger.error(f"workout_store_sync_failed error={exc}")
            return
        if not saved:
            logger.warning("workout_store_sync_failed")


__all__ = ["WorkoutManager", "normalize_stored_item", "normalize_stored_state"]
