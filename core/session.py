from typing import Iterable

from loguru import logger

from core.exercise_catalog import EquipmentSelection, resolve_group_muscles
from core.schemas import ExerciseRecord, WorkoutItem, WorkoutState
from core.services.exercise_service import ExerciseService
from core.services.gif_service import GifResolver
from core.workout.manager import WorkoutManager


class BrowserSession:
    """Per-visitor browsing state around one exercise cache and one workout."""

    def __init__(
        self,
        exercise_service: ExerciseService,
        manager: WorkoutManager,
        *,
        equipment: EquipmentSelection | None = None,
        gif_resolver: GifResolver | None = None,
    ) -> None:
        self.exercises = exercise_service
        self.workout = manager
        self.equipment = equipment or EquipmentSelection()
        self.gifs = gif_resolver or GifResolver(exercise_service, manager)
        self._selected: dict[str, object] = {}
        self._loaded: dict[str, list[ExerciseRecord]] = {}

    @property
    def selected_groups(self) -> tuple[str, ...]:
        return tuple(self._selected)

    @property
    def loaded_groups(self) -> tuple[str, ...]:
        return tuple(self._loaded)

    async def start(self) -> WorkoutState:
        return await self.workout.initialize()

    async def select_group(self, group: str) -> list[ExerciseRecord]:
        if not resolve_group_muscles(group, catalog=self.exercises.catalog):
            logger.info(f"group_select_ignored group={group} reason=unknown")
            return []

        ticket = object()
        self._selected[group] = ticket
        records = await self.exercises.fetch_group(group)
        if self._selected.get(group) is not ticket:
            # deselected (or reselected) while fetching; the cache keeps what was fetched
            logger.debug(f"group_results_dropped group={group}")
            return []

        self._loaded[group] = records
        return list(self.equipment.apply(records))

    def deselect_group(self, group: str) -> None:
        self._selected.pop(group, None)
        self._loaded.pop(group, None)

    async def toggle_group(self, group: str) -> list[ExerciseRecord]:
        if group in self._selected:
            self.deselect_group(group)
            return []
        return await self.select_group(group)

    def apply_filters(self, equipment: Iterable[str]) -> dict[str, list[ExerciseRecord]]:
        self.equipment.set(equipment)
        return self.visible_exercises()

    def visible_exercises(self) -> dict[str, list[ExerciseRecord]]:
        return {group: list(self.equipment.apply(records)) for group, records in self._loaded.items()}

    async def add_to_workout(self, record: ExerciseRecord, group: str) -> WorkoutItem | None:
        return await self.workout.add_item(record.name or "", group, record.gif_url)

    async def show_demo(self, item_id: str) -> WorkoutItem | None:
        item = self.workout.get_item(item_id)
        if item is None:
            return None
        return await self.gifs.resolve(item)


__all__ = ["BrowserSession"]
