from loguru import logger

from core.exercise_catalog import resolve_group_muscles
from core.schemas import WorkoutItem
from core.services.exercise_service import ExerciseService
from core.workout.manager import WorkoutManager


class GifResolver:
    def __init__(self, exercise_service: ExerciseService, manager: WorkoutManager) -> None:
        self.exercise_service = exercise_service
        self.manager = manager

    async def resolve(self, item: WorkoutItem) -> WorkoutItem | None:
        """Return ``item`` with a demo gif, or ``None`` when no demo could be found."""
        if item.gif_url:
            return item

        if not resolve_group_muscles(item.muscle_group, catalog=self.exercise_service.catalog):
            logger.info(f"gif_not_found item={item.id} reason=unknown_group group={item.muscle_group}")
            return None

        try:
            match = await self.exercise_service.find_by_name(item.name, item.muscle_group)
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"gif_lookup_failed item={item.id} name={item.name} error={exc}")
            return None

        if match is None or not match.gif_url:
            logger.info(f"gif_not_found item={item.id} name={item.name} group={item.muscle_group}")
            return None

        item.gif_url = match.gif_url
        await self.manager.resolve_gif(item.id, match.gif_url)
        logger.debug(f"gif_resolved item={item.id} name={item.name}")
        return item


__all__ = ["GifResolver"]
