from typing import Iterable, Mapping

from core.schemas import ExerciseRecord

from .constants import MUSCLE_GROUPS

EQUIPMENT_SEPARATOR = ","
NO_EQUIPMENT = "none"


def dedup_key(record: ExerciseRecord) -> str:
    identity = record.exercise_id or record.name or ""
    equipment = EQUIPMENT_SEPARATOR.join(record.equipments) if record.equipments is not None else NO_EQUIPMENT
    return f"{identity}-{equipment}"


def dedupe_exercises(records: Iterable[ExerciseRecord]) -> list[ExerciseRecord]:
    unique: dict[str, ExerciseRecord] = {}
    for record in records:
        unique.setdefault(dedup_key(record), record)
    return list(unique.values())


def resolve_group_muscles(
    group: str,
    *,
    catalog: Mapping[str, tuple[str, ...]] = MUSCLE_GROUPS,
) -> tuple[str, ...]:
    return tuple(catalog.get(group) or ())


__all__ = ["dedup_key", "dedupe_exercises", "resolve_group_muscles"]
