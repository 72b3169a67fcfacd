from typing import Iterable, Sequence

from core.schemas import ExerciseRecord
from core.utils.text import capitalize_words

from .constants import BODY_WEIGHT, EQUIPMENT_LIST


def _record_equipment(record: ExerciseRecord) -> tuple[str, ...]:
    if not record.equipments:
        return (BODY_WEIGHT,)
    return record.equipments


def filter_by_equipment(records: Sequence[ExerciseRecord], selected: Iterable[str]) -> Sequence[ExerciseRecord]:
    wanted = set(selected)
    if not wanted:
        return records
    return [
        record
        for record in records
        if any((item or "").lower().strip() in wanted for item in _record_equipment(record))
    ]


def format_equipment_name(equipment: str) -> str:
    return capitalize_words(equipment)


def equipment_choices() -> list[tuple[str, str]]:
    return [(item, format_equipment_name(item)) for item in EQUIPMENT_LIST]


class EquipmentSelection:
    """Equipment filters picked by one browsing session."""

    def __init__(self, initial: Iterable[str] | None = None) -> None:
        self._selected: set[str] = set(initial or ())

    @property
    def selected(self) -> set[str]:
        return set(self._selected)

    @property
    def has_active_filters(self) -> bool:
        return bool(self._selected)

    def set(self, equipment: Iterable[str]) -> None:
        self._selected = set(equipment)

    def toggle(self, equipment: str) -> bool:
        if equipment in self._selected:
            self._selected.discard(equipment)
            return False
        self._selected.add(equipment)
        return True

    def clear(self) -> None:
        self._selected.clear()

    def apply(self, records: Sequence[ExerciseRecord]) -> Sequence[ExerciseRecord]:
        return filter_by_equipment(records, self._selected)


__all__ = ["EquipmentSelection", "equipment_choices", "filter_by_equipment", "format_equipment_name"]
