from .constants import BODY_WEIGHT, EQUIPMENT_LIST, MUSCLE_GROUPS
from .dedupe import dedup_key, dedupe_exercises, resolve_group_muscles
from .equipment import EquipmentSelection, equipment_choices, filter_by_equipment, format_equipment_name

__all__ = [
    "BODY_WEIGHT",
    "EQUIPMENT_LIST",
    "MUSCLE_GROUPS",
    "EquipmentSelection",
    "dedup_key",
    "dedupe_exercises",
    "equipment_choices",
    "filter_by_equipment",
    "format_equipment_name",
    "resolve_group_muscles",
]
