from types import MappingProxyType
from typing import Mapping

EQUIPMENT_LIST: tuple[str, ...] = (
    "stepmill machine",
    "elliptical machine",
    "trap bar",
    "tire",
    "stationary bike",
    "wheel roller",
    "smith machine",
    "hammer",
    "skierg machine",
    "roller",
    "resistance band",
    "bosu ball",
    "weighted",
    "olympic barbell",
    "kettlebell",
    "upper body ergometer",
    "sled machine",
    "ez barbell",
    "dumbbell",
    "rope",
    "barbell",
    "band",
    "stability ball",
    "medicine ball",
    "assisted",
    "leverage machine",
    "cable",
    "body weight",
)

BODY_WEIGHT = "body weight"

# group name -> canonical muscle identifiers, in fetch order
MUSCLE_GROUPS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Legs": (
            "quadriceps",
            "quads",
            "hamstrings",
            "glutes",
            "calves",
            "soleus",
            "shins",
            "inner thighs",
            "groin",
            "hip flexors",
            "abductors",
            "adductors",
        ),
        "Biceps": ("biceps", "brachialis"),
        "Triceps": ("triceps",),
        "Core": ("abs", "abdominals", "lower abs", "obliques", "core", "serratus anterior", "hip flexors"),
        "Back": ("back", "upper back", "lower back", "latissimus dorsi", "lats", "rhomboids", "spine"),
        "Chest": ("chest", "upper chest", "pectorals"),
        "Shoulders": ("shoulders", "deltoids", "delts", "rear deltoids", "rotator cuff"),
        "Traps": ("traps", "trapezius", "levator scapulae", "sternocleidomastoid"),
    }
)

__all__ = ["BODY_WEIGHT", "EQUIPMENT_LIST", "MUSCLE_GROUPS"]
