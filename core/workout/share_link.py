from typing import Iterable, Mapping
from urllib.parse import parse_qsl, urlencode

from config.app_settings import settings
from core.schemas import WorkoutItem, WorkoutState
from core.utils.text import parse_int

TITLE_KEY = "workoutTitle"
FIRST_ITEM_KEY = "w1Name"

Params = Mapping[str, str] | Iterable[tuple[str, str]]


def item_key(index: int, field: str) -> str:
    return f"w{index}{field}"


def _first_values(params: Params) -> dict[str, str]:
    # a repeated key resolves to its first value
    pairs = params.items() if isinstance(params, Mapping) else params
    values: dict[str, str] = {}
    for key, value in pairs:
        values.setdefault(key, value)
    return values


def _count(raw: str | None, default: int) -> int:
    value = parse_int(raw)
    if value is None or value < 1:
        return default
    return value


def encode_workout(state: WorkoutState) -> list[tuple[str, str]]:
    # gif urls and item ids stay out of the link
    pairs: list[tuple[str, str]] = []
    if state.title:
        pairs.append((TITLE_KEY, state.title))
    for index, item in enumerate(state.items, start=1):
        pairs.extend(
            [
                (item_key(index, "Name"), item.name),
                (item_key(index, "Sets"), str(item.sets)),
                (item_key(index, "Reps"), str(item.reps)),
                (item_key(index, "Group"), item.muscle_group),
            ]
        )
    return pairs


def decode_workout(params: Params) -> WorkoutState:
    values = _first_values(params)
    title = values.get(TITLE_KEY) or settings.DEFAULT_WORKOUT_TITLE

    items: list[WorkoutItem] = []
    index = 1
    while True:
        name = values.get(item_key(index, "Name"))
        if not name:
            break
        items.append(
            WorkoutItem(
                name=name,
                muscle_group=values.get(item_key(index, "Group")) or settings.CUSTOM_MUSCLE_GROUP,
                gif_url="",
                sets=_count(values.get(item_key(index, "Sets")), settings.DEFAULT_SETS),
                reps=_count(values.get(item_key(index, "Reps")), settings.DEFAULT_REPS),
            )
        )
        index += 1
    return WorkoutState(title=title, items=items)


def has_workout_params(params: Params) -> bool:
    values = _first_values(params)
    return TITLE_KEY in values or FIRST_ITEM_KEY in values


def to_query(pairs: Iterable[tuple[str, str]]) -> str:
    return urlencode(list(pairs))


def parse_query(query: str) -> list[tuple[str, str]]:
    return parse_qsl(query.lstrip("?"), keep_blank_values=True)


__all__ = [
    "TITLE_KEY",
    "decode_workout",
    "encode_workout",
    "has_workout_params",
    "item_key",
    "parse_query",
    "to_query",
]
