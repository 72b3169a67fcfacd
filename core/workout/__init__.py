from .location import LinkLocation, PageLocation
from .manager import WorkoutManager
from .share_link import decode_workout, encode_workout, has_workout_params, parse_query, to_query

__all__ = [
    "LinkLocation",
    "PageLocation",
    "WorkoutManager",
    "decode_workout",
    "encode_workout",
    "has_workout_params",
    "parse_query",
    "to_query",
]
