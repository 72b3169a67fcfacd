from .stores import DurableStore, MemoryStore, RedisStore
from .workout_storage import WorkoutStorage

__all__ = ["DurableStore", "MemoryStore", "RedisStore", "WorkoutStorage"]
