from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.app_settings import settings
from core.utils.text import title_case


def _string_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return tuple()
    if isinstance(value, str):
        return (value,) if value else tuple()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if item is not None)
    return tuple()


class ExerciseRecord(BaseModel):
    name: str | None = None
    exercise_id: str | None = Field(default=None, alias="exerciseId")
    target_muscles: tuple[str, ...] = Field(default_factory=tuple, alias="targetMuscles")
    secondary_muscles: tuple[str, ...] = Field(default_factory=tuple, alias="secondaryMuscles")
    # None when the catalog sent no equipment at all; the dedup key tells the two apart
    equipments: tuple[str, ...] | None = None
    instructions: tuple[str, ...] = Field(default_factory=tuple)
    gif_url: str = Field(default="", alias="gifUrl")
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    @field_validator("name", "exercise_id", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value)
        return text or None

    @field_validator("target_muscles", "secondary_muscles", "instructions", mode="before")
    @classmethod
    def _sequence(cls, value: Any) -> tuple[str, ...]:
        return _string_tuple(value)

    @field_validator("equipments", mode="before")
    @classmethod
    def _equipment_sequence(cls, value: Any) -> tuple[str, ...] | None:
        if value is None or value == "":
            return None
        return _string_tuple(value)

    @field_validator("gif_url", mode="before")
    @classmethod
    def _gif_url(cls, value: Any) -> str:
        return str(value or "")


def new_item_id() -> str:
    return uuid4().hex


class WorkoutItem(BaseModel):
    id: str = Field(default_factory=new_item_id)
    name: str
    display_name: str = Field(default="", alias="displayName")
    muscle_group: str = Field(default=settings.CUSTOM_MUSCLE_GROUP, alias="muscleGroup")
    gif_url: str = Field(default="", alias="gifUrl")
    sets: int = Field(default=settings.DEFAULT_SETS, ge=1)
    reps: int = Field(default=settings.DEFAULT_REPS, ge=1)
    model_config = ConfigDict(extra="ignore", populate_by_name=True, validate_assignment=True)

    def model_post_init(self, __context: Any) -> None:
        if not self.display_name:
            self.display_name = title_case(self.name)

    @property
    def key(self) -> tuple[str, str]:
        return self.name, self.muscle_group


class WorkoutState(BaseModel):
    title: str = settings.DEFAULT_WORKOUT_TITLE
    items: list[WorkoutItem] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore")

    def find(self, item_id: str) -> WorkoutItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def to_payload(self) -> dict[str, Any]:
        return {
            "workoutTitle": self.title,
            "workouts": [item.model_dump(by_alias=True) for item in self.items],
        }


__all__ = ["ExerciseRecord", "WorkoutItem", "WorkoutState", "new_item_id"]
