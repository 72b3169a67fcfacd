# ruff: noqa: E501
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Core Settings ---
    ENVIRONMENT: Annotated[str, Field(default="development", description="Application environment (e.g., 'development', 'staging', 'production').")]
    LOG_LEVEL: Annotated[str, Field(default="INFO", description="Logging level for the application (e.g., DEBUG, INFO, WARNING).")]

    # --- Exercise Catalog API ---
    EXERCISE_API_URL: Annotated[str, Field(default="https://www.exercisedb.dev/api/v1", description="Base URL of the remote exercise catalog.")]
    EXERCISE_API_PAGE_LIMIT: Annotated[int, Field(default=100, description="Maximum number of exercises requested per muscle.")]
    EXERCISE_API_INCLUDE_SECONDARY: Annotated[bool, Field(default=False, description="Ask the catalog to include exercises where the muscle is only secondary.")]
    EXERCISE_FETCH_THROTTLE: Annotated[float, Field(default=0.3, description="Delay in seconds between sequential per-muscle requests of one group.")]

    # --- HTTP Client ---
    API_TIMEOUT: Annotated[float | None, Field(default=None, description="Request timeout in seconds. None keeps the transport default.")]
    API_MAX_RETRIES: Annotated[int, Field(default=0, ge=0, description="Retries for 429/5xx and transport errors. Keep 0 so each muscle fetch is exactly one request; a positive value re-sends before the empty result is cached.")]
    API_RETRY_INITIAL_DELAY: Annotated[float, Field(default=1.0, description="First retry delay in seconds.")]
    API_RETRY_BACKOFF_FACTOR: Annotated[float, Field(default=2.0, description="Multiplier applied to the retry delay after each attempt.")]
    API_RETRY_MAX_DELAY: Annotated[float, Field(default=10.0, description="Upper bound for the retry delay in seconds.")]
    API_MAX_CONNECTIONS: Annotated[int, Field(default=10, description="Connection pool size of the shared HTTP client.")]
    API_MAX_KEEPALIVE_CONNECTIONS: Annotated[int, Field(default=5, description="Keep-alive connections kept by the shared HTTP client.")]

    # --- Durable Store ---
    REDIS_URL: Annotated[str | None, Field(default=None, description="Redis URL for the durable store. In-memory store is used when unset.")]
    STORE_NAMESPACE: Annotated[str, Field(default="webfit", description="Prefix for durable store keys.")]
    WORKOUT_STORAGE_KEY: Annotated[str, Field(default="webfit-workout-state", description="Store key holding the serialized workout.")]
    CONTACT_STORAGE_KEY: Annotated[str, Field(default="webfit-contact-submissions", description="Store key holding contact form submissions.")]

    # --- Workout Defaults ---
    DEFAULT_WORKOUT_TITLE: Annotated[str, Field(default="My Workout", description="Title used when none is provided.")]
    DEFAULT_SETS: Annotated[int, Field(default=3, ge=1, description="Sets assigned to a new or undecodable workout item.")]
    DEFAULT_REPS: Annotated[int, Field(default=10, ge=1, description="Reps assigned to a new or undecodable workout item.")]
    CUSTOM_MUSCLE_GROUP: Annotated[str, Field(default="Custom", description="Muscle group assigned when the group is unknown.")]
    SHARE_BASE_URL: Annotated[str, Field(default="http://localhost", description="Scheme and host prepended to the page path when building share links.")]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("EXERCISE_API_URL", "SHARE_BASE_URL", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def _empty_redis_url(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
