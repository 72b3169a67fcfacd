from core.services.api_client import APIClient, APIClientHTTPError, APIClientTransportError
from core.services.exercise_service import ExerciseService
from core.services.gif_service import GifResolver


__all__ = [
    "APIClient",
    "APIClientHTTPError",
    "APIClientTransportError",
    "ExerciseService",
    "GifResolver",
]
