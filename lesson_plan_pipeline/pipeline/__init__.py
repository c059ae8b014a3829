from .pipeline import LessonPlanPipeline, DefaultLessonPlanPipeline, create_default_pipeline
from .models import (
    LessonPlanResult,
    NoResultError,
    Notice,
    RequestInFlightError,
    RequestSlot,
    RequestState,
)

__all__ = [
    "LessonPlanPipeline",
    "DefaultLessonPlanPipeline",
    "create_default_pipeline",
    "LessonPlanResult",
    "NoResultError",
    "Notice",
    "RequestInFlightError",
    "RequestSlot",
    "RequestState",
]
