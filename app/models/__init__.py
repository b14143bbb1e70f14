"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.body_weight import BodyWeightEntry
from app.models.checkin import WorkoutCheckin
from app.models.profile import UserProfile
from app.models.quick_log import QuickWorkout
from app.models.session import ExerciseSet, SessionExercise, WorkoutSession

__all__ = [
    "BodyWeightEntry",
    "ExerciseSet",
    "QuickWorkout",
    "SessionExercise",
    "UserProfile",
    "WorkoutCheckin",
    "WorkoutSession",
]
