"""Workout pipeline package."""

from .report import WorkoutReport
from .service import run_workout, find_workout_image, Notifier

__all__ = [
    "WorkoutReport",
    "run_workout",
    "find_workout_image",
    "Notifier",
]
