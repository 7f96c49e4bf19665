"""Models Package - Export all models for easy imports"""

from app.models.base import MAX_INTEGER, MIN_INTEGER, RosterRecord
from app.models.student import Student
from app.models.teacher import Teacher


__all__ = [
    "MAX_INTEGER",
    "MIN_INTEGER",
    "RosterRecord",
    "Student",
    "Teacher",
]
