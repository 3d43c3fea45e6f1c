from models.exceptions import NotFoundError, RosterError, ValidationError
from models.course import Course
from models.student import Student
from models.roster import RosterManager

__all__ = [
    "RosterError",
    "ValidationError",
    "NotFoundError",
    "Course",
    "Student",
    "RosterManager",
]
