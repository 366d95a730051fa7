from extensions import db
from ._common import DAYS_OF_WEEK
from .branch import Branch
from .schedule import BranchSchedule
from .teacher import Teacher
from .assignment import WeeklyAssignment

__all__ = [
    "db",
    "DAYS_OF_WEEK",
    "Branch",
    "BranchSchedule",
    "Teacher",
    "WeeklyAssignment",
]
