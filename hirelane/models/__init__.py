from .tenant import Tenant
from .user import User
from .job import Job
from .candidate import Candidate
from .application import Application, Answer, Stage
from .interview_slot import InterviewSlot

__all__ = [
    "Tenant",
    "User",
    "Job",
    "Candidate",
    "Application",
    "Answer",
    "Stage",
    "InterviewSlot",
]
