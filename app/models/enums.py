import enum


class UserRole(str, enum.Enum):
    EDUCATOR = "educator"
    STUDENT = "student"
    TA = "ta"
    INDUSTRY_EXPERT = "industry_expert"


class Difficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SessionType(str, enum.Enum):
    DOUBT_CLEARING = "doubt-clearing"
    ONE_ON_ONE = "1-on-1"
    PROGRESS_REVIEW = "progress-review"
    OTHER = "other"


class SessionStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SubmissionState(str, enum.Enum):
    UNSUBMITTED = "unsubmitted"
    SUBMITTED = "submitted"
    GRADED = "graded"
