from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary


class LectureWatchUpdate(BaseModel):
    watch_time: int = Field(default=0, ge=0)
    is_completed: bool = False


class LectureWatchRead(BaseModel):
    lecture_id: int
    watch_time: int
    is_completed: bool
    watched_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentViewRead(BaseModel):
    document_id: int
    viewed_at: datetime

    class Config:
        from_attributes = True


class ProgressRead(BaseModel):
    id: int
    student_id: int
    course_id: int
    overall_progress: int
    last_accessed: datetime
    total_time_spent: int
    lectures_watched: list[LectureWatchRead] = []
    documents_viewed: list[DocumentViewRead] = []

    class Config:
        from_attributes = True


class ProgressWithStudent(ProgressRead):
    student: UserSummary


class CourseAnalytics(BaseModel):
    total_students: int
    average_progress: float
    completed_students: int
    active_students: int
    completion_rate: float


class CourseAnalyticsResponse(BaseModel):
    analytics: CourseAnalytics
    progress_records: list[ProgressWithStudent]
