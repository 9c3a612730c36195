from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary

SessionKind = Literal["doubt-clearing", "1-on-1", "progress-review", "other"]


class SessionCreate(BaseModel):
    ta_id: int
    student_id: int
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    session_type: SessionKind = "doubt-clearing"
    scheduled_at: datetime
    duration: int = Field(default=60, gt=0)
    meeting_link: Optional[str] = None


class SessionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    session_type: Optional[SessionKind] = None
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class SessionComplete(BaseModel):
    notes: Optional[str] = None


class SessionRate(BaseModel):
    # range is checked by the lifecycle so a bad value is a 400, not a 422
    rating: int
    feedback: Optional[str] = None


class SessionRead(BaseModel):
    id: int
    ta_id: int
    student_id: int
    course_id: int
    ta: Optional[UserSummary] = None
    student: Optional[UserSummary] = None
    title: str
    description: Optional[str]
    session_type: str
    scheduled_at: datetime
    duration: int
    status: str
    meeting_link: Optional[str]
    notes: Optional[str]
    rating: Optional[int] = None
    rating_feedback: Optional[str] = None
    rated_by_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TAAvailability(BaseModel):
    ta_id: int
    day: date
    booked_sessions: list[SessionRead]
