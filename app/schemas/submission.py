from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary


class FileRef(BaseModel):
    file_name: str
    file_url: str
    file_type: Optional[str] = None


class SubmissionCreate(BaseModel):
    files: list[FileRef] = []


class SubmissionRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    student: Optional[UserSummary] = None
    files: list[FileRef]
    submitted_at: datetime
    marks: Optional[float] = None
    feedback: Optional[str] = None
    graded_by_id: Optional[int] = None
    graded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubmissionGrade(BaseModel):
    student_id: int
    marks: float
    feedback: Optional[str] = None
