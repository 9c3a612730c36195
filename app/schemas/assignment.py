from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.submission import FileRef, SubmissionRead


class AssignmentCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    instructions: Optional[str] = None
    due_date: datetime
    max_marks: float = Field(ge=0)
    attachments: list[FileRef] = []


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    instructions: Optional[str] = None
    due_date: Optional[datetime] = None
    max_marks: Optional[float] = Field(default=None, ge=0)
    attachments: Optional[list[FileRef]] = None


class AssignmentRead(BaseModel):
    id: int
    course_id: int
    title: str
    description: str
    instructions: Optional[str]
    due_date: datetime
    max_marks: float
    attachments: list[FileRef]
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssignmentDetail(AssignmentRead):
    submissions: list[SubmissionRead] = []


class StudentAssignmentRead(AssignmentRead):
    has_submitted: bool = False
    submission_status: str = "unsubmitted"
    submission: Optional[SubmissionRead] = None


class AssignmentSubmissions(BaseModel):
    assignment_id: int
    title: str
    max_marks: float
    due_date: datetime
    submissions: list[SubmissionRead]
