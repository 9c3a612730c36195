from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary

DifficultyLevel = Literal["beginner", "intermediate", "advanced"]


class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=100)
    difficulty: DifficultyLevel = "beginner"
    price: float = Field(default=0, ge=0)
    thumbnail: str = ""


class CourseUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    difficulty: DifficultyLevel | None = None
    price: float | None = Field(default=None, ge=0)
    thumbnail: str | None = None


class CourseRead(BaseModel):
    id: int
    title: str
    description: str
    educator_id: int
    educator: UserSummary | None = None
    thumbnail: str | None = ""
    category: str
    difficulty: str
    price: float
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EnrollmentOut(BaseModel):
    id: int
    student_id: int
    course_id: int
    progress: int
    enrolled_at: datetime

    class Config:
        from_attributes = True


class EnrollmentDetail(EnrollmentOut):
    student: UserSummary


class TAAssignmentOut(BaseModel):
    id: int
    ta_id: int
    ta: UserSummary
    assigned_at: datetime
    student_ids: list[int]

    class Config:
        from_attributes = True


class CourseDetail(CourseRead):
    enrollments: list[EnrollmentDetail] = []
    ta_assignments: list[TAAssignmentOut] = []


class AssignTARequest(BaseModel):
    ta_id: int
    student_ids: list[int] = []
