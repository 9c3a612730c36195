from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class TAAssignByEmail(BaseModel):
    ta_email: EmailStr
    course_id: int
    name: Optional[str] = None
    assigned_students: list[int] = []


class TAAssignmentUpdate(BaseModel):
    assigned_students: list[int] = []


class TAAssigned(BaseModel):
    id: int
    name: str
    email: str
    course_id: int
    course_name: str
    assigned_students: int
    created: bool = False


class EducatorTARow(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = ""
    course_id: int
    course_name: str
    assigned_students: int
    sessions_completed: int
    rating: Optional[float] = None
    joined_date: datetime
    status: str
    bio: str = ""


class StudentWithProgress(BaseModel):
    id: int
    name: str
    email: str
    progress: int


class TACourse(BaseModel):
    id: int
    title: str
    educator: str
    assigned_students: int


class TADetail(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = ""
    bio: Optional[str] = None
    joined_date: datetime
    status: str
    courses: list[TACourse]
