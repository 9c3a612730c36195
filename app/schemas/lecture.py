from datetime import datetime

from pydantic import BaseModel, Field


class LectureCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    video_url: str = Field(min_length=1)
    duration: int = Field(ge=0)
    order: int | None = None
    transcript: str = ""


class LectureUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    video_url: str | None = Field(default=None, min_length=1)
    duration: int | None = Field(default=None, ge=0)
    order: int | None = None
    transcript: str | None = None


class LectureRead(BaseModel):
    id: int
    course_id: int
    title: str
    description: str
    video_url: str
    duration: int
    order: int
    is_published: bool
    transcript: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LectureReorder(BaseModel):
    lecture_ids: list[int]
