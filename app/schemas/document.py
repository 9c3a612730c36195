from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

FileType = Literal["pdf", "doc", "docx", "ppt", "pptx", "txt"]


class DocumentCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    file_url: str = Field(min_length=1)
    file_type: FileType
    file_size: int = Field(ge=0)
    order: Optional[int] = None


class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    file_url: Optional[str] = Field(default=None, min_length=1)
    file_type: Optional[FileType] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    order: Optional[int] = None


class DocumentRead(BaseModel):
    id: int
    course_id: int
    title: str
    description: Optional[str]
    file_url: str
    file_type: str
    file_size: int
    order: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DocumentReorder(BaseModel):
    document_ids: list[int]
