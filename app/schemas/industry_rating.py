from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserSummary


class IndustryRatingCreate(BaseModel):
    relevance: int = Field(ge=1, le=5)
    practicality: int = Field(ge=1, le=5)
    industry_alignment: int = Field(ge=1, le=5)
    skill_development: int = Field(ge=1, le=5)
    overall_quality: int = Field(ge=1, le=5)
    feedback: Optional[str] = None


class IndustryRatingRead(BaseModel):
    id: int
    course_id: int
    expert_id: int
    expert: UserSummary
    relevance: int
    practicality: int
    industry_alignment: int
    skill_development: int
    overall_quality: int
    feedback: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RatingAverages(BaseModel):
    relevance: float
    practicality: float
    industry_alignment: float
    skill_development: float
    overall_quality: float
    total_ratings: int


class CourseIndustryRatings(BaseModel):
    ratings: list[IndustryRatingRead]
    averages: Optional[RatingAverages] = None
