from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


class IndustryRating(Base):
    __tablename__ = "industry_ratings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expert_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    relevance: Mapped[int] = mapped_column(Integer, nullable=False)
    practicality: Mapped[int] = mapped_column(Integer, nullable=False)
    industry_alignment: Mapped[int] = mapped_column(Integer, nullable=False)
    skill_development: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_quality: Mapped[int] = mapped_column(Integer, nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("course_id", "expert_id", name="uq_industry_rating_course_expert"),
    )

    course = relationship("Course", back_populates="industry_ratings")
    expert = relationship("User")
