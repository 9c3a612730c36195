from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.enums import Difficulty


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    educator_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    thumbnail: Mapped[str | None] = mapped_column(String(500), default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    difficulty: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Difficulty.BEGINNER.value
    )
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __mapper_args__ = {"version_id_col": version}

    educator = relationship("User", back_populates="courses")

    enrollments = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )

    ta_assignments = relationship(
        "TAAssignment", back_populates="course", cascade="all, delete-orphan"
    )

    lectures = relationship(
        "Lecture", back_populates="course", cascade="all, delete-orphan"
    )

    documents = relationship(
        "Document", back_populates="course", cascade="all, delete-orphan"
    )

    assignments = relationship(
        "Assignment", back_populates="course", cascade="all, delete-orphan"
    )

    progress_records = relationship(
        "StudentProgress", back_populates="course", cascade="all, delete-orphan"
    )

    mentorship_sessions = relationship(
        "MentorshipSession", back_populates="course", cascade="all, delete-orphan"
    )

    industry_ratings = relationship(
        "IndustryRating", back_populates="course", cascade="all, delete-orphan"
    )
