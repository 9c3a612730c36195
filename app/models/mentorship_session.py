from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.enums import SessionStatus, SessionType


class MentorshipSession(Base):
    __tablename__ = "mentorship_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    ta_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    session_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default=SessionType.DOUBT_CLEARING.value
    )
    scheduled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=60)  # minutes
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SessionStatus.SCHEDULED.value
    )
    meeting_link: Mapped[str | None] = mapped_column(String(500))
    notes: Mapped[str | None] = mapped_column(Text)

    # Rating (set only once the session is completed)
    rating: Mapped[int | None] = mapped_column(Integer)
    rating_feedback: Mapped[str | None] = mapped_column(Text)
    rated_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )

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

    ta = relationship("User", foreign_keys=[ta_id])
    student = relationship("User", foreign_keys=[student_id])
    rated_by = relationship("User", foreign_keys=[rated_by_id])
    course = relationship("Course", back_populates="mentorship_sessions")
