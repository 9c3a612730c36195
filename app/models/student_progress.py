from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class StudentProgress(Base):
    __tablename__ = "student_progress"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    overall_progress = Column(Integer, nullable=False, default=0)
    last_accessed = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    total_time_spent = Column(Integer, nullable=False, default=0)  # seconds

    version = Column(Integer, nullable=False)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_progress_student_course"),
    )
    __mapper_args__ = {"version_id_col": version}

    student = relationship("User")
    course = relationship("Course", back_populates="progress_records")

    lectures_watched = relationship(
        "LectureWatch", back_populates="progress", cascade="all, delete-orphan"
    )
    documents_viewed = relationship(
        "DocumentView", back_populates="progress", cascade="all, delete-orphan"
    )


class LectureWatch(Base):
    __tablename__ = "lecture_watches"

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(
        Integer,
        ForeignKey("student_progress.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lecture_id = Column(
        Integer, ForeignKey("lectures.id", ondelete="CASCADE"), nullable=False, index=True
    )
    watch_time = Column(Integer, nullable=False, default=0)  # seconds
    is_completed = Column(Boolean, nullable=False, default=False)
    watched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("progress_id", "lecture_id", name="uq_lecture_watch_pair"),
    )

    progress = relationship("StudentProgress", back_populates="lectures_watched")
    lecture = relationship("Lecture", back_populates="watches")


class DocumentView(Base):
    __tablename__ = "document_views"

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(
        Integer,
        ForeignKey("student_progress.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id = Column(
        Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    viewed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("progress_id", "document_id", name="uq_document_view_pair"),
    )

    progress = relationship("StudentProgress", back_populates="documents_viewed")
    document = relationship("Document", back_populates="views")
