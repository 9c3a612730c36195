from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class TAAssignment(Base):
    __tablename__ = "ta_assignments"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ta_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("course_id", "ta_id", name="uq_ta_assignments_course_ta"),
    )

    course = relationship("Course", back_populates="ta_assignments")
    ta = relationship("User")

    assigned_students = relationship(
        "TAAssignedStudent",
        back_populates="ta_assignment",
        cascade="all, delete-orphan",
    )

    @property
    def student_ids(self) -> list[int]:
        return [s.student_id for s in self.assigned_students]


class TAAssignedStudent(Base):
    __tablename__ = "ta_assigned_students"

    id = Column(Integer, primary_key=True, index=True)
    ta_assignment_id = Column(
        Integer,
        ForeignKey("ta_assignments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint(
            "ta_assignment_id", "student_id", name="uq_ta_assigned_students_pair"
        ),
    )

    ta_assignment = relationship("TAAssignment", back_populates="assigned_students")
    student = relationship("User")
