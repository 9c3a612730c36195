"""Assigning teaching assistants to courses."""
import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ValidationFailed
from app.core.permissions import ASSIGNABLE_AS_TA, is_enrolled
from app.core.security import placeholder_password_hash
from app.models.enums import UserRole
from app.models.ta_assignment import TAAssignedStudent, TAAssignment
from app.models.user import User

logger = logging.getLogger(__name__)


def _split_name(name: str | None) -> tuple[str, str]:
    parts = (name or "").split()
    if not parts:
        return "TA", "User"
    return parts[0], " ".join(parts[1:]) or "User"


def find_or_create_ta(db: Session, email: str, course, name: str | None = None) -> tuple[User, bool]:
    """
    Look up a user by email, creating a placeholder TA account when none exists.

    Returns (user, created). The placeholder credential is a hash of a random
    secret, so the account cannot be used until its password is reset.
    """
    email = email.strip().lower()
    user = db.scalars(select(User).where(User.email == email)).first()
    if user is not None:
        return user, False

    first_name, last_name = _split_name(name)
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        hashed_password=placeholder_password_hash(),
        role=UserRole.TA.value,
        bio=f"Teaching Assistant for {course.title}",
        is_active=True,
    )
    db.add(user)
    db.flush()
    logger.info("Created placeholder TA account %s for course %s", email, course.id)
    return user, True


def promote_to_ta(user: User) -> None:
    if user.role not in ASSIGNABLE_AS_TA:
        raise ValidationFailed(f"Cannot assign a user with role '{user.role}' as a TA")
    if user.role == UserRole.STUDENT.value:
        user.role = UserRole.TA.value
        logger.info("Promoted user %s from student to ta", user.id)


def _validate_students(course, student_ids: Sequence[int]) -> list[int]:
    unique_ids = list(dict.fromkeys(student_ids))
    not_enrolled = [sid for sid in unique_ids if not is_enrolled(course, sid)]
    if not_enrolled:
        raise ValidationFailed(f"Students not enrolled in this course: {not_enrolled}")
    return unique_ids


def find_assignment(course, ta_id: int) -> TAAssignment | None:
    return next((t for t in course.ta_assignments if t.ta_id == ta_id), None)


def set_assigned_students(assignment: TAAssignment, student_ids: Sequence[int]) -> None:
    # replace, never append
    assignment.assigned_students = [
        TAAssignedStudent(student_id=sid) for sid in student_ids
    ]


def assign_ta(db: Session, course, ta: User, student_ids: Sequence[int] = ()) -> TAAssignment:
    promote_to_ta(ta)
    student_ids = _validate_students(course, student_ids)

    assignment = find_assignment(course, ta.id)
    if assignment is None:
        assignment = TAAssignment(ta_id=ta.id)
        course.ta_assignments.append(assignment)
        logger.info("Assigned TA %s to course %s", ta.id, course.id)
    else:
        # clear first so the unique (assignment, student) pairs can be re-inserted
        assignment.assigned_students.clear()
        db.flush()
        logger.info("Updated TA %s assignment on course %s", ta.id, course.id)

    set_assigned_students(assignment, student_ids)
    return assignment


def update_assigned_students(db: Session, course, assignment: TAAssignment, student_ids: Sequence[int]) -> None:
    student_ids = _validate_students(course, student_ids)
    assignment.assigned_students.clear()
    db.flush()
    set_assigned_students(assignment, student_ids)


def remove_ta(course, ta_id: int) -> bool:
    assignment = find_assignment(course, ta_id)
    if assignment is None:
        return False
    course.ta_assignments.remove(assignment)
    logger.info("Removed TA %s from course %s", ta_id, course.id)
    return True
