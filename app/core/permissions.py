"""Role capabilities and relationship predicates.

Role checks go through one table keyed by action, so every route that asks
"may this role do X" gets the same answer. Relationship checks (owner,
enrolled, assigned TA, session participant) are pure functions over entities
the caller has already loaded.
"""
from fastapi import Depends, HTTPException, status

from app.core.current_user import get_current_user
from app.models.enums import UserRole
from app.models.user import User

EDUCATOR = UserRole.EDUCATOR.value
STUDENT = UserRole.STUDENT.value
TA = UserRole.TA.value
INDUSTRY_EXPERT = UserRole.INDUSTRY_EXPERT.value

CAPABILITIES: dict[str, frozenset[str]] = {
    "course:create": frozenset({EDUCATOR}),
    "course:enroll": frozenset({STUDENT}),
    "ta:manage": frozenset({EDUCATOR}),
    "assignment:submit": frozenset({STUDENT}),
    "progress:track": frozenset({STUDENT}),
    "session:list_mine": frozenset({TA, STUDENT}),
    "students:list": frozenset({EDUCATOR, TA}),
    "industry_rating:create": frozenset({INDUSTRY_EXPERT}),
}

CAPABILITY_ERRORS: dict[str, str] = {
    "course:create": "Only educators can create courses",
    "course:enroll": "Only students can enroll in courses",
    "ta:manage": "Only educators can manage TAs",
    "assignment:submit": "Only students can submit assignments",
    "progress:track": "Only students can track progress",
    "session:list_mine": "Only TAs and students can view sessions",
    "students:list": "Only educators and TAs can list students",
    "industry_rating:create": "Only industry experts can rate courses",
}

# roles a TA assignment may target; students are promoted on assignment
ASSIGNABLE_AS_TA = frozenset({STUDENT, TA})


def has_capability(role: str, action: str) -> bool:
    if action not in CAPABILITIES:
        raise KeyError(f"Unknown action: {action}")
    return role in CAPABILITIES[action]


def require_capability(action: str):
    """Dependency factory: current user, or 403 if their role lacks `action`."""
    if action not in CAPABILITIES:
        raise KeyError(f"Unknown action: {action}")

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user.role, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=CAPABILITY_ERRORS[action],
            )
        return current_user

    return dependency


def is_owner(course, user_id: int) -> bool:
    return course.educator_id == user_id


def is_enrolled(course, user_id: int) -> bool:
    return any(e.student_id == user_id for e in course.enrollments)


def is_assigned_ta(course, user_id: int) -> bool:
    return any(t.ta_id == user_id for t in course.ta_assignments)


def is_session_participant(session, user_id: int) -> bool:
    return user_id in (session.ta_id, session.student_id)


def ensure_owner(course, user: User, detail: str = "Not authorized") -> None:
    if not is_owner(course, user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
