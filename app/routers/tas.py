import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_or_404
from app.core.permissions import TA, ensure_owner, require_capability
from app.models.course import Course
from app.models.enums import SessionStatus
from app.models.mentorship_session import MentorshipSession
from app.models.ta_assignment import TAAssignment
from app.models.user import User
from app.schemas.common import Message
from app.schemas.ta import (
    EducatorTARow,
    StudentWithProgress,
    TAAssignByEmail,
    TAAssigned,
    TAAssignmentUpdate,
    TADetail,
)
from app.services import tas as ta_service
from app.services.progress import round_half_up

logger = logging.getLogger(__name__)

router = APIRouter()


def _account_status(user: User) -> str:
    return "active" if user.is_active else "inactive"


def _session_stats(db: Session, ta_id: int, course_id: int) -> tuple[int, float | None]:
    completed = (
        db.query(MentorshipSession)
        .filter(
            MentorshipSession.ta_id == ta_id,
            MentorshipSession.course_id == course_id,
            MentorshipSession.status == SessionStatus.COMPLETED.value,
        )
        .all()
    )
    ratings = [s.rating for s in completed if s.rating is not None]
    average = round_half_up(sum(ratings) / len(ratings), 1) if ratings else None
    return len(completed), average


@router.get("/educator", response_model=list[EducatorTARow])
def educator_tas(
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("ta:manage")),
):
    courses = (
        db.query(Course)
        .filter(Course.educator_id == me.id)
        .order_by(Course.created_at.desc(), Course.id.desc())
        .all()
    )

    rows = []
    for course in courses:
        for assignment in course.ta_assignments:
            ta = assignment.ta
            sessions_completed, rating = _session_stats(db, ta.id, course.id)
            rows.append(
                {
                    "id": ta.id,
                    "name": ta.full_name,
                    "email": ta.email,
                    "avatar": ta.profile_picture or "",
                    "course_id": course.id,
                    "course_name": course.title,
                    "assigned_students": len(assignment.assigned_students),
                    "sessions_completed": sessions_completed,
                    "rating": rating,
                    "joined_date": ta.created_at,
                    "status": _account_status(ta),
                    "bio": ta.bio or "",
                }
            )
    return rows


@router.post("/assign", response_model=TAAssigned)
def assign_ta_by_email(
    payload: TAAssignByEmail,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("ta:manage")),
):
    course = get_course_or_404(db, payload.course_id)
    ensure_owner(course, me, "Not authorized to assign TAs to this course")

    ta, created = ta_service.find_or_create_ta(db, payload.ta_email, course, payload.name)
    assignment = ta_service.assign_ta(db, course, ta, payload.assigned_students)

    db.commit()
    db.refresh(assignment)
    return {
        "id": ta.id,
        "name": ta.full_name,
        "email": ta.email,
        "course_id": course.id,
        "course_name": course.title,
        "assigned_students": len(assignment.assigned_students),
        "created": created,
    }


@router.delete("/{ta_id}/course/{course_id}", response_model=Message)
def remove_ta(
    ta_id: int,
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("ta:manage")),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Not authorized to manage TAs for this course")

    if not ta_service.remove_ta(course, ta_id):
        raise HTTPException(status_code=404, detail="TA not assigned to this course")

    db.commit()
    return {"message": "TA removed from course successfully"}


@router.put("/{ta_id}/course/{course_id}", response_model=TAAssigned)
def update_ta_students(
    ta_id: int,
    course_id: int,
    payload: TAAssignmentUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("ta:manage")),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Not authorized to manage TAs for this course")

    assignment = ta_service.find_assignment(course, ta_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="TA not assigned to this course")

    ta_service.update_assigned_students(db, course, assignment, payload.assigned_students)
    db.commit()
    db.refresh(assignment)

    ta = assignment.ta
    return {
        "id": ta.id,
        "name": ta.full_name,
        "email": ta.email,
        "course_id": course.id,
        "course_name": course.title,
        "assigned_students": len(assignment.assigned_students),
    }


@router.get("/students/{course_id}", response_model=list[StudentWithProgress])
def course_students(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("ta:manage")),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Not authorized to view students for this course")

    return [
        {
            "id": e.student.id,
            "name": e.student.full_name,
            "email": e.student.email,
            "progress": e.progress or 0,
        }
        for e in sorted(course.enrollments, key=lambda e: e.enrolled_at)
    ]


@router.get("/{ta_id}", response_model=TADetail)
def get_ta(
    ta_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    ta = get_or_404(db, User, ta_id, "TA not found")
    if ta.role != TA:
        raise HTTPException(status_code=404, detail="TA not found")

    assignments = (
        db.query(TAAssignment)
        .filter(TAAssignment.ta_id == ta.id)
        .order_by(TAAssignment.assigned_at.asc(), TAAssignment.id.asc())
        .all()
    )
    return {
        "id": ta.id,
        "name": ta.full_name,
        "email": ta.email,
        "avatar": ta.profile_picture or "",
        "bio": ta.bio,
        "joined_date": ta.created_at,
        "status": _account_status(ta),
        "courses": [
            {
                "id": a.course.id,
                "title": a.course.title,
                "educator": a.course.educator.full_name,
                "assigned_students": len(a.assigned_students),
            }
            for a in assignments
        ],
    }
