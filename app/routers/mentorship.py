import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_or_404, get_session_or_404
from app.core.permissions import (
    STUDENT,
    TA,
    is_assigned_ta,
    is_enrolled,
    is_owner,
    is_session_participant,
    require_capability,
)
from app.core.timeutil import as_utc, utcnow
from app.models.enums import SessionStatus
from app.models.mentorship_session import MentorshipSession
from app.models.user import User
from app.schemas.mentorship import (
    SessionComplete,
    SessionCreate,
    SessionRate,
    SessionRead,
    SessionUpdate,
    TAAvailability,
)
from app.services import lifecycle

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_participant(session: MentorshipSession, user: User, action: str) -> None:
    if not is_session_participant(session, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this session",
        )


def _ensure_session_ta(session: MentorshipSession, user: User, action: str) -> None:
    if session.ta_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only the TA can {action} this session",
        )


@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: SessionCreate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, payload.course_id)
    ta = get_or_404(db, User, payload.ta_id, "TA not found")
    student = get_or_404(db, User, payload.student_id, "Student not found")

    if me.id not in (ta.id, student.id):
        raise HTTPException(status_code=403, detail="You can only create sessions for yourself")

    if ta.role != TA or not is_assigned_ta(course, ta.id):
        raise HTTPException(status_code=400, detail="Invalid TA for this course")
    if student.role != STUDENT or not is_enrolled(course, student.id):
        raise HTTPException(status_code=400, detail="Invalid student for this course")

    data = payload.model_dump()
    data["scheduled_at"] = as_utc(data["scheduled_at"])
    session = MentorshipSession(**data, status=SessionStatus.SCHEDULED.value)
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Session %s scheduled: ta=%s student=%s", session.id, ta.id, student.id)
    return session


@router.get("/my-sessions", response_model=list[SessionRead])
def my_sessions(
    status_filter: Optional[SessionStatus] = Query(None, alias="status"),
    upcoming: bool = False,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("session:list_mine")),
):
    query = db.query(MentorshipSession)
    if me.role == TA:
        query = query.filter(MentorshipSession.ta_id == me.id)
    else:
        query = query.filter(MentorshipSession.student_id == me.id)

    if status_filter is not None:
        query = query.filter(MentorshipSession.status == status_filter.value)
    if upcoming:
        query = query.filter(MentorshipSession.scheduled_at >= utcnow())

    return query.order_by(MentorshipSession.scheduled_at.asc()).all()


@router.get("/course/{course_id}", response_model=list[SessionRead])
def course_sessions(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    if not (is_owner(course, me.id) or is_assigned_ta(course, me.id) or is_enrolled(course, me.id)):
        raise HTTPException(
            status_code=403,
            detail="Not authorized to view sessions for this course",
        )

    return (
        db.query(MentorshipSession)
        .filter(MentorshipSession.course_id == course_id)
        .order_by(MentorshipSession.scheduled_at.desc())
        .all()
    )


@router.get("/ta/{ta_id}/availability", response_model=TAAvailability)
def ta_availability(
    ta_id: int,
    date_str: Optional[str] = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    if not date_str:
        raise HTTPException(status_code=400, detail="Date parameter is required")
    try:
        day = date.fromisoformat(date_str)
    except ValueError:
        raise HTTPException(status_code=400, detail="Date must be formatted YYYY-MM-DD")

    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = datetime.combine(day, time.max, tzinfo=timezone.utc)

    booked = (
        db.query(MentorshipSession)
        .filter(
            MentorshipSession.ta_id == ta_id,
            MentorshipSession.scheduled_at >= start,
            MentorshipSession.scheduled_at <= end,
            MentorshipSession.status.in_(
                [SessionStatus.SCHEDULED.value, SessionStatus.ONGOING.value]
            ),
        )
        .order_by(MentorshipSession.scheduled_at.asc())
        .all()
    )
    return {"ta_id": ta_id, "day": day, "booked_sessions": booked}


@router.get("/{session_id}", response_model=SessionRead)
def get_session(
    session_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_participant(session, me, "view")
    return session


@router.put("/{session_id}", response_model=SessionRead)
def update_session(
    session_id: int,
    payload: SessionUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_participant(session, me, "update")
    lifecycle.ensure_session_editable(session)

    # status only moves through the transition endpoints below
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("title", "session_type", "scheduled_at", "duration"):
            continue
        if field == "scheduled_at":
            value = as_utc(value)
        setattr(session, field, value)
    session.updated_at = utcnow()

    db.commit()
    db.refresh(session)
    return session


@router.patch("/{session_id}/start", response_model=SessionRead)
def start_session(
    session_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_session_ta(session, me, "start")

    lifecycle.transition_session(session, SessionStatus.ONGOING)
    db.commit()
    db.refresh(session)
    return session


@router.patch("/{session_id}/cancel", response_model=SessionRead)
def cancel_session(
    session_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_participant(session, me, "cancel")

    lifecycle.transition_session(session, SessionStatus.CANCELLED)
    db.commit()
    db.refresh(session)
    return session


@router.patch("/{session_id}/complete", response_model=SessionRead)
def complete_session(
    session_id: int,
    payload: Optional[SessionComplete] = None,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_session_ta(session, me, "complete")

    lifecycle.transition_session(session, SessionStatus.COMPLETED)
    if payload is not None and payload.notes:
        session.notes = payload.notes

    db.commit()
    db.refresh(session)
    return session


@router.patch("/{session_id}/rate", response_model=SessionRead)
def rate_session(
    session_id: int,
    payload: SessionRate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    session = get_session_or_404(db, session_id)
    _ensure_participant(session, me, "rate")

    lifecycle.rate_session(session, payload.rating, payload.feedback, me.id)
    db.commit()
    db.refresh(session)
    return session
