import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_document_or_404, get_lecture_or_404
from app.core.permissions import ensure_owner, is_enrolled, require_capability
from app.models.student_progress import StudentProgress
from app.models.user import User
from app.schemas.common import Message
from app.schemas.progress import (
    CourseAnalyticsResponse,
    LectureWatchRead,
    LectureWatchUpdate,
    ProgressRead,
)
from app.services import progress as progress_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_enrolled(course, user: User) -> None:
    if not is_enrolled(course, user.id):
        raise HTTPException(status_code=403, detail="Not enrolled in this course")


@router.get("/course/{course_id}", response_model=ProgressRead)
def course_progress(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("progress:track")),
):
    progress = progress_service.get_progress(db, me.id, course_id)
    if progress is None:
        raise HTTPException(status_code=404, detail="Progress not found")
    return progress


@router.post("/lecture/{lecture_id}/watch", response_model=LectureWatchRead)
def watch_lecture(
    lecture_id: int,
    payload: LectureWatchUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("progress:track")),
):
    lecture = get_lecture_or_404(db, lecture_id)
    _ensure_enrolled(lecture.course, me)

    progress = progress_service.get_or_create_progress(db, me.id, lecture.course_id)
    watch = progress_service.record_lecture_watch(
        progress, lecture, payload.watch_time, payload.is_completed
    )
    db.flush()
    overall = progress_service.recompute_progress(db, progress)

    db.commit()
    db.refresh(watch)
    logger.info(
        "Student %s watched lecture %s (course progress %s%%)", me.id, lecture.id, overall
    )
    return watch


@router.post("/document/{document_id}/view", response_model=Message)
def view_document(
    document_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("progress:track")),
):
    document = get_document_or_404(db, document_id)
    _ensure_enrolled(document.course, me)

    progress = progress_service.get_or_create_progress(db, me.id, document.course_id)
    progress_service.record_document_view(progress, document)
    db.flush()
    progress_service.recompute_progress(db, progress)

    db.commit()
    return {"message": "Document view recorded"}


@router.get("/my-progress", response_model=list[ProgressRead])
def my_progress(
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("progress:track")),
):
    return (
        db.query(StudentProgress)
        .filter(StudentProgress.student_id == me.id)
        .order_by(StudentProgress.last_accessed.desc(), StudentProgress.id.desc())
        .all()
    )


@router.get("/course/{course_id}/analytics", response_model=CourseAnalyticsResponse)
def course_analytics(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Only course educator can view analytics")

    records = (
        db.query(StudentProgress)
        .filter(StudentProgress.course_id == course_id)
        .order_by(StudentProgress.overall_progress.desc(), StudentProgress.id.asc())
        .all()
    )
    return {
        "analytics": progress_service.course_analytics(records),
        "progress_records": records,
    }
