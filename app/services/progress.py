"""
Progress tracking for a (student, course) pair.

overall_progress = round(100 * completed / total), where total counts the
course's *published* lectures and documents (queried fresh each time) and
completed counts completed lecture watches plus document views that point
at currently published content. 0 when the course has nothing published.
"""
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import ACTIVE_WINDOW
from app.core.timeutil import as_utc, utcnow
from app.models.document import Document
from app.models.enrollment import Enrollment
from app.models.lecture import Lecture
from app.models.student_progress import DocumentView, LectureWatch, StudentProgress

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = 0) -> float:
    quant = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))


def compute_overall_progress(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    pct = int(round_half_up(100 * completed / total))
    return max(0, min(100, pct))


def published_content_ids(db: Session, course_id: int) -> tuple[set[int], set[int]]:
    lecture_ids = set(
        db.scalars(
            select(Lecture.id).where(
                Lecture.course_id == course_id, Lecture.is_published.is_(True)
            )
        )
    )
    document_ids = set(
        db.scalars(
            select(Document.id).where(
                Document.course_id == course_id, Document.is_published.is_(True)
            )
        )
    )
    return lecture_ids, document_ids


def recompute_progress(db: Session, progress: StudentProgress) -> int:
    lecture_ids, document_ids = published_content_ids(db, progress.course_id)

    completed_lectures = sum(
        1
        for w in progress.lectures_watched
        if w.is_completed and w.lecture_id in lecture_ids
    )
    viewed_documents = sum(
        1 for v in progress.documents_viewed if v.document_id in document_ids
    )

    progress.overall_progress = compute_overall_progress(
        completed_lectures + viewed_documents,
        len(lecture_ids) + len(document_ids),
    )

    enrollment = db.scalars(
        select(Enrollment).where(
            Enrollment.course_id == progress.course_id,
            Enrollment.student_id == progress.student_id,
        )
    ).first()
    if enrollment is not None:
        enrollment.progress = progress.overall_progress

    return progress.overall_progress


def get_progress(db: Session, student_id: int, course_id: int) -> StudentProgress | None:
    return db.scalars(
        select(StudentProgress).where(
            StudentProgress.student_id == student_id,
            StudentProgress.course_id == course_id,
        )
    ).first()


def get_or_create_progress(db: Session, student_id: int, course_id: int) -> StudentProgress:
    progress = get_progress(db, student_id, course_id)
    if progress is None:
        progress = StudentProgress(
            student_id=student_id,
            course_id=course_id,
            overall_progress=0,
            total_time_spent=0,
        )
        db.add(progress)
    return progress


def record_lecture_watch(
    progress: StudentProgress,
    lecture: Lecture,
    watch_time: int,
    completed: bool,
) -> LectureWatch:
    """Watch time never decreases and completion is sticky."""
    now = utcnow()
    watch = next(
        (w for w in progress.lectures_watched if w.lecture_id == lecture.id), None
    )

    if watch is None:
        watch = LectureWatch(
            lecture_id=lecture.id,
            watch_time=max(0, watch_time),
            is_completed=bool(completed),
            watched_at=now,
            completed_at=now if completed else None,
        )
        progress.lectures_watched.append(watch)
        added_time = watch.watch_time
    else:
        previous = watch.watch_time or 0
        watch.watch_time = max(previous, watch_time)
        added_time = watch.watch_time - previous
        if completed and not watch.is_completed:
            watch.completed_at = now
        watch.is_completed = bool(watch.is_completed or completed)
        watch.watched_at = now

    progress.total_time_spent = (progress.total_time_spent or 0) + added_time
    progress.last_accessed = now
    return watch


def record_document_view(progress: StudentProgress, document: Document) -> DocumentView:
    now = utcnow()
    view = next(
        (v for v in progress.documents_viewed if v.document_id == document.id), None
    )
    if view is None:
        view = DocumentView(document_id=document.id, viewed_at=now)
        progress.documents_viewed.append(view)
    else:
        view.viewed_at = now

    progress.last_accessed = now
    return view


def course_analytics(records: list[StudentProgress], now: datetime | None = None) -> dict:
    now = now or utcnow()
    total = len(records)
    if total == 0:
        return {
            "total_students": 0,
            "average_progress": 0.0,
            "completed_students": 0,
            "active_students": 0,
            "completion_rate": 0.0,
        }

    average = sum(r.overall_progress for r in records) / total
    completed = sum(1 for r in records if r.overall_progress == 100)
    cutoff = now - ACTIVE_WINDOW
    active = sum(
        1 for r in records if r.last_accessed and as_utc(r.last_accessed) >= cutoff
    )

    return {
        "total_students": total,
        "average_progress": round_half_up(average, 2),
        "completed_students": completed,
        "active_students": active,
        "completion_rate": completed / total * 100,
    }
