import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user, get_optional_user
from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_lecture_or_404
from app.core.permissions import ensure_owner, is_owner
from app.core.timeutil import utcnow
from app.models.lecture import Lecture
from app.models.user import User
from app.schemas.common import Message, ReorderResult
from app.schemas.lecture import LectureCreate, LectureRead, LectureReorder, LectureUpdate
from app.services import content

logger = logging.getLogger(__name__)

router = APIRouter()


def _course_lectures(db: Session, course_id: int, published_only: bool) -> list[Lecture]:
    query = db.query(Lecture).filter(Lecture.course_id == course_id)
    if published_only:
        query = query.filter(Lecture.is_published.is_(True))
    return query.order_by(Lecture.order.asc(), Lecture.id.asc()).all()


@router.post("", response_model=LectureRead, status_code=status.HTTP_201_CREATED)
def create_lecture(
    payload: LectureCreate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, payload.course_id)
    ensure_owner(course, me, "Only course educator can add lectures")

    data = payload.model_dump()
    if data["order"] is None:
        data["order"] = content.next_order(course.lectures)

    lecture = Lecture(**data, is_published=False)
    db.add(lecture)
    db.commit()
    db.refresh(lecture)
    return lecture


@router.get("/course/{course_id}", response_model=list[LectureRead])
def list_published_lectures(course_id: int, db: Session = Depends(get_db)):
    get_course_or_404(db, course_id)
    return _course_lectures(db, course_id, published_only=True)


@router.get("/course/{course_id}/all", response_model=list[LectureRead])
def list_all_lectures(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me)
    return _course_lectures(db, course_id, published_only=False)


@router.patch("/course/{course_id}/reorder", response_model=ReorderResult)
def reorder_lectures(
    course_id: int,
    payload: LectureReorder,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me)

    skipped = content.apply_order(course.lectures, payload.lecture_ids)
    db.commit()
    return {"message": "Lectures reordered successfully", "skipped_ids": skipped}


@router.get("/{lecture_id}", response_model=LectureRead)
def get_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    me: Optional[User] = Depends(get_optional_user),
):
    lecture = get_lecture_or_404(db, lecture_id)
    if not lecture.is_published and (me is None or not is_owner(lecture.course, me.id)):
        # unpublished content does not exist for anyone but the owner
        raise HTTPException(status_code=404, detail="Lecture not found")
    return lecture


@router.put("/{lecture_id}", response_model=LectureRead)
def update_lecture(
    lecture_id: int,
    payload: LectureUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    lecture = get_lecture_or_404(db, lecture_id)
    ensure_owner(lecture.course, me, "Not authorized to update this lecture")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(lecture, field, value)
    lecture.updated_at = utcnow()

    db.commit()
    db.refresh(lecture)
    return lecture


@router.delete("/{lecture_id}", response_model=Message)
def delete_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    lecture = get_lecture_or_404(db, lecture_id)
    ensure_owner(lecture.course, me, "Not authorized to delete this lecture")

    db.delete(lecture)
    db.commit()
    return {"message": "Lecture deleted successfully"}


@router.patch("/{lecture_id}/publish", response_model=LectureRead)
def toggle_lecture_publish(
    lecture_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    lecture = get_lecture_or_404(db, lecture_id)
    ensure_owner(lecture.course, me)

    content.toggle_publish(lecture)
    db.commit()
    db.refresh(lecture)
    logger.info(content.publish_message("Lecture", lecture))
    return lecture
