import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_or_404
from app.core.permissions import ensure_owner, is_enrolled, require_capability
from app.core.current_user import get_current_user
from app.core.timeutil import utcnow
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User
from app.schemas.common import Message
from app.schemas.course import (
    AssignTARequest,
    CourseCreate,
    CourseDetail,
    CourseRead,
    CourseUpdate,
    DifficultyLevel,
    EnrollmentOut,
)
from app.services import content, progress as progress_service, tas as ta_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    educator: User = Depends(require_capability("course:create")),
):
    course = Course(
        **payload.model_dump(),
        educator_id=educator.id,
        is_published=False,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@router.get("", response_model=list[CourseRead])
def list_courses(
    category: Optional[str] = None,
    difficulty: Optional[DifficultyLevel] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(Course).filter(Course.is_published.is_(True))

    if category:
        query = query.filter(Course.category == category)
    if difficulty:
        query = query.filter(Course.difficulty == difficulty)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(Course.title.ilike(pattern), Course.description.ilike(pattern))
        )

    return query.order_by(Course.created_at.desc(), Course.id.desc()).all()


@router.get("/educator/{educator_id}", response_model=list[CourseRead])
def courses_by_educator(educator_id: int, db: Session = Depends(get_db)):
    return (
        db.query(Course)
        .filter(Course.educator_id == educator_id)
        .order_by(Course.created_at.desc(), Course.id.desc())
        .all()
    )


@router.get("/student/enrolled", response_model=list[CourseRead])
def my_enrolled_courses(
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("course:enroll")),
):
    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == me.id)
        .order_by(Enrollment.enrolled_at.desc())
        .all()
    )


@router.get("/{course_id}", response_model=CourseDetail)
def get_course(course_id: int, db: Session = Depends(get_db)):
    return get_course_or_404(db, course_id)


@router.put("/{course_id}", response_model=CourseRead)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Not authorized to update this course")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(course, field, value)
    course.updated_at = utcnow()

    db.commit()
    db.refresh(course)
    return course


@router.delete("/{course_id}", response_model=Message)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Not authorized to delete this course")

    db.delete(course)
    db.commit()
    logger.info("Course %s deleted by %s", course_id, me.id)
    return {"message": "Course deleted successfully"}


@router.post(
    "/{course_id}/enroll",
    response_model=EnrollmentOut,
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("course:enroll")),
):
    course = get_course_or_404(db, course_id)

    if is_enrolled(course, me.id):
        raise HTTPException(status_code=400, detail="Already enrolled in this course")

    enrollment = Enrollment(student_id=me.id, course_id=course.id, progress=0)
    db.add(enrollment)
    progress_service.get_or_create_progress(db, me.id, course.id)

    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent enroll for the same pair
        db.rollback()
        raise HTTPException(status_code=400, detail="Already enrolled in this course")

    db.refresh(enrollment)
    logger.info("Student %s enrolled in course %s", me.id, course.id)
    return enrollment


@router.post("/{course_id}/assign-ta", response_model=CourseDetail)
def assign_ta(
    course_id: int,
    payload: AssignTARequest,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me, "Only course educator can assign TAs")

    ta = get_or_404(db, User, payload.ta_id, "User not found")
    ta_service.assign_ta(db, course, ta, payload.student_ids)

    db.commit()
    db.refresh(course)
    return course


@router.patch("/{course_id}/publish", response_model=CourseRead)
def toggle_course_publish(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me)

    content.toggle_publish(course)
    db.commit()
    db.refresh(course)
    logger.info(content.publish_message("Course", course))
    return course
