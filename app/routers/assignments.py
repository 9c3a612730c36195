import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.lookups import get_assignment_or_404, get_course_or_404
from app.core.permissions import (
    STUDENT,
    ensure_owner,
    is_assigned_ta,
    is_enrolled,
    is_owner,
    require_capability,
)
from app.core.timeutil import as_utc, utcnow
from app.models.assignment import Assignment
from app.models.submission import Submission
from app.models.user import User
from app.schemas.assignment import (
    AssignmentCreate,
    AssignmentDetail,
    AssignmentRead,
    AssignmentSubmissions,
    AssignmentUpdate,
    StudentAssignmentRead,
)
from app.schemas.common import Message
from app.schemas.submission import SubmissionCreate, SubmissionGrade, SubmissionRead
from app.services import content, lifecycle

logger = logging.getLogger(__name__)

router = APIRouter()


def _find_submission(assignment: Assignment, student_id: int) -> Submission | None:
    return next((s for s in assignment.submissions if s.student_id == student_id), None)


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, payload.course_id)
    ensure_owner(course, me, "Only course educator can create assignments")

    data = payload.model_dump()
    data["due_date"] = as_utc(data["due_date"])
    a = Assignment(**data, is_published=False)
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


@router.get("/course/{course_id}", response_model=list[StudentAssignmentRead])
def list_course_assignments(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)

    if not (is_owner(course, me.id) or is_enrolled(course, me.id) or is_assigned_ta(course, me.id)):
        raise HTTPException(
            status_code=403,
            detail="Not authorized to view assignments for this course",
        )

    query = db.query(Assignment).filter(Assignment.course_id == course_id)
    as_student = me.role == STUDENT and not is_owner(course, me.id)
    if as_student:
        query = query.filter(Assignment.is_published.is_(True))
    assignments = query.order_by(Assignment.due_date.asc(), Assignment.id.asc()).all()

    if not as_student:
        return assignments

    rows = []
    for a in assignments:
        sub = _find_submission(a, me.id)
        row = StudentAssignmentRead.model_validate(a)
        row.has_submitted = sub is not None
        row.submission_status = lifecycle.submission_state(sub).value
        row.submission = SubmissionRead.model_validate(sub) if sub else None
        rows.append(row)
    return rows


@router.get("/{assignment_id}", response_model=AssignmentDetail)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    course = assignment.course

    if is_owner(course, me.id):
        return assignment

    if not is_enrolled(course, me.id):
        raise HTTPException(status_code=403, detail="Not authorized")
    if not assignment.is_published:
        raise HTTPException(status_code=404, detail="Assignment not found")

    # students only ever see their own submission
    detail = AssignmentDetail.model_validate(assignment)
    detail.submissions = [s for s in detail.submissions if s.student_id == me.id]
    return detail


@router.post(
    "/{assignment_id}/submit",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: int,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("assignment:submit")),
):
    assignment = get_assignment_or_404(db, assignment_id)
    if not is_enrolled(assignment.course, me.id):
        raise HTTPException(status_code=403, detail="Not enrolled in this course")

    existing = _find_submission(assignment, me.id)
    lifecycle.ensure_can_submit(assignment, existing)

    files = [f.model_dump() for f in payload.files]
    now = utcnow()

    # resubmission before grading overwrites files and timestamp
    if existing:
        existing.files = files
        existing.submitted_at = now
        sub = existing
    else:
        sub = Submission(
            assignment_id=assignment.id,
            student_id=me.id,
            files=files,
            submitted_at=now,
        )
        db.add(sub)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Submission already exists")

    db.refresh(sub)
    logger.info("Student %s submitted assignment %s", me.id, assignment.id)
    return sub


@router.post("/{assignment_id}/grade", response_model=SubmissionRead)
def grade_assignment(
    assignment_id: int,
    payload: SubmissionGrade,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_owner(assignment.course, me, "Only course educator can grade assignments")

    sub = _find_submission(assignment, payload.student_id)
    if sub is None:
        raise HTTPException(status_code=404, detail="Submission not found")

    lifecycle.grade_submission(sub, assignment, payload.marks, payload.feedback, me.id)

    db.commit()
    db.refresh(sub)
    logger.info(
        "Assignment %s: graded student %s with %s/%s",
        assignment.id,
        sub.student_id,
        sub.marks,
        assignment.max_marks,
    )
    return sub


@router.put("/{assignment_id}", response_model=AssignmentRead)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_owner(assignment.course, me, "Not authorized to update this assignment")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            if field == "due_date":
                value = as_utc(value)
            setattr(assignment, field, value)
    assignment.updated_at = utcnow()

    db.commit()
    db.refresh(assignment)
    return assignment


@router.delete("/{assignment_id}", response_model=Message)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_owner(assignment.course, me, "Not authorized to delete this assignment")

    db.delete(assignment)
    db.commit()
    return {"message": "Assignment deleted successfully"}


@router.patch("/{assignment_id}/publish", response_model=AssignmentRead)
def toggle_assignment_publish(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_owner(assignment.course, me)

    content.toggle_publish(assignment)
    db.commit()
    db.refresh(assignment)
    logger.info(content.publish_message("Assignment", assignment))
    return assignment


@router.get("/{assignment_id}/submissions", response_model=AssignmentSubmissions)
def list_submissions(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_owner(assignment.course, me)

    return {
        "assignment_id": assignment.id,
        "title": assignment.title,
        "max_marks": assignment.max_marks,
        "due_date": assignment.due_date,
        "submissions": sorted(assignment.submissions, key=lambda s: s.submitted_at),
    }
