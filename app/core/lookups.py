from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.assignment import Assignment
from app.models.course import Course
from app.models.document import Document
from app.models.lecture import Lecture
from app.models.mentorship_session import MentorshipSession


def get_or_404(db: Session, model, obj_id: int, detail: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj


def get_course_or_404(db: Session, course_id: int) -> Course:
    return get_or_404(db, Course, course_id, "Course not found")


def get_lecture_or_404(db: Session, lecture_id: int) -> Lecture:
    return get_or_404(db, Lecture, lecture_id, "Lecture not found")


def get_document_or_404(db: Session, document_id: int) -> Document:
    return get_or_404(db, Document, document_id, "Document not found")


def get_assignment_or_404(db: Session, assignment_id: int) -> Assignment:
    return get_or_404(db, Assignment, assignment_id, "Assignment not found")


def get_session_or_404(db: Session, session_id: int) -> MentorshipSession:
    return get_or_404(db, MentorshipSession, session_id, "Session not found")
