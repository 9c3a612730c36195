"""State machines for assignment submissions and mentorship sessions."""
import logging
from datetime import datetime

from app.core.errors import InvalidTransition, ValidationFailed
from app.core.timeutil import as_utc, utcnow
from app.models.enums import SessionStatus, SubmissionState

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mentorship sessions
# ---------------------------------------------------------------------------

SESSION_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.SCHEDULED: frozenset(
        {SessionStatus.ONGOING, SessionStatus.COMPLETED, SessionStatus.CANCELLED}
    ),
    SessionStatus.ONGOING: frozenset({SessionStatus.COMPLETED, SessionStatus.CANCELLED}),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.CANCELLED: frozenset(),
}

MIN_RATING = 1
MAX_RATING = 5


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    return target in SESSION_TRANSITIONS[current]


def transition_session(session, target: SessionStatus) -> None:
    current = SessionStatus(session.status)
    if not can_transition(current, target):
        logger.warning(
            "Rejected session %s transition %s -> %s",
            session.id,
            current.value,
            target.value,
        )
        raise InvalidTransition("session", current.value, target.value)

    session.status = target.value
    session.updated_at = utcnow()
    logger.info("Session %s: %s -> %s", session.id, current.value, target.value)


def ensure_session_editable(session) -> None:
    if not SESSION_TRANSITIONS[SessionStatus(session.status)]:
        raise ValidationFailed(f"Cannot edit a {session.status} session")


def rate_session(session, rating: int, feedback: str | None, rated_by_id: int) -> None:
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationFailed(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    if session.status != SessionStatus.COMPLETED.value:
        raise ValidationFailed("Can only rate completed sessions")

    # single-valued: a second rating replaces the first
    session.rating = rating
    session.rating_feedback = feedback
    session.rated_by_id = rated_by_id
    session.updated_at = utcnow()


# ---------------------------------------------------------------------------
# Assignment submissions
# ---------------------------------------------------------------------------


def submission_state(submission) -> SubmissionState:
    if submission is None:
        return SubmissionState.UNSUBMITTED
    if submission.marks is None:
        return SubmissionState.SUBMITTED
    return SubmissionState.GRADED


def ensure_can_submit(assignment, submission, now: datetime | None = None) -> None:
    """
    Submitting is allowed only while the assignment is published and the due
    date has not passed. A graded submission is frozen.
    """
    now = now or utcnow()
    if not assignment.is_published:
        raise ValidationFailed("Assignment is not published yet")
    if now > as_utc(assignment.due_date):
        raise ValidationFailed("Assignment submission deadline has passed")
    if submission_state(submission) is SubmissionState.GRADED:
        raise InvalidTransition(
            "submission", SubmissionState.GRADED.value, SubmissionState.SUBMITTED.value
        )


def ensure_valid_marks(assignment, marks: float) -> None:
    if marks < 0 or marks > assignment.max_marks:
        raise ValidationFailed(f"Marks must be between 0 and {assignment.max_marks:g}")


def grade_submission(submission, assignment, marks: float, feedback: str | None, grader_id: int) -> None:
    if submission_state(submission) is SubmissionState.UNSUBMITTED:
        raise ValidationFailed("Submission not found")
    ensure_valid_marks(assignment, marks)

    submission.marks = marks
    submission.feedback = feedback
    submission.graded_by_id = grader_id
    submission.graded_at = utcnow()
