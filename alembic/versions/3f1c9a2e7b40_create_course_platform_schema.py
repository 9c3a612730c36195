"""create course platform schema

Revision ID: 3f1c9a2e7b40
Revises:
Create Date: 2026-10-19 10:12:31.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _fk(target: str, ondelete: str = "CASCADE") -> sa.ForeignKey:
    return sa.ForeignKey(target, ondelete=ondelete)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("profile_picture", sa.String(500), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("educator_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("difficulty", sa.String(20), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_courses_id", "courses", ["id"])
    op.create_index("ix_courses_educator_id", "courses", ["educator_id"])
    op.create_index("ix_courses_category", "courses", ["category"])

    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False),
        sa.Column("enrolled_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("student_id", "course_id", name="uq_enrollments_student_course"),
    )
    op.create_index("ix_enrollments_id", "enrollments", ["id"])
    op.create_index("ix_enrollments_student_id", "enrollments", ["student_id"])
    op.create_index("ix_enrollments_course_id", "enrollments", ["course_id"])

    op.create_table(
        "ta_assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("ta_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("course_id", "ta_id", name="uq_ta_assignments_course_ta"),
    )
    op.create_index("ix_ta_assignments_id", "ta_assignments", ["id"])
    op.create_index("ix_ta_assignments_course_id", "ta_assignments", ["course_id"])
    op.create_index("ix_ta_assignments_ta_id", "ta_assignments", ["ta_id"])

    op.create_table(
        "ta_assigned_students",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ta_assignment_id", sa.Integer(), _fk("ta_assignments.id"), nullable=False),
        sa.Column("student_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.UniqueConstraint("ta_assignment_id", "student_id", name="uq_ta_assigned_students_pair"),
    )
    op.create_index("ix_ta_assigned_students_id", "ta_assigned_students", ["id"])
    op.create_index("ix_ta_assigned_students_ta_assignment_id", "ta_assigned_students", ["ta_assignment_id"])
    op.create_index("ix_ta_assigned_students_student_id", "ta_assigned_students", ["student_id"])

    op.create_table(
        "lectures",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("video_url", sa.String(500), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("transcript", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_lectures_id", "lectures", ["id"])
    op.create_index("ix_lectures_course_id", "lectures", ["course_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_url", sa.String(500), nullable=False),
        sa.Column("file_type", sa.String(10), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_documents_id", "documents", ["id"])
    op.create_index("ix_documents_course_id", "documents", ["course_id"])

    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("max_marks", sa.Float(), nullable=False),
        sa.Column("attachments", sa.JSON(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_assignments_id", "assignments", ["id"])
    op.create_index("ix_assignments_course_id", "assignments", ["course_id"])

    op.create_table(
        "submissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("assignment_id", sa.Integer(), _fk("assignments.id"), nullable=False),
        sa.Column("student_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("files", sa.JSON(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("marks", sa.Float(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("graded_by_id", sa.Integer(), _fk("users.id", "SET NULL"), nullable=True),
        sa.Column("graded_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),
    )
    op.create_index("ix_submissions_id", "submissions", ["id"])
    op.create_index("ix_submissions_assignment_id", "submissions", ["assignment_id"])
    op.create_index("ix_submissions_student_id", "submissions", ["student_id"])

    op.create_table(
        "student_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("overall_progress", sa.Integer(), nullable=False),
        sa.Column("last_accessed", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("total_time_spent", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("student_id", "course_id", name="uq_progress_student_course"),
    )
    op.create_index("ix_student_progress_id", "student_progress", ["id"])
    op.create_index("ix_student_progress_student_id", "student_progress", ["student_id"])
    op.create_index("ix_student_progress_course_id", "student_progress", ["course_id"])

    op.create_table(
        "lecture_watches",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("progress_id", sa.Integer(), _fk("student_progress.id"), nullable=False),
        sa.Column("lecture_id", sa.Integer(), _fk("lectures.id"), nullable=False),
        sa.Column("watch_time", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("watched_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("progress_id", "lecture_id", name="uq_lecture_watch_pair"),
    )
    op.create_index("ix_lecture_watches_id", "lecture_watches", ["id"])
    op.create_index("ix_lecture_watches_progress_id", "lecture_watches", ["progress_id"])
    op.create_index("ix_lecture_watches_lecture_id", "lecture_watches", ["lecture_id"])

    op.create_table(
        "document_views",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("progress_id", sa.Integer(), _fk("student_progress.id"), nullable=False),
        sa.Column("document_id", sa.Integer(), _fk("documents.id"), nullable=False),
        sa.Column("viewed_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("progress_id", "document_id", name="uq_document_view_pair"),
    )
    op.create_index("ix_document_views_id", "document_views", ["id"])
    op.create_index("ix_document_views_progress_id", "document_views", ["progress_id"])
    op.create_index("ix_document_views_document_id", "document_views", ["document_id"])

    op.create_table(
        "mentorship_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ta_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("student_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("session_type", sa.String(30), nullable=False),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("meeting_link", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("rating_feedback", sa.Text(), nullable=True),
        sa.Column("rated_by_id", sa.Integer(), _fk("users.id", "SET NULL"), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_mentorship_sessions_id", "mentorship_sessions", ["id"])
    op.create_index("ix_mentorship_sessions_ta_id", "mentorship_sessions", ["ta_id"])
    op.create_index("ix_mentorship_sessions_student_id", "mentorship_sessions", ["student_id"])
    op.create_index("ix_mentorship_sessions_course_id", "mentorship_sessions", ["course_id"])
    op.create_index("ix_mentorship_sessions_scheduled_at", "mentorship_sessions", ["scheduled_at"])

    op.create_table(
        "industry_ratings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.Integer(), _fk("courses.id"), nullable=False),
        sa.Column("expert_id", sa.Integer(), _fk("users.id"), nullable=False),
        sa.Column("relevance", sa.Integer(), nullable=False),
        sa.Column("practicality", sa.Integer(), nullable=False),
        sa.Column("industry_alignment", sa.Integer(), nullable=False),
        sa.Column("skill_development", sa.Integer(), nullable=False),
        sa.Column("overall_quality", sa.Integer(), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("course_id", "expert_id", name="uq_industry_rating_course_expert"),
    )
    op.create_index("ix_industry_ratings_id", "industry_ratings", ["id"])
    op.create_index("ix_industry_ratings_course_id", "industry_ratings", ["course_id"])
    op.create_index("ix_industry_ratings_expert_id", "industry_ratings", ["expert_id"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "industry_ratings",
        "mentorship_sessions",
        "document_views",
        "lecture_watches",
        "student_progress",
        "submissions",
        "assignments",
        "documents",
        "lectures",
        "ta_assigned_students",
        "ta_assignments",
        "enrollments",
        "courses",
        "users",
    ):
        op.drop_table(table)
