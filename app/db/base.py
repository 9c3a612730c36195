# import every model so Base.metadata knows all tables (used by init_db, alembic and tests)
from app.db.base_class import Base  # noqa: F401
from app.models.assignment import Assignment  # noqa: F401
from app.models.course import Course  # noqa: F401
from app.models.document import Document  # noqa: F401
from app.models.enrollment import Enrollment  # noqa: F401
from app.models.industry_rating import IndustryRating  # noqa: F401
from app.models.lecture import Lecture  # noqa: F401
from app.models.mentorship_session import MentorshipSession  # noqa: F401
from app.models.student_progress import DocumentView, LectureWatch, StudentProgress  # noqa: F401
from app.models.submission import Submission  # noqa: F401
from app.models.ta_assignment import TAAssignedStudent, TAAssignment  # noqa: F401
from app.models.user import User  # noqa: F401
