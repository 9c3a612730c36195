import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.lookups import get_course_or_404
from app.core.permissions import require_capability
from app.core.timeutil import utcnow
from app.models.industry_rating import IndustryRating
from app.models.user import User
from app.schemas.industry_rating import (
    CourseIndustryRatings,
    IndustryRatingCreate,
    IndustryRatingRead,
)
from app.services.ratings import compute_rating_averages

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{course_id}/industry-ratings", response_model=CourseIndustryRatings)
def list_industry_ratings(course_id: int, db: Session = Depends(get_db)):
    course = get_course_or_404(db, course_id)
    ratings = sorted(course.industry_ratings, key=lambda r: r.id)
    return {"ratings": ratings, "averages": compute_rating_averages(ratings)}


@router.post("/{course_id}/industry-ratings", response_model=IndustryRatingRead)
def rate_course(
    course_id: int,
    payload: IndustryRatingCreate,
    db: Session = Depends(get_db),
    me: User = Depends(require_capability("industry_rating:create")),
):
    course = get_course_or_404(db, course_id)

    rating = next((r for r in course.industry_ratings if r.expert_id == me.id), None)
    if rating is None:
        rating = IndustryRating(course_id=course.id, expert_id=me.id, **payload.model_dump())
        db.add(rating)
    else:
        # one rating per expert; resubmitting overwrites
        for field, value in payload.model_dump().items():
            setattr(rating, field, value)
        rating.updated_at = utcnow()

    db.commit()
    db.refresh(rating)
    logger.info("Industry expert %s rated course %s", me.id, course.id)
    return rating
