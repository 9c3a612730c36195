from typing import Sequence

from app.services.progress import round_half_up

RATING_CRITERIA = (
    "relevance",
    "practicality",
    "industry_alignment",
    "skill_development",
    "overall_quality",
)


def compute_rating_averages(ratings: Sequence) -> dict | None:
    """Per-criterion mean over all expert ratings, one decimal; None if unrated."""
    if not ratings:
        return None

    averages: dict = {
        key: round_half_up(sum(getattr(r, key) for r in ratings) / len(ratings), 1)
        for key in RATING_CRITERIA
    }
    averages["total_ratings"] = len(ratings)
    return averages
