import logging
from typing import Iterable, Sequence

from app.core.timeutil import utcnow

logger = logging.getLogger(__name__)


def toggle_publish(entity) -> bool:
    """Flip the publish flag on a course, lecture, document or assignment."""
    entity.is_published = not entity.is_published
    entity.updated_at = utcnow()
    return entity.is_published


def publish_message(kind: str, entity) -> str:
    return f"{kind} {'published' if entity.is_published else 'unpublished'} successfully"


def apply_order(items: Iterable, ordered_ids: Sequence[int]) -> list[int]:
    """
    Assign order = position + 1 to each item named in `ordered_ids`.

    Items left out of the list keep their current order. Ids that do not
    belong to `items` are skipped and returned so the caller can report them.
    """
    by_id = {item.id: item for item in items}
    unknown: list[int] = []
    for position, item_id in enumerate(ordered_ids):
        item = by_id.get(item_id)
        if item is None:
            unknown.append(item_id)
            continue
        item.order = position + 1

    if unknown:
        logger.warning("Reorder skipped ids not in course: %s", unknown)
    return unknown


def next_order(items: Iterable) -> int:
    return max((item.order for item in items), default=0) + 1
