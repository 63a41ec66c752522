from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional, Sequence

from app.data.activities import ActivityCatalog
from app.schemas.activity import Activity, Category, Mood

logger = logging.getLogger(__name__)

# Returns an index in range(n); swapped out in tests for a fixed sequence
Picker = Callable[[int], int]


def random_index(n: int) -> int:
    return random.randrange(n)


def filter_category(pool: Iterable[Activity], category: Category) -> list[Activity]:
    """Category is a hard filter and is never relaxed."""
    return [a for a in pool if a.category == category]


def filter_mood(pool: Iterable[Activity], mood: Mood) -> list[Activity]:
    """`surprise` skips the mood filter; any other mood must be listed on the activity."""
    if mood == Mood.SURPRISE:
        return list(pool)
    return [a for a in pool if mood in a.moods]


def filter_duration(pool: Sequence[Activity], minutes: int) -> list[Activity]:
    """
    Exact-match first. Without an exact match, anything that fits in the
    available time is an acceptable substitute; longer activities never are.
    """
    exact = [a for a in pool if a.supports(minutes)]
    if exact:
        return exact
    return [a for a in pool if a.fits_within(minutes)]


def exclude_recent(pool: Sequence[Activity], history: Iterable[str], exclude_id: Optional[str] = None) -> list[Activity]:
    """
    Drop recently completed activities and `exclude_id`.
    Recency is waived first when nothing would survive; if even `exclude_id`
    alone empties the pool, the pool is returned unchanged.
    """
    blocked = set(history)
    if exclude_id:
        blocked.add(exclude_id)
    fresh = [a for a in pool if a.id not in blocked]
    if fresh:
        return fresh
    if exclude_id:
        others = [a for a in pool if a.id != exclude_id]
        if others:
            return others
    return list(pool)


def suggest(
    catalog: ActivityCatalog | Iterable[Activity],
    mood: Mood,
    category: Category,
    minutes: int,
    *,
    history: Iterable[str] = (),
    exclude_id: Optional[str] = None,
    picker: Picker = random_index,
) -> Optional[Activity]:
    """
    Pick one activity for the given selection, or None when no activity of
    this category and mood fits in `minutes`.

    Pure function of its arguments: `history` is a snapshot of the completion
    history and `picker` supplies the uniform choice.
    """
    activities = catalog.all() if isinstance(catalog, ActivityCatalog) else tuple(catalog)

    pool = filter_category(activities, category)
    pool = filter_mood(pool, mood)
    pool = filter_duration(pool, minutes)
    if not pool:
        logger.debug("No match for mood=%s category=%s minutes=%s", mood, category, minutes)
        return None

    final = exclude_recent(pool, history, exclude_id)
    idx = picker(len(final))
    if not 0 <= idx < len(final):
        raise ValueError(f"picker returned {idx} for a pool of {len(final)}")
    logger.debug("Picked %s (%s/%s) from pool of %s", final[idx].id, idx, len(final), len(pool))
    return final[idx]
