"""
The shipped activity catalog.

Content is fixed at build time: adding or removing an entry is a content
change, never a runtime operation.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from app.schemas.activity import ALLOWED_MINUTES, Activity, Category

ACTIVITIES: tuple[Activity, ...] = (
    # Mind
    Activity(
        id="mind-grounding", title="5-4-3-2-1 Grounding",
        prompt="Name 5 things you see, 4 feel, 3 hear, 2 smell, 1 taste.",
        category="mind", durations=[5], moods=["anxious", "sad", "bored"],
    ),
    Activity(
        id="mind-brain-dump", title="Brain Dump",
        prompt="Write down everything worrying you right now. Just list them. Don't solve them.",
        category="mind", durations=[5, 10], moods=["anxious", "sad"],
    ),
    Activity(
        id="mind-gratitude", title="Gratitude Trio",
        prompt="Write down 3 tiny things that happened today that weren't terrible.",
        category="mind", durations=[5], moods=["sad", "bored", "anxious", "happy", "calm"],
    ),
    Activity(
        id="mind-visualisation", title="Visualisation",
        prompt="Close your eyes. Imagine your favorite place. Be there for 3 minutes.",
        category="mind", durations=[5], moods=["calm", "anxious", "happy"],
    ),
    Activity(
        id="mind-read", title="One Page Read",
        prompt="Read exactly one page of a book you've been meaning to start or finish.",
        category="mind", durations=[10, 30], moods=["bored", "calm"],
    ),
    Activity(
        id="mind-box-breath", title="Box Breathing",
        prompt="Inhale 4s, hold 4s, exhale 4s, hold 4s. Repeat for 3 minutes.",
        category="mind", durations=[5], moods=["anxious", "sad"],
    ),
    Activity(
        id="mind-tiny-plan", title="Tiny Plan",
        prompt="Pick one small task you've been putting off. Break it into 3 tiny steps.",
        category="mind", durations=[10], moods=["anxious", "sad", "bored"],
    ),
    Activity(
        id="mind-digital-declutter", title="Digital Declutter",
        prompt="Delete 5 screenshots or photos you don't need anymore.",
        category="mind", durations=[10], moods=["bored", "calm"],
    ),
    Activity(
        id="mind-curiosity", title="Curiosity Dive",
        prompt="Look up a topic you know nothing about. Read the first paragraph of Wikipedia.",
        category="mind", durations=[10], moods=["bored"],
    ),
    Activity(
        id="mind-silence", title="Silence",
        prompt="Sit in silence for 2 minutes. No phone, no music. Just wait.",
        category="mind", durations=[5], moods=["anxious", "sad"],
    ),
    Activity(
        id="mind-journal", title="Deep Journaling",
        prompt="Write continuously for 20 minutes. Don't worry about grammar. Just empty your mind.",
        category="mind", durations=[30, 60], moods=["sad", "anxious"],
    ),
    Activity(
        id="mind-creative", title="Creative Hour",
        prompt="Spend 1 hour on a hobby you love (drawing, coding, knitting). No phone allowed.",
        category="mind", durations=[60], moods=["bored", "calm", "happy"],
    ),
    Activity(
        id="mind-podcast", title="Podcast Walk (Mental)",
        prompt="Listen to a chaotic or educational podcast episode (~45m) while sitting or walking.",
        category="mind", durations=[30, 60], moods=["bored", "anxious"],
    ),
    Activity(
        id="mind-learning", title="Learn Basics",
        prompt="Spend 30 minutes learning the basics of a new language or skill online.",
        category="mind", durations=[30, 60], moods=["bored", "happy"],
    ),
    # Move
    Activity(
        id="move-neck", title="Neck Release",
        prompt="Slowly tilt your head side to side. Hold each side for 15 seconds.",
        category="move", durations=[5], moods=["anxious", "sad"],
    ),
    Activity(
        id="move-sky", title="Sky Reach",
        prompt="Stand up. Reach for the ceiling as high as you can. Hold for 10s. Repeat 3 times.",
        category="move", durations=[5], moods=["bored", "sad"],
    ),
    Activity(
        id="move-water", title="Water Break",
        prompt="Go to the kitchen. Pour a glass of water. Drink it slowly.",
        category="move", durations=[5], moods=["sad", "bored", "anxious", "happy", "calm"],
    ),
    Activity(
        id="move-shake", title="Song Shake",
        prompt="Play one upbeat song. Shake your limbs until it ends.",
        category="move", durations=[5], moods=["sad", "bored"],
    ),
    Activity(
        id="move-walk", title="Walk the Block",
        prompt="Walk around your block or building once. Leave your phone if you can.",
        category="move", durations=[10, 30], moods=["anxious", "bored", "sad"],
    ),
    Activity(
        id="move-legs-up", title="Legs Up",
        prompt="Lie on the floor with legs up the wall. Rest for 5 minutes.",
        category="move", durations=[10], moods=["sad", "anxious"],
    ),
    Activity(
        id="move-tidy", title="Quick Tidy",
        prompt="Set a timer for 5 minutes. Tidy one flat surface (desk/table).",
        category="move", durations=[10], moods=["anxious", "bored"],
    ),
    Activity(
        id="move-stretch", title="Stretch Break",
        prompt="Forward fold. Let your arms dangle. Sway slightly.",
        category="move", durations=[5], moods=["bored", "anxious"],
    ),
    Activity(
        id="move-jacks", title="Jumping Jacks",
        prompt="Do 20 jumping jacks. Get the heart rate up just a tiny bit.",
        category="move", durations=[5], moods=["bored", "sad"],
    ),
    Activity(
        id="move-eye", title="Eye Rest",
        prompt="Look at something 20 feet away for 20 seconds.",
        category="move", durations=[5], moods=["anxious", "bored"],
    ),
    Activity(
        id="move-long-walk", title="Nature Walk",
        prompt="Go for a long walk in a park (or nearest green space). No headphones if possible.",
        category="move", durations=[30, 60], moods=["anxious", "sad", "bored", "calm"],
    ),
    Activity(
        id="move-adventure", title="Mini Adventure",
        prompt="Walk to a new coffee shop or bookstore you haven't visited before.",
        category="move", durations=[60], moods=["bored", "happy"],
    ),
    Activity(
        id="move-bike", title="Bike Ride",
        prompt="Take your bike for a spin around the neighborhood or park.",
        category="move", durations=[30, 60], moods=["bored", "happy", "anxious"],
    ),
    Activity(
        id="move-yoga", title="Yoga Flow",
        prompt="Do a full yoga flow to stretch your body (follow a video if needed).",
        category="move", durations=[30, 60], moods=["anxious", "bored", "calm"],
    ),
)


class ActivityCatalog:
    """Read-only view over a fixed sequence of activities."""

    def __init__(self, activities: Iterable[Activity]):
        items = tuple(activities)
        seen: set[str] = set()
        for a in items:
            if a.id in seen:
                raise ValueError(f"Duplicate activity id: {a.id}")
            seen.add(a.id)
        self._items = items
        self._by_id = {a.id: a for a in items}

    def all(self) -> tuple[Activity, ...]:
        return self._items

    def get(self, activity_id: str) -> Activity | None:
        return self._by_id.get(activity_id)

    def by_category(self, category: Category) -> list[Activity]:
        return [a for a in self._items if a.category == category]

    def __len__(self) -> int:
        return len(self._items)


@lru_cache(maxsize=1)
def default_catalog() -> ActivityCatalog:
    return ActivityCatalog(ACTIVITIES)


def coverage_gaps(catalog: ActivityCatalog) -> list[tuple[Category, int]]:
    """
    (category, minutes) pairs for which no activity fits in the available time.
    The suggestion engine returns no match for these regardless of mood.
    """
    gaps = []
    for category in Category:
        pool = catalog.by_category(category)
        for minutes in ALLOWED_MINUTES:
            if not any(a.fits_within(minutes) for a in pool):
                gaps.append((category, minutes))
    return gaps
