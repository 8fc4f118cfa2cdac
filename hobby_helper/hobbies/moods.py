from __future__ import annotations

from collections.abc import Iterable

from .models import Mood

RELAXED_TAGS = frozenset(
    {"relaxation", "mindfulness", "wellness", "sustainability", "eco-friendly", "eco", "calm"}
)
CREATIVE_TAGS = frozenset({"creative", "expression", "hands-on", "craft", "art", "diy"})
ENERGIZED_TAGS = frozenset(
    {"fitness", "adventure", "strength", "skill-building", "sport", "training"}
)


def infer_mood_effects(tags: Iterable[str] | None) -> list[str]:
    """Map a hobby's tags onto the moods it tends to produce.

    Falls back to ``neutral`` when no tag is recognised.
    """
    normalized = {str(t).strip().lower() for t in tags or []}
    moods: list[str] = []
    if normalized & RELAXED_TAGS:
        moods.append(Mood.relaxed.value)
    if normalized & CREATIVE_TAGS:
        moods.append(Mood.creative.value)
    if normalized & ENERGIZED_TAGS:
        moods.append(Mood.energized.value)
    return moods or [Mood.neutral.value]
