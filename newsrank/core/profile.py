"""
Preference profiles and reading statistics built from view history.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from newsrank.core.article import ViewRecord

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 5
TOP_KEYWORDS = 20
RECENT_VIEWS = 10
SECONDS_PER_UNIT = 60


@dataclass
class PreferenceProfile:
    """
    Category and keyword affinities of a single reader.

    Recomputed on every request and never shared between readers. An empty
    profile means no personalisation is available.
    """
    category_weights: Dict[str, float] = field(default_factory=dict)
    keyword_weights: Dict[str, float] = field(default_factory=dict)
    top_categories: List[str] = field(default_factory=list)
    top_keywords: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.category_weights and not self.keyword_weights


@dataclass
class ReadingStats:
    total_views: int = 0
    total_reading_time: float = 0
    category_stats: List[Tuple[str, int]] = field(default_factory=list)
    recent_views: List[ViewRecord] = field(default_factory=list)


def view_weight(reading_time: float) -> float:
    """
    Weight of a single view: one unit per minute read, at least one unit.

    Instant bounces therefore still count once.
    """
    return max(1, reading_time / SECONDS_PER_UNIT)


def _ranked(weights: Dict[str, float], limit: int) -> List[str]:
    # sorted() is stable, so equal weights keep first-seen order
    ordered = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [name for name, _ in ordered[:limit]]


def build_preference_profile(records: List[ViewRecord]) -> PreferenceProfile:
    """
    Reduce a view history into a preference profile.

    Args:
        records: View records, newest first, already capped by the caller

    Returns:
        PreferenceProfile; empty when the history is empty
    """
    if not records:
        return PreferenceProfile()

    category_weights: Dict[str, float] = {}
    keyword_weights: Dict[str, float] = {}

    for record in records:
        weight = view_weight(record.reading_time)

        if record.category:
            category_weights[record.category] = category_weights.get(record.category, 0) + weight

        for keyword in record.keywords:
            keyword = keyword.lower()
            keyword_weights[keyword] = keyword_weights.get(keyword, 0) + weight

    logger.debug(
        f"Built profile from {len(records)} views: "
        f"{len(category_weights)} categories, {len(keyword_weights)} keywords"
    )

    return PreferenceProfile(
        category_weights=category_weights,
        keyword_weights=keyword_weights,
        top_categories=_ranked(category_weights, TOP_CATEGORIES),
        top_keywords=_ranked(keyword_weights, TOP_KEYWORDS),
    )


def reading_stats(records: List[ViewRecord],
                  category_of: Optional[Callable[[str], Optional[str]]] = None) -> ReadingStats:
    """
    Summarise a reader's view history.

    Args:
        records: View records, newest first
        category_of: Optional lookup from article id to its current category;
            defaults to the category captured on the record

    Returns:
        ReadingStats with view count, total seconds read, views per category
        and the ten most recent views
    """
    if not records:
        return ReadingStats()

    counts = Counter()
    for record in records:
        category = category_of(record.news_id) if category_of else record.category
        if category:
            counts[category] += 1

    category_stats = sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    return ReadingStats(
        total_views=len(records),
        total_reading_time=sum(record.reading_time for record in records),
        category_stats=category_stats,
        recent_views=list(records[:RECENT_VIEWS]),
    )
