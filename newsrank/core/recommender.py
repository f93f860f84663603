"""
Personalised recommendations for unseen articles.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from newsrank.core.article import Article
from newsrank.core.profile import PreferenceProfile

logger = logging.getLogger(__name__)

CATEGORY_MULTIPLIER = 2
FRESH_AGE = timedelta(hours=24)
FRESH_BOOST = 1.2
RECENT_AGE = timedelta(hours=72)
RECENT_BOOST = 1.1
BREAKING_BOOST = 1.5
DEFAULT_LIMIT = 10


def recency_multiplier(published_at: datetime, now: datetime) -> float:
    age = now - published_at
    if age < FRESH_AGE:
        return FRESH_BOOST
    if age < RECENT_AGE:
        return RECENT_BOOST
    return 1.0


def score_article(article: Article, profile: PreferenceProfile, now: datetime) -> float:
    """
    Score one candidate against a reader's profile.

    Args:
        article: Candidate article
        profile: Reader's preference profile
        now: Reference time for the recency boost

    Returns:
        Score; zero means there is no evidence the reader would care
    """
    score = profile.category_weights.get(article.category, 0) * CATEGORY_MULTIPLIER

    for keyword in article.keywords:
        score += profile.keyword_weights.get(keyword.lower(), 0)

    score *= recency_multiplier(article.published_at, now)

    if article.is_breaking:
        score *= BREAKING_BOOST

    return score


def _order(scored: Tuple[float, Article]):
    score, article = scored
    # Score desc, then newest first, then id for a total order
    return (-score, -article.published_at.timestamp(), article.id)


def recommend(articles: List[Article],
              profile: PreferenceProfile,
              viewed: Iterable[str],
              limit: Optional[int] = DEFAULT_LIMIT,
              now: Optional[datetime] = None) -> List[Article]:
    """
    Rank unseen articles for a reader.

    An empty profile yields an empty list rather than a generic fallback.

    Args:
        articles: Full article corpus
        profile: Reader's preference profile
        viewed: Identifiers of articles the reader has already opened
        limit: Maximum number of results, None for all
        now: Reference time for the recency boost (defaults to current UTC time)

    Returns:
        Articles ordered by descending score
    """
    if not articles or profile.is_empty:
        return []

    now = now or datetime.now(timezone.utc)
    viewed = set(viewed)

    scored = []
    for article in articles:
        if article.id in viewed:
            continue
        score = score_article(article, profile, now)
        if score > 0:
            scored.append((score, article))

    scored.sort(key=_order)
    logger.debug(f"Scored {len(scored)} of {len(articles)} articles above zero")

    if limit is not None:
        scored = scored[:limit]
    return [article for _, article in scored]
