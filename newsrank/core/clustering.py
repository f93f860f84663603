"""
Greedy topic clustering for side-by-side comparison.

The corpus is scanned newest first. Each unused article seeds a group with
its unused clustering candidates, and every article placed in a group is
consumed. This is a greedy partition, not a globally optimal one: two
articles that would fit better together can land in different groups
depending on scan order, and that is the expected result.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from newsrank.core.article import Article
from newsrank.core.similarity import find_cluster_candidates
from newsrank.utils.nlp import repeated_keywords

logger = logging.getLogger(__name__)

MAX_GROUPS = 10
MAX_GROUP_SIZE = 4
MAX_GROUP_KEYWORDS = 5
FALLBACK_TITLE_WORDS = 3


@dataclass(frozen=True)
class ComparisonGroup:
    """
    A topic group of two to four articles.
    """
    topic: str
    keywords: Tuple[str, ...]
    news: Tuple[Article, ...]


def topic_label(keywords, seed: Article) -> str:
    if keywords:
        first = keywords[0]
        return first[:1].upper() + first[1:]
    return ' '.join(seed.title.split(' ')[:FALLBACK_TITLE_WORDS])


def cluster_topics(articles: List[Article]) -> List[ComparisonGroup]:
    """
    Partition the corpus into at most ten topic groups.

    Args:
        articles: Full article corpus

    Returns:
        Groups in the order their seeds appear when scanning newest first
    """
    # Stable sort: equal timestamps keep corpus order
    ordered = sorted(articles, key=lambda article: article.published_at, reverse=True)

    groups: List[ComparisonGroup] = []
    used = set()

    for seed in ordered:
        if len(groups) >= MAX_GROUPS:
            break
        if seed.id in used:
            continue

        matches = [
            candidate for candidate in find_cluster_candidates(articles, seed)
            if candidate.id not in used
        ]
        if not matches:
            continue

        members = [seed] + matches
        used.update(member.id for member in members)

        keywords = [
            keyword for keyword, _ in
            repeated_keywords((member.keywords for member in members), MAX_GROUP_KEYWORDS)
        ]

        groups.append(ComparisonGroup(
            topic=topic_label(keywords, seed),
            keywords=tuple(keywords),
            news=tuple(members[:MAX_GROUP_SIZE]),
        ))

    logger.debug(f"Clustered {len(articles)} articles into {len(groups)} groups")
    return groups
