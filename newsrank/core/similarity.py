"""
Content similarity between articles.

Two scorers live here and are kept apart on purpose: find_similar backs the
"similar articles" list, find_cluster_candidates feeds topic clustering.
Their weights and thresholds are independent.
"""
import logging
from typing import List, Optional, Tuple

from newsrank.core.article import Article
from newsrank.utils.nlp import keyword_set, title_tokens

logger = logging.getLogger(__name__)

# "Similar articles" weights
SAME_CATEGORY_SCORE = 5
SHARED_KEYWORD_SCORE = 2
SAME_SENTIMENT_SCORE = 1
DEFAULT_SIMILAR_LIMIT = 5

# Clustering candidate weights
CLUSTER_KEYWORD_SCORE = 3
CLUSTER_TITLE_TOKEN_SCORE = 1
CLUSTER_CATEGORY_SCORE = 2
CLUSTER_MIN_SCORE = 2
CLUSTER_FAN_OUT = 5


def _top(scored: List[Tuple[int, int, Article]], limit: Optional[int]) -> List[Article]:
    # Ties keep corpus order through the index in each tuple
    scored.sort(key=lambda item: (-item[0], item[1]))
    if limit is not None:
        scored = scored[:limit]
    return [article for _, _, article in scored]


def similarity_score(reference: Article, candidate: Article) -> int:
    score = 0
    if candidate.category == reference.category:
        score += SAME_CATEGORY_SCORE
    shared = keyword_set(reference.keywords) & keyword_set(candidate.keywords)
    score += SHARED_KEYWORD_SCORE * len(shared)
    if candidate.sentiment == reference.sentiment:
        score += SAME_SENTIMENT_SCORE
    return score


def find_similar(articles: List[Article],
                 reference: Article,
                 limit: Optional[int] = DEFAULT_SIMILAR_LIMIT) -> List[Article]:
    """
    Find the articles most similar to a reference article.

    Scores same category, each distinct shared keyword and same sentiment.
    Articles with no overlap at all are left out.

    Args:
        articles: Full article corpus
        reference: Article to compare against
        limit: Maximum number of results, None for all

    Returns:
        Articles ordered by descending similarity, never the reference itself.
        Empty when the reference is not part of the corpus.
    """
    if not any(article.id == reference.id for article in articles):
        return []

    scored = []
    for index, candidate in enumerate(articles):
        if candidate.id == reference.id:
            continue
        score = similarity_score(reference, candidate)
        if score > 0:
            scored.append((score, index, candidate))

    return _top(scored, limit)


def find_similar_by_id(articles: List[Article],
                       news_id: str,
                       limit: Optional[int] = DEFAULT_SIMILAR_LIMIT) -> List[Article]:
    """Resolve an article id in the corpus, then run find_similar."""
    reference = next((article for article in articles if article.id == news_id), None)
    if reference is None:
        logger.debug(f"Article {news_id} not in corpus, no similar articles")
        return []
    return find_similar(articles, reference, limit)


def cluster_score(reference: Article, candidate: Article,
                  reference_keywords=None, reference_tokens=None) -> int:
    if reference_keywords is None:
        reference_keywords = keyword_set(reference.keywords)
    if reference_tokens is None:
        reference_tokens = title_tokens(reference.title)

    shared_keywords = reference_keywords & keyword_set(candidate.keywords)
    shared_tokens = reference_tokens & title_tokens(candidate.title)

    score = CLUSTER_KEYWORD_SCORE * len(shared_keywords)
    score += CLUSTER_TITLE_TOKEN_SCORE * len(shared_tokens)
    if candidate.category == reference.category:
        score += CLUSTER_CATEGORY_SCORE
    return score


def find_cluster_candidates(articles: List[Article], reference: Article) -> List[Article]:
    """
    Find up to five articles close enough to share a topic group.

    Uses keyword and title-word overlap plus a category bonus, with a
    stricter floor than find_similar.

    Args:
        articles: Full article corpus
        reference: Seed article

    Returns:
        At most five articles ordered by descending score
    """
    reference_keywords = keyword_set(reference.keywords)
    reference_tokens = title_tokens(reference.title)

    scored = []
    for index, candidate in enumerate(articles):
        if candidate.id == reference.id:
            continue
        score = cluster_score(reference, candidate, reference_keywords, reference_tokens)
        if score >= CLUSTER_MIN_SCORE:
            scored.append((score, index, candidate))

    return _top(scored, CLUSTER_FAN_OUT)
