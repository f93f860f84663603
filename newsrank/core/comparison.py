"""
Reader-curated comparison sets and their summary statistics.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from newsrank.core.article import Article
from newsrank.utils.nlp import repeated_keywords

MAX_COMPARISON_SIZE = 4
MAX_COMMON_KEYWORDS = 10


class ComparisonSet:
    """
    An ordered selection of at most four articles.

    Owned by the caller for the length of a session. Adding past capacity or
    adding an article twice is silently ignored, as is removing an article
    that is not in the set.
    """
    def __init__(self, articles: Optional[Iterable[Article]] = None):
        self._articles: List[Article] = []
        for article in articles or []:
            self.add(article)

    def add(self, article: Article) -> bool:
        """
        Add an article to the set.

        Returns:
            True if the article was added, False if the call was a no-op
        """
        if article.id in self:
            return False
        if len(self._articles) >= MAX_COMPARISON_SIZE:
            return False
        self._articles.append(article)
        return True

    def remove(self, news_id: str) -> None:
        self._articles = [a for a in self._articles if a.id != news_id]

    def clear(self) -> None:
        self._articles = []

    @property
    def articles(self) -> List[Article]:
        return list(self._articles)

    @property
    def is_full(self) -> bool:
        return len(self._articles) >= MAX_COMPARISON_SIZE

    def summary(self) -> "ComparisonSummary":
        return aggregate_comparison(self._articles)

    def __contains__(self, news_id) -> bool:
        return any(a.id == news_id for a in self._articles)

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self):
        return iter(list(self._articles))


@dataclass
class ComparisonSummary:
    source_count: int = 0
    average_sentiment: float = 0.0
    positive_count: int = 0
    negative_count: int = 0
    common_keywords: List[Tuple[str, int]] = field(default_factory=list)


def aggregate_comparison(articles: List[Article]) -> ComparisonSummary:
    """
    Compute summary statistics for a comparison selection.

    Args:
        articles: The selected articles (at most four in practice)

    Returns:
        ComparisonSummary with distinct source count, mean sentiment score,
        positive and negative counts, and keywords shared by the selection
    """
    if not articles:
        return ComparisonSummary()

    return ComparisonSummary(
        source_count=len({article.source for article in articles}),
        average_sentiment=sum(article.sentiment_score for article in articles) / len(articles),
        positive_count=sum(1 for article in articles if article.sentiment == 'positive'),
        negative_count=sum(1 for article in articles if article.sentiment == 'negative'),
        common_keywords=repeated_keywords(
            (article.keywords for article in articles), MAX_COMMON_KEYWORDS
        ),
    )
