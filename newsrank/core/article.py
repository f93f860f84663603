"""
Article and view-history data models for NewsRank.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from newsrank.exceptions import RecordError
from newsrank.utils.nlp import normalize_keywords

CATEGORIES = (
    "politics", "economy", "technology", "sports", "health", "world",
    "entertainment", "education", "science", "environment", "automotive",
    "crypto", "finance", "realestate", "agriculture", "crime",
)

SENTIMENTS = ("positive", "neutral", "negative")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a store timestamp into a timezone-aware datetime.

    Accepts datetime objects and ISO-8601 strings, including a trailing 'Z'.
    Naive values are assumed to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise RecordError(f"Invalid timestamp: {value!r}") from e
    else:
        raise RecordError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def keyword_list(value: Any, context: str) -> List[str]:
    """
    Accept a keyword column as a list.

    A lone string is one keyword; None means no keywords.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise RecordError(f"{context}: expected a list, got {type(value).__name__}")


def parse_flag(value: Any, context: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise RecordError(f"{context}: expected a boolean, got {value!r}")


@dataclass
class Article:
    """
    Represents a news article as the engine sees it.

    Category and sentiment arrive already classified; keywords are stored
    lowercase so every comparison in the engine is case-insensitive.
    """
    id: str
    title: str
    summary: str
    source: str
    category: str
    sentiment: str
    sentiment_score: float
    published_at: datetime
    is_breaking: bool = False
    keywords: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self):
        self.keywords = normalize_keywords(self.keywords)
        self.published_at = parse_timestamp(self.published_at)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Article":
        """
        Build an Article from a raw store row.

        Args:
            row: Row dictionary with snake_case column names

        Returns:
            Article instance

        Raises:
            RecordError: If the row has no id or no publication timestamp
        """
        if row.get('id') is None or row.get('id') == "":
            raise RecordError(f"Article row without id: {row!r}")
        if row.get('published_at') is None:
            raise RecordError(f"Article {row['id']} has no published_at")

        try:
            sentiment_score = float(row.get('sentiment_score') or 0.0)
        except (TypeError, ValueError) as e:
            raise RecordError(f"Article {row['id']} has invalid sentiment_score") from e

        return cls(
            id=str(row['id']),
            title=row.get('title') or "",
            summary=row.get('summary') or "",
            source=row.get('source') or "",
            category=row.get('category') or "",
            sentiment=row.get('sentiment') or "neutral",
            sentiment_score=sentiment_score,
            published_at=parse_timestamp(row['published_at']),
            is_breaking=parse_flag(row.get('is_breaking'), f"Article {row['id']} is_breaking"),
            keywords=keyword_list(row.get('keywords'), f"Article {row['id']} keywords"),
            image_url=row.get('image_url'),
            url=row.get('url'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'summary': self.summary,
            'source': self.source,
            'category': self.category,
            'sentiment': self.sentiment,
            'sentiment_score': self.sentiment_score,
            'published_at': self.published_at.isoformat(),
            'is_breaking': self.is_breaking,
            'keywords': list(self.keywords),
            'image_url': self.image_url,
            'url': self.url,
        }


@dataclass
class ViewRecord:
    """
    One logged view of an article by a reader.

    Category and keywords are those of the article at view time.
    """
    news_id: str
    category: str
    keywords: List[str] = field(default_factory=list)
    reading_time: float = 0

    def __post_init__(self):
        self.keywords = normalize_keywords(self.keywords)

    @classmethod
    def from_row(cls, row: Dict[str, Any], article_row: Optional[Dict[str, Any]] = None) -> "ViewRecord":
        """
        Join a news_views row with the row of the article it refers to.

        Args:
            row: View row with news_id and reading_time_seconds
            article_row: Article row with category and keywords, if still present

        Returns:
            ViewRecord instance
        """
        if row.get('news_id') is None or row.get('news_id') == "":
            raise RecordError(f"View row without news_id: {row!r}")

        article_row = article_row or {}
        try:
            reading_time = max(0.0, float(row.get('reading_time_seconds') or 0))
        except (TypeError, ValueError) as e:
            raise RecordError(f"View of {row['news_id']} has invalid reading time") from e

        return cls(
            news_id=str(row['news_id']),
            category=article_row.get('category') or "",
            keywords=keyword_list(article_row.get('keywords'), f"Article {row['news_id']} keywords"),
            reading_time=reading_time,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'news_id': self.news_id,
            'category': self.category,
            'keywords': list(self.keywords),
            'reading_time': self.reading_time,
        }


def viewed_ids(records: List[ViewRecord]) -> set:
    """Identifiers of every article that appears in a view history."""
    return {record.news_id for record in records}
