from datetime import datetime, timedelta, timezone

import pytest

from newsrank.core.article import Article, ViewRecord

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_article(news_id, title="Untitled story", category="world", sentiment="neutral",
                 sentiment_score=0.5, hours_ago=100, is_breaking=False, keywords=None,
                 source="Wire", summary="A short summary."):
    return Article(
        id=news_id,
        title=title,
        summary=summary,
        source=source,
        category=category,
        sentiment=sentiment,
        sentiment_score=sentiment_score,
        published_at=NOW - timedelta(hours=hours_ago),
        is_breaking=is_breaking,
        keywords=keywords or [],
    )


def make_view(news_id, category="world", keywords=None, reading_time=0):
    return ViewRecord(news_id=news_id, category=category, keywords=keywords or [], reading_time=reading_time)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def article_factory():
    return make_article


@pytest.fixture
def view_factory():
    return make_view
