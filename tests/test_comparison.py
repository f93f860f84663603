import pytest
from conftest import make_article

from newsrank.core.comparison import MAX_COMPARISON_SIZE, ComparisonSet, aggregate_comparison


def test_average_sentiment_and_sources():
    """Scores 0.8 and 0.4 from sources A and B average to 0.6 across two sources."""
    articles = [
        make_article("a", source="A", sentiment="positive", sentiment_score=0.8),
        make_article("b", source="B", sentiment="negative", sentiment_score=0.4),
    ]
    summary = aggregate_comparison(articles)
    assert summary.average_sentiment == pytest.approx(0.6)
    assert summary.source_count == 2
    assert summary.positive_count == 1
    assert summary.negative_count == 1


def test_common_keywords_require_repetition():
    articles = [
        make_article("a", keywords=["ai", "chips", "Cloud"]),
        make_article("b", keywords=["AI", "cloud"]),
        make_article("c", keywords=["ai", "energy"]),
    ]
    summary = aggregate_comparison(articles)
    assert summary.common_keywords == [("ai", 3), ("cloud", 2)]


def test_empty_selection():
    summary = aggregate_comparison([])
    assert summary.source_count == 0
    assert summary.average_sentiment == 0.0
    assert summary.common_keywords == []


def test_fifth_article_is_ignored():
    """A full set stays at four articles."""
    selection = ComparisonSet(make_article(f"n{i}") for i in range(4))
    assert selection.is_full
    assert selection.add(make_article("n4")) is False
    assert len(selection) == MAX_COMPARISON_SIZE
    assert "n4" not in selection


def test_duplicate_add_is_ignored():
    selection = ComparisonSet()
    assert selection.add(make_article("a")) is True
    assert selection.add(make_article("a")) is False
    assert len(selection) == 1


def test_remove_and_clear():
    selection = ComparisonSet([make_article("a"), make_article("b")])
    selection.remove("missing")
    assert [a.id for a in selection] == ["a", "b"]
    selection.remove("a")
    assert [a.id for a in selection] == ["b"]
    selection.clear()
    assert len(selection) == 0


def test_size_bound_after_many_adds():
    selection = ComparisonSet()
    for i in range(20):
        selection.add(make_article(f"n{i % 7}"))
        assert len(selection) <= MAX_COMPARISON_SIZE
    assert [a.id for a in selection] == ["n0", "n1", "n2", "n3"]


def test_summary_is_deterministic():
    selection = ComparisonSet([make_article("a", keywords=["x", "y"]), make_article("b", keywords=["y", "x"])])
    assert selection.summary() == selection.summary()
    assert selection.summary().common_keywords == [("x", 2), ("y", 2)]
