import pytest
from conftest import NOW, make_article, make_view

from newsrank.core.profile import PreferenceProfile, build_preference_profile
from newsrank.core.recommender import (
    BREAKING_BOOST,
    FRESH_BOOST,
    RECENT_BOOST,
    recency_multiplier,
    recommend,
    score_article,
)


def sports_profile():
    return PreferenceProfile(category_weights={"sports": 5}, top_categories=["sports"])


def test_category_only_ties_break_by_recency():
    """Three old sports articles score 10 each and come back newest first."""
    corpus = [
        make_article("a", category="sports", hours_ago=200),
        make_article("b", category="sports", hours_ago=100),
        make_article("c", category="sports", hours_ago=150),
    ]
    profile = sports_profile()
    for article in corpus:
        assert score_article(article, profile, NOW) == 10

    results = recommend(corpus, profile, set(), now=NOW)
    assert [a.id for a in results] == ["b", "c", "a"]


def test_equal_score_and_time_breaks_by_id():
    corpus = [
        make_article("z", category="sports"),
        make_article("m", category="sports"),
    ]
    results = recommend(corpus, sports_profile(), set(), now=NOW)
    assert [a.id for a in results] == ["m", "z"]


def test_viewed_articles_are_never_recommended():
    corpus = [make_article(f"n{i}", category="sports") for i in range(5)]
    viewed = {"n1", "n3"}
    results = recommend(corpus, sports_profile(), viewed, now=NOW)
    assert {a.id for a in results} == {"n0", "n2", "n4"}


def test_empty_profile_gives_no_recommendations():
    corpus = [make_article("a", category="sports", is_breaking=True, hours_ago=1)]
    assert recommend(corpus, build_preference_profile([]), set(), now=NOW) == []


def test_empty_corpus():
    assert recommend([], sports_profile(), set(), now=NOW) == []


def test_zero_score_candidates_are_dropped():
    corpus = [
        make_article("match", category="sports"),
        make_article("other", category="crime", is_breaking=True, hours_ago=1),
    ]
    results = recommend(corpus, sports_profile(), set(), now=NOW)
    assert [a.id for a in results] == ["match"]


def test_keyword_weights_are_added_case_insensitively():
    profile = PreferenceProfile(keyword_weights={"ai": 3, "chips": 2})
    article = make_article("a", category="technology", keywords=["AI", "Chips", "cloud"])
    assert score_article(article, profile, NOW) == 5


def test_keyword_only_match_is_recommended():
    """An article outside every weighted category still ranks on keywords."""
    history = [make_view("seen", "technology", ["nato"], 60)]
    profile = build_preference_profile(history)
    corpus = [make_article("seen", category="technology"), make_article("new", category="world", keywords=["NATO"])]
    results = recommend(corpus, profile, {"seen"}, now=NOW)
    assert [a.id for a in results] == ["new"]


def test_recency_multipliers():
    assert recency_multiplier(make_article("a", hours_ago=2).published_at, NOW) == FRESH_BOOST
    assert recency_multiplier(make_article("a", hours_ago=48).published_at, NOW) == RECENT_BOOST
    assert recency_multiplier(make_article("a", hours_ago=72).published_at, NOW) == 1.0


def test_fresh_breaking_article_gets_both_boosts():
    profile = sports_profile()
    article = make_article("a", category="sports", hours_ago=2, is_breaking=True)
    assert score_article(article, profile, NOW) == pytest.approx(10 * FRESH_BOOST * BREAKING_BOOST)


def test_boost_order_does_not_change_score():
    """Applying the breaking boost before or after recency gives the same score."""
    profile = PreferenceProfile(category_weights={"world": 3.7}, keyword_weights={"nato": 1.3})
    for hours in (1, 30, 500):
        article = make_article("a", hours_ago=hours, is_breaking=True, keywords=["nato"])
        base = 3.7 * 2 + 1.3
        multiplier = recency_multiplier(article.published_at, NOW)
        assert score_article(article, profile, NOW) == pytest.approx(base * BREAKING_BOOST * multiplier)
        assert score_article(article, profile, NOW) == pytest.approx(base * multiplier * BREAKING_BOOST)


def test_breaking_outranks_equal_article():
    corpus = [
        make_article("plain", category="sports", hours_ago=100),
        make_article("breaking", category="sports", hours_ago=200, is_breaking=True),
    ]
    results = recommend(corpus, sports_profile(), set(), now=NOW)
    assert [a.id for a in results] == ["breaking", "plain"]


def test_limit():
    corpus = [make_article(f"n{i}", category="sports", hours_ago=100 + i) for i in range(15)]
    assert len(recommend(corpus, sports_profile(), set(), now=NOW)) == 10
    assert len(recommend(corpus, sports_profile(), set(), limit=3, now=NOW)) == 3
    assert len(recommend(corpus, sports_profile(), set(), limit=None, now=NOW)) == 15


def test_recommend_is_deterministic():
    corpus = [
        make_article(f"n{i}", category=("sports", "world")[i % 2], keywords=["cup"] if i % 3 else [], hours_ago=i * 7)
        for i in range(20)
    ]
    profile = PreferenceProfile(category_weights={"sports": 2, "world": 1}, keyword_weights={"cup": 1.5})
    first = recommend(corpus, profile, {"n4"}, now=NOW)
    second = recommend(corpus, profile, {"n4"}, now=NOW)
    assert [a.id for a in first] == [a.id for a in second]
