"""
Text helpers shared by the scoring modules.

Keywords are compared case-insensitively everywhere, so every keyword that
enters the engine goes through normalize_keywords first.
"""
import math
from collections import Counter
from typing import Iterable, List, Sequence, Set, Tuple

# Title tokens of this length or shorter carry no topical signal
MIN_TITLE_TOKEN_LENGTH = 4
WORDS_PER_MINUTE = 200


def normalize_keyword(keyword: str) -> str:
    """Lowercase and strip a single keyword."""
    return str(keyword).strip().lower()


def normalize_keywords(keywords: Iterable[str]) -> List[str]:
    """
    Normalize a keyword list, keeping order and dropping blanks.

    Duplicates are kept: a keyword listed twice on an article still counts
    twice wherever keywords are tallied.

    Args:
        keywords: Raw keywords as supplied by the store

    Returns:
        List of lowercase, stripped keywords
    """
    if not keywords:
        return []
    normalized = []
    for keyword in keywords:
        if keyword is None:
            continue
        value = normalize_keyword(keyword)
        if value:
            normalized.append(value)
    return normalized


def keyword_set(keywords: Iterable[str]) -> Set[str]:
    return {normalize_keyword(k) for k in keywords}


def title_tokens(title: str) -> Set[str]:
    """
    Split a title on whitespace into a set of lowercase tokens.

    Only tokens longer than three characters are kept.
    """
    if not title:
        return set()
    return {
        token for token in title.lower().split()
        if len(token) >= MIN_TITLE_TOKEN_LENGTH
    }


def count_keywords(keyword_lists: Iterable[Sequence[str]]) -> Counter:
    """Pool keyword lists and count occurrences of each lowercase keyword."""
    counts = Counter()
    for keywords in keyword_lists:
        for keyword in keywords:
            counts[normalize_keyword(keyword)] += 1
    return counts


def repeated_keywords(keyword_lists: Iterable[Sequence[str]], top_n: int) -> List[Tuple[str, int]]:
    """
    Return keywords that occur more than once across the given lists.

    Sorted by count descending; equal counts keep first-occurrence order.

    Args:
        keyword_lists: One keyword list per article
        top_n: Maximum number of keywords to return

    Returns:
        List of (keyword, count) pairs
    """
    counts = count_keywords(keyword_lists)
    repeated = [(keyword, count) for keyword, count in counts.items() if count > 1]
    repeated.sort(key=lambda item: item[1], reverse=True)
    return repeated[:top_n]


def estimate_reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """
    Estimate reading time in whole minutes.

    Args:
        text: Article text
        words_per_minute: Assumed reading speed

    Returns:
        Minutes, never less than one
    """
    if not text:
        return 1
    word_count = len(text.split())
    return max(1, math.ceil(word_count / words_per_minute))
