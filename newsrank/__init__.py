"""
NewsRank - Recommendation, similarity and topic clustering for news feeds

Builds personalised rankings from a reader's view history, finds articles
similar to a given one and groups a corpus into comparable topic clusters.
Every operation is a pure function over an in-memory corpus.
"""

__version__ = "0.1.0"

from newsrank.core.clustering import cluster_topics
from newsrank.core.comparison import aggregate_comparison
from newsrank.core.profile import build_preference_profile
from newsrank.core.recommender import recommend
from newsrank.core.similarity import find_similar

__all__ = [
    "aggregate_comparison",
    "build_preference_profile",
    "cluster_topics",
    "find_similar",
    "recommend",
]
