"""
Markdown formatting utilities for NewsRank.
"""
from datetime import datetime
from typing import List, Optional

from newsrank.core.article import Article
from newsrank.core.clustering import ComparisonGroup
from newsrank.core.comparison import ComparisonSummary
from newsrank.core.profile import PreferenceProfile, ReadingStats
from newsrank.utils.nlp import estimate_reading_time
import logging

# Configure logging
logger = logging.getLogger(__name__)

class MarkdownFormatter:
    """
    Formats engine results into Markdown reports.
    """
    def __init__(self, today: Optional[datetime] = None):
        """
        Initialize the MarkdownFormatter.

        Args:
            today: Date shown in report headers (defaults to now)
        """
        self.today = (today or datetime.now()).strftime("%B %d, %Y")

    def format_article_metadata(self, article: Article) -> str:
        """
        Format article metadata with consistent layout.

        Args:
            article: The article to format metadata for

        Returns:
            Formatted metadata string
        """
        metadata = []

        # Build metadata parts in consistent order
        if article.source:
            metadata.append(f"**Source:** {article.source}")
        if article.category:
            metadata.append(f"**Category:** {article.category}")
        metadata.append(f"**Published:** {article.published_at.strftime('%B %d, %Y %H:%M')}")
        metadata.append(f"**Sentiment:** {article.sentiment} ({article.sentiment_score * 100:.0f}%)")
        metadata.append(f"**Reading Time:** {estimate_reading_time(article.summary)} min")

        return " ".join(metadata)

    def format_article(self, article: Article, index: Optional[int] = None) -> str:
        """
        Format a single article as a Markdown list entry.

        Args:
            article: The article to format
            index: Position in a ranked list, if any

        Returns:
            Markdown for the article
        """
        prefix = f"{index}. " if index is not None else "- "
        title = f"[{article.title}]({article.url})" if article.url else article.title
        breaking = " **BREAKING**" if article.is_breaking else ""

        lines = [f"{prefix}{title}{breaking}", f"   {self.format_article_metadata(article)}"]
        if article.keywords:
            lines.append("   " + " ".join(f"#{keyword}" for keyword in article.keywords))
        return "\n".join(lines)

    def _format_ranked(self, articles: List[Article]) -> List[str]:
        content = []
        for i, article in enumerate(articles, 1):
            content.append(self.format_article(article, i))
            content.append("")
        return content

    def format_recommendations(self, articles: List[Article],
                               profile: Optional[PreferenceProfile] = None) -> str:
        """
        Format a personalised recommendation list.

        Args:
            articles: Recommended articles, best first
            profile: Profile the recommendations were built from

        Returns:
            Markdown report
        """
        content = [
            "# Recommended For You",
            f"Generated on {self.today}",
            ""
        ]

        if profile is not None and not profile.is_empty:
            if profile.top_categories:
                content.append(f"**Favourite categories:** {', '.join(profile.top_categories)}")
            if profile.top_keywords:
                content.append(f"**Favourite keywords:** {', '.join(profile.top_keywords)}")
            content.append("")

        if not articles:
            content.append("*No recommendations yet. Read a few articles to personalise this list.*")
            return "\n".join(content)

        content.extend(self._format_ranked(articles))
        return "\n".join(content)

    def format_similar(self, reference: Optional[Article], articles: List[Article]) -> str:
        """
        Format the articles similar to a reference article.

        Args:
            reference: The article the list was built for, if it was found
            articles: Similar articles, most similar first

        Returns:
            Markdown report
        """
        title = reference.title if reference else "Unknown article"
        content = [f"# Similar To: {title}", ""]

        if not articles:
            content.append("*No similar articles found.*")
            return "\n".join(content)

        content.extend(self._format_ranked(articles))
        return "\n".join(content)

    def format_groups(self, groups: List[ComparisonGroup]) -> str:
        """
        Format topic groups for comparison.

        Args:
            groups: Groups as returned by cluster_topics

        Returns:
            Markdown report
        """
        content = [
            "# Topics In The News",
            f"Generated on {self.today}",
            ""
        ]

        if not groups:
            content.append("*No topics with more than one article.*")
            return "\n".join(content)

        # Add table of contents
        for group in groups:
            content.append(f"- {group.topic}: {len(group.news)} articles")
        content.append("---")
        content.append("")

        for group in groups:
            content.append(f"## {group.topic}")
            if group.keywords:
                content.append(" ".join(f"#{keyword}" for keyword in group.keywords))
            content.append("")
            for article in group.news:
                content.append(self.format_article(article))
            content.append("")

        return "\n".join(content)

    def format_comparison(self, articles: List[Article], summary: ComparisonSummary) -> str:
        """
        Format a side-by-side comparison of selected articles.

        Args:
            articles: The selected articles
            summary: Aggregates computed by aggregate_comparison

        Returns:
            Markdown report
        """
        content = ["# News Comparison", ""]

        if not articles:
            content.append("*No articles selected.*")
            return "\n".join(content)

        content.append("| Title | Source | Sentiment | Score |")
        content.append("|---|---|---|---|")
        for article in articles:
            content.append(
                f"| {article.title} | {article.source} | {article.sentiment} "
                f"| {article.sentiment_score * 100:.0f}% |"
            )
        content.append("")

        content.append("## Summary")
        content.append(f"- Sources: {summary.source_count}")
        content.append(f"- Average sentiment: {summary.average_sentiment * 100:.0f}%")
        content.append(f"- Positive: {summary.positive_count}")
        content.append(f"- Negative: {summary.negative_count}")

        if summary.common_keywords:
            keywords = " ".join(f"#{keyword} ({count})" for keyword, count in summary.common_keywords)
            content.append(f"- Common keywords: {keywords}")

        return "\n".join(content)

    def format_reading_stats(self, stats: ReadingStats) -> str:
        """
        Format a reader's statistics.

        Args:
            stats: Statistics from reading_stats

        Returns:
            Markdown report
        """
        minutes = int(stats.total_reading_time // 60)
        content = [
            "# Reading Statistics",
            "",
            f"- Articles read: {stats.total_views}",
            f"- Time spent reading: {minutes} min",
            ""
        ]

        if stats.category_stats:
            content.append("## By Category")
            for category, count in stats.category_stats:
                content.append(f"- {category}: {count}")

        return "\n".join(content)
