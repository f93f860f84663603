"""
Command-line interface for NewsRank.
"""
import sys
import json
import argparse
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml
from dotenv import load_dotenv

from newsrank.config import get_config
from newsrank.core.article import Article, ViewRecord, viewed_ids
from newsrank.core.clustering import cluster_topics
from newsrank.core.comparison import ComparisonSet
from newsrank.core.profile import build_preference_profile, reading_stats
from newsrank.core.recommender import recommend
from newsrank.core.similarity import find_similar_by_id
from newsrank.exceptions import NewsRankError, RecordError
from newsrank.fetchers.store import StoreFetcher
from newsrank.formatters.html import HtmlConverter
from newsrank.formatters.markdown import MarkdownFormatter

logger = logging.getLogger(__name__)

def setup_logging(level: Optional[str] = None):
    """Configure root logging the same way for every command."""
    logging.basicConfig(
        level=getattr(logging, (level or get_config('logging.level', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="NewsRank - news recommendations and topic groups")
    parser.add_argument("--articles", help="Path to a JSON or YAML file of article rows")
    parser.add_argument("--history", help="Path to a JSON or YAML file of view records")
    parser.add_argument("--from-store", action="store_true", help="Read articles and history from the store")
    parser.add_argument("--user", help="Reader id for history read from the store")
    parser.add_argument("--format", choices=["markdown", "html", "json"],
                        default=get_config('output.format', 'markdown'), help="Output format")
    parser.add_argument("--output", help="Write the report to this file instead of stdout")
    parser.add_argument("--log-level", help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend_parser = subparsers.add_parser("recommend", help="Recommend unseen articles")
    recommend_parser.add_argument("--limit", type=int, default=get_config('recommendations.limit', 10))

    similar_parser = subparsers.add_parser("similar", help="Find articles similar to one article")
    similar_parser.add_argument("news_id", help="Reference article id")
    similar_parser.add_argument("--limit", type=int, default=get_config('similar.limit', 5))

    subparsers.add_parser("cluster", help="Group articles into comparable topics")

    compare_parser = subparsers.add_parser("compare", help="Compare up to four articles")
    compare_parser.add_argument("news_ids", nargs="+", help="Article ids to compare")

    subparsers.add_parser("stats", help="Summarise a reader's history")

    return parser.parse_args(argv)

def load_rows(path: str) -> List[Dict[str, Any]]:
    """
    Load a list of rows from a JSON or YAML file.

    A top-level mapping with a single list value is unwrapped, so both
    [...] and {"articles": [...]} are accepted.
    """
    file_path = Path(path)
    with open(file_path, 'r', encoding='utf-8') as f:
        if file_path.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if isinstance(data, dict):
        lists = [value for value in data.values() if isinstance(value, list)]
        if len(lists) != 1:
            raise RecordError(f"{path}: expected a list of rows")
        data = lists[0]
    if not isinstance(data, list):
        raise RecordError(f"{path}: expected a list of rows")
    return data

def load_articles(path: str) -> List[Article]:
    return [Article.from_row(row) for row in load_rows(path)]

def load_history(path: str) -> List[ViewRecord]:
    """Load view records whose rows carry category and keywords inline."""
    records = []
    for row in load_rows(path):
        if 'reading_time_seconds' not in row and 'reading_time' in row:
            row = dict(row, reading_time_seconds=row['reading_time'])
        records.append(ViewRecord.from_row(row, row))
    return records

def load_inputs(args) -> Tuple[List[Article], List[ViewRecord]]:
    """
    Materialise the corpus and view history for a command.

    Returns:
        Tuple of (articles, view records)
    """
    needs_history = args.command in ("recommend", "stats")

    if args.from_store:
        fetcher = StoreFetcher.from_config()
        articles = fetcher.fetch_articles()
        history = []
        if needs_history:
            if not args.user:
                raise NewsRankError("--user is required with --from-store for this command")
            history = fetcher.fetch_view_history(args.user)
        return articles, history

    if not args.articles:
        raise NewsRankError("Either --articles or --from-store is required")

    articles = load_articles(args.articles)
    history = load_history(args.history) if args.history else []
    if needs_history and not args.history:
        logger.warning("No view history given; results will be empty")
    return articles, history

def run_command(args, articles: List[Article], history: List[ViewRecord]) -> Tuple[str, Any]:
    """
    Run the selected command.

    Returns:
        Tuple of (markdown report, JSON-serialisable payload)
    """
    formatter = MarkdownFormatter()

    if args.command == "recommend":
        profile = build_preference_profile(history)
        results = recommend(articles, profile, viewed_ids(history), limit=args.limit)
        payload = {
            'profile': asdict(profile),
            'recommendations': [article.to_dict() for article in results],
        }
        return formatter.format_recommendations(results, profile), payload

    if args.command == "similar":
        reference = next((a for a in articles if a.id == args.news_id), None)
        results = find_similar_by_id(articles, args.news_id, limit=args.limit)
        payload = {'news_id': args.news_id, 'similar': [article.to_dict() for article in results]}
        return formatter.format_similar(reference, results), payload

    if args.command == "cluster":
        groups = cluster_topics(articles)
        payload = [
            {
                'topic': group.topic,
                'keywords': list(group.keywords),
                'news': [article.to_dict() for article in group.news],
            }
            for group in groups
        ]
        return formatter.format_groups(groups), payload

    if args.command == "compare":
        by_id = {article.id: article for article in articles}
        selection = ComparisonSet()
        for news_id in args.news_ids:
            if news_id not in by_id:
                logger.warning(f"Article {news_id} not found, skipping")
                continue
            if not selection.add(by_id[news_id]):
                logger.warning(f"Article {news_id} not added to comparison")
        summary = selection.summary()
        payload = {
            'news': [article.to_dict() for article in selection],
            'summary': asdict(summary),
        }
        return formatter.format_comparison(selection.articles, summary), payload

    if args.command == "stats":
        stats = reading_stats(history)
        payload = {
            'total_views': stats.total_views,
            'total_reading_time': stats.total_reading_time,
            'category_stats': stats.category_stats,
            'recent_views': [record.to_dict() for record in stats.recent_views],
        }
        return formatter.format_reading_stats(stats), payload

    raise NewsRankError(f"Unknown command: {args.command}")

def render(args, report: str, payload: Any) -> str:
    if args.format == "json":
        return json.dumps(payload, indent=2, ensure_ascii=False)
    if args.format == "html":
        return HtmlConverter().convert(report, title=f"NewsRank - {args.command}")
    return report

def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line script.
    """
    # Explicitly reload environment variables from .env file
    load_dotenv(override=True)

    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        articles, history = load_inputs(args)
        logger.info(f"Loaded {len(articles)} articles and {len(history)} views")

        report, payload = run_command(args, articles, history)
        output = render(args, report, payload)

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
            logger.info(f"Wrote {args.command} report to {args.output}")
        else:
            print(output)
        return 0
    except (NewsRankError, OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
