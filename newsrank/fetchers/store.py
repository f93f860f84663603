"""
Article store reader for NewsRank.

Reads the article corpus and a reader's view history from the hosted
backend's REST interface and maps rows onto Article and ViewRecord.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

import requests
from tqdm import tqdm

from newsrank.config import get_config
from newsrank.core.article import Article, ViewRecord
from newsrank.core.cache import CacheManager
from newsrank.exceptions import RecordError, StoreError

# Configure logging
logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = (
    "id,title,summary,source,category,sentiment,sentiment_score,"
    "published_at,is_breaking,keywords,image_url,url"
)

class StoreFetcher:
    """
    Fetches articles and view history from the store.
    """
    def __init__(self,
                 url: Optional[str] = None,
                 key: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 cache: Optional[CacheManager] = None,
                 page_size: Optional[int] = None,
                 timeout: Optional[float] = None):
        """
        Initialize the StoreFetcher.

        Args:
            url: Base URL of the store (defaults to store.url)
            key: API key sent as apikey and bearer token (defaults to store.key)
            session: HTTP session to use
            cache: Optional snapshot cache
            page_size: Rows per request when paging the article table
            timeout: Request timeout in seconds
        """
        self.url = (url or get_config('store.url') or "").rstrip('/')
        self.key = key or get_config('store.key') or ""
        self.session = session or requests.Session()
        self.cache = cache
        self.page_size = page_size or get_config('store.page_size', 500)
        self.timeout = timeout or get_config('store.timeout_seconds', 30)
        self.articles_table = get_config('store.articles_table', 'news')
        self.views_table = get_config('store.views_table', 'news_views')

        if not self.url:
            raise StoreError("No store URL configured. Set NEWSRANK_STORE_URL.")

    @classmethod
    def from_config(cls, session: Optional[requests.Session] = None) -> "StoreFetcher":
        """Build a fetcher, with a snapshot cache if caching is enabled."""
        cache = None
        if get_config('cache.enabled', True):
            cache = CacheManager(
                directory=get_config('cache.directory', 'cache'),
                duration=timedelta(minutes=get_config('cache.duration_minutes', 10)),
            )
        return cls(session=session, cache=cache)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            'apikey': self.key,
            'Authorization': f'Bearer {self.key}',
            'Accept': 'application/json',
        }

    def _get(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Run a single GET against a table endpoint.

        Args:
            table: Table name
            params: Query parameters in the store's filter syntax

        Returns:
            List of row dictionaries

        Raises:
            StoreError: If the request fails or returns something other than a list
        """
        endpoint = f"{self.url}/rest/v1/{table}"
        try:
            response = self.session.get(endpoint, headers=self.headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except requests.exceptions.RequestException as e:
            status_code = None
            if getattr(e, 'response', None) is not None:
                status_code = e.response.status_code
                logger.error(f"Status code: {status_code}")
                if status_code == 401:
                    logger.error("Authentication failed. Please check NEWSRANK_STORE_KEY")
            raise StoreError(f"Error reading {table}: {e}", status_code=status_code) from e
        except ValueError as e:
            raise StoreError(f"Invalid JSON from {table}: {e}") from e

        if not isinstance(rows, list):
            raise StoreError(f"Unexpected response from {table}: expected a list of rows")
        return rows

    def _cached(self, key: str):
        return self.cache.get(key) if self.cache else None

    def _store(self, key: str, rows: List[Dict[str, Any]]):
        if self.cache:
            self.cache.set(key, rows)

    def fetch_article_rows(self) -> List[Dict[str, Any]]:
        """
        Page through the article table, newest first.

        Returns:
            Raw article rows
        """
        cache_key = f"{self.articles_table}:all"
        cached = self._cached(cache_key)
        if cached is not None:
            logger.info(f"Using {len(cached)} cached article rows")
            return cached

        rows: List[Dict[str, Any]] = []
        offset = 0
        with tqdm(desc="Fetching articles", unit="rows") as pbar:
            while True:
                page = self._get(self.articles_table, {
                    'select': ARTICLE_COLUMNS,
                    'order': 'published_at.desc',
                    'limit': self.page_size,
                    'offset': offset,
                })
                rows.extend(page)
                pbar.update(len(page))
                if len(page) < self.page_size:
                    break
                offset += self.page_size

        self._store(cache_key, rows)
        logger.info(f"Fetched {len(rows)} article rows")
        return rows

    def fetch_articles(self) -> List[Article]:
        """
        Fetch the full article corpus.

        Rows that cannot be mapped are logged and skipped.

        Returns:
            List of Article objects
        """
        articles = []
        for row in self.fetch_article_rows():
            try:
                articles.append(Article.from_row(row))
            except RecordError as e:
                logger.warning(f"Skipping article row: {e}")
        return articles

    def fetch_view_history(self, user_id: str, limit: Optional[int] = None) -> List[ViewRecord]:
        """
        Fetch a reader's most recent views joined with article metadata.

        Args:
            user_id: Reader identifier
            limit: Number of most recent views to read (defaults to history.limit)

        Returns:
            ViewRecords, newest first
        """
        limit = limit or get_config('history.limit', 100)
        cache_key = f"{self.views_table}:{user_id}:{limit}"
        cached = self._cached(cache_key)

        if cached is not None:
            views, article_rows = cached
        else:
            views = self._get(self.views_table, {
                'select': 'news_id,reading_time_seconds',
                'user_id': f'eq.{user_id}',
                'order': 'viewed_at.desc',
                'limit': limit,
            })
            article_rows = []
            news_ids = sorted({str(v['news_id']) for v in views if v.get('news_id')})
            if news_ids:
                article_rows = self._get(self.articles_table, {
                    'select': 'id,category,keywords',
                    'id': f"in.({','.join(news_ids)})",
                })
            self._store(cache_key, [views, article_rows])

        by_id = {str(row.get('id')): row for row in article_rows}
        records = []
        for view in views:
            try:
                records.append(ViewRecord.from_row(view, by_id.get(str(view.get('news_id')))))
            except RecordError as e:
                logger.warning(f"Skipping view row: {e}")

        logger.info(f"Fetched {len(records)} views for user {user_id}")
        return records
