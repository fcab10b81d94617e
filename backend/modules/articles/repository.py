"""
Article repository for database access.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Article, ArticleCategory


ARTICLES_TABLE = "articles"
CATEGORIES_TABLE = "article_categories"


class ArticleRepository(BaseRepository[Article]):
    """
    Repository for the ``articles`` and ``article_categories`` tables.

    Note: This repository does NOT perform authorization checks.
    """

    # -------------------------------------------------------------------------
    # Articles
    # -------------------------------------------------------------------------

    def list_articles(self, published: Optional[bool] = None) -> list[Article]:
        """All articles, newest first, optionally filtered by published flag."""
        query = self._db.table(ARTICLES_TABLE).select("*")
        if published is not None:
            query = query.eq("published", published)
        result = query.order("created_at", desc=True).execute()
        return [Article(**row) for row in result.data]

    def list_published(self) -> list[Article]:
        result = (
            self._db.table(ARTICLES_TABLE)
            .select("*")
            .eq("published", True)
            .order("published_at", desc=True)
            .execute()
        )
        return [Article(**row) for row in result.data]

    def get_by_id(self, article_id: str) -> Optional[Article]:
        result = self._db.table(ARTICLES_TABLE).select("*").eq("id", article_id).execute()
        if not result.data:
            return None
        return Article(**result.data[0])

    def get_by_slug(self, slug: str, published_only: bool = False) -> Optional[Article]:
        query = self._db.table(ARTICLES_TABLE).select("*").eq("slug", slug)
        if published_only:
            query = query.eq("published", True)
        result = query.execute()
        if not result.data:
            return None
        return Article(**result.data[0])

    def slug_exists(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        """Whether any article (other than ``exclude_id``) uses the slug."""
        query = self._db.table(ARTICLES_TABLE).select("id").eq("slug", slug)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.execute().data)

    def create(self, data: dict[str, Any]) -> Article:
        result = self._db.table(ARTICLES_TABLE).insert(data).execute()
        return Article(**result.data[0])

    def update(self, article_id: str, data: dict[str, Any]) -> Optional[Article]:
        """Update an article; None if it does not exist."""
        data = {**data, "updated_at": self._now_iso()}
        result = self._db.table(ARTICLES_TABLE).update(data).eq("id", article_id).execute()
        if not result.data:
            return None
        return Article(**result.data[0])

    def update_by_slug(self, slug: str, data: dict[str, Any]) -> Article:
        data = {**data, "updated_at": self._now_iso()}
        result = self._db.table(ARTICLES_TABLE).update(data).eq("slug", slug).execute()
        return Article(**result.data[0])

    def delete(self, article_id: str) -> None:
        self._db.table(ARTICLES_TABLE).delete().eq("id", article_id).execute()

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def get_category(self, category_id: str) -> Optional[ArticleCategory]:
        result = self._db.table(CATEGORIES_TABLE).select("*").eq("id", category_id).execute()
        if not result.data:
            return None
        return ArticleCategory(**result.data[0])
