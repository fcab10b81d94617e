"""
Articles module interface.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import (
    Article,
    CreateArticleRequest,
    GenerateArticleRequest,
    GenerateArticleResponse,
    ImportArticleResponse,
    ImportFile,
    UpdateArticleRequest,
)


@runtime_checkable
class IArticleService(Protocol):
    """
    Interface for article operations.

    Admin methods assume the caller is already verified as an admin.
    """

    async def list_articles(self, published: Optional[bool] = None) -> list[Article]:
        """All articles, newest first."""
        ...

    async def get_article(self, article_id: str) -> Article:
        """
        Raises:
            ArticleNotFoundError: If the article does not exist
        """
        ...

    async def create_article(self, author_id: str, request: CreateArticleRequest) -> Article:
        """
        Create an article by hand.

        Raises:
            MissingArticleFieldsError: title, slug or content missing
            InvalidSlugError: Slug is not lowercase letters, digits and hyphens
            SlugConflictError: Slug already used
            CategoryNotFoundError: Unknown category
        """
        ...

    async def update_article(self, article_id: str, request: UpdateArticleRequest) -> Article:
        """Apply a partial update. Same slug and category rules as create."""
        ...

    async def delete_article(self, article_id: str) -> None:
        ...

    async def approve_article(
        self,
        article_id: str,
        approve: Optional[bool],
        published_at: Optional[datetime] = None,
    ) -> Article:
        """
        Publish or unpublish an article.

        Raises:
            MissingApproveFlagError: If ``approve`` is None
            ArticleNotFoundError: If the article does not exist
        """
        ...

    async def generate_article(
        self,
        author_id: str,
        request: GenerateArticleRequest,
    ) -> GenerateArticleResponse:
        """
        Generate an article and store it as a draft (upsert by slug).

        Raises:
            InvalidTopicError: Topic shorter than 10 or longer than 200 chars
            TemplateNotFoundError: Unknown template
            MissingTemplateVariablesError: Required template values missing
            GenerationError: Generator failure (rate limit, configuration...)
        """
        ...

    async def list_import_files(self) -> list[ImportFile]:
        """Markdown files available in the import directory."""
        ...

    async def import_article(
        self,
        author_id: str,
        slug: Optional[str],
        filename: Optional[str],
    ) -> ImportArticleResponse:
        """
        Import a Markdown file as an article (upsert by slug).

        Raises:
            InvalidImportRequestError: Missing or unsafe slug/filename
            ImportFileNotFoundError: File does not exist
        """
        ...

    async def list_published(self) -> list[Article]:
        """Published articles, newest first."""
        ...

    async def get_published(self, slug: str) -> Article:
        """
        Raises:
            ArticleNotFoundError: If no published article has the slug
        """
        ...
