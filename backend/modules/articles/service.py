"""
Articles service implementation.

Admin CRUD, the approval workflow, Markdown import and Gemini generation.
Generated and imported articles are stored as drafts and upserted by slug.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from modules.prompts.interfaces import IPromptTemplateService
from modules.prompts.engine import (
    create_variables_from_simple_mode,
    replace_template_variables,
    validate_template_variables,
)

from .interfaces import IArticleService
from .models import (
    MAX_TOPIC_LENGTH,
    MIN_TOPIC_LENGTH,
    SLUG_PATTERN,
    Article,
    CreateArticleRequest,
    GenerateArticleRequest,
    GenerateArticleResponse,
    GeneratedArticleResult,
    ImportArticleResponse,
    ImportFile,
    UpdateArticleRequest,
)
from .repository import ArticleRepository
from .generator import ArticleGenerator
from .content import (
    calculate_reading_time,
    create_article_prompt,
    generate_excerpt,
    title_from_slug,
)
from .exceptions import (
    ArticleNotFoundError,
    CategoryNotFoundError,
    GeneratorNotConfiguredError,
    ImportFileNotFoundError,
    InvalidImportRequestError,
    InvalidSlugError,
    InvalidTopicError,
    MissingApproveFlagError,
    MissingArticleFieldsError,
    MissingTemplateVariablesError,
    SlugConflictError,
)

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(SLUG_PATTERN)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a string; blank becomes None."""
    if value is None:
        return None
    return value.strip() or None


class ArticleService(IArticleService):
    """
    Article service backed by Supabase.

    Args:
        repository: Article data access
        generator: Gemini article generator
        templates: Prompt template service (for template-driven generation)
        import_dir: Directory holding Markdown files to import
        clock: Current time provider
    """

    def __init__(
        self,
        repository: ArticleRepository,
        generator: Optional[ArticleGenerator] = None,
        templates: Optional[IPromptTemplateService] = None,
        import_dir: str = "seo-articles",
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repo = repository
        self._generator = generator
        self._templates = templates
        self._import_dir = Path(import_dir)
        self._clock = clock

    # -------------------------------------------------------------------------
    # Admin CRUD
    # -------------------------------------------------------------------------

    async def list_articles(self, published: Optional[bool] = None) -> list[Article]:
        return self._repo.list_articles(published)

    async def get_article(self, article_id: str) -> Article:
        article = self._repo.get_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    async def create_article(self, author_id: str, request: CreateArticleRequest) -> Article:
        if not request.title or not request.slug or not request.content:
            raise MissingArticleFieldsError()

        slug = request.slug.strip()
        self._check_slug(slug)
        if request.category_id:
            self._check_category(request.category_id)

        published_at = None
        if request.published:
            published_at = (request.published_at or self._clock()).isoformat()

        article = self._repo.create({
            "title": request.title.strip(),
            "slug": slug,
            "excerpt": _clean(request.excerpt),
            "content": request.content.strip(),
            "category_id": request.category_id or None,
            "author_id": author_id,
            "seo_title": _clean(request.seo_title),
            "seo_description": _clean(request.seo_description),
            "seo_keywords": request.seo_keywords or None,
            "featured_image_url": _clean(request.featured_image_url),
            "reading_time": request.reading_time or None,
            "published": request.published,
            "published_at": published_at,
        })
        logger.info(f"Article '{article.slug}' created by {author_id}")
        return article

    async def update_article(self, article_id: str, request: UpdateArticleRequest) -> Article:
        fields = request.model_fields_set
        data: dict[str, Any] = {}

        if request.slug:
            self._check_slug(request.slug.strip(), exclude_id=article_id)
        if "category_id" in fields and request.category_id:
            self._check_category(request.category_id)

        if "title" in fields and request.title is not None:
            data["title"] = request.title.strip()
        if "slug" in fields and request.slug is not None:
            data["slug"] = request.slug.strip()
        if "content" in fields and request.content is not None:
            data["content"] = request.content.strip()
        for name in ("excerpt", "seo_title", "seo_description", "featured_image_url"):
            if name in fields:
                data[name] = _clean(getattr(request, name))
        if "category_id" in fields:
            data["category_id"] = request.category_id or None
        if "seo_keywords" in fields:
            data["seo_keywords"] = request.seo_keywords or None
        if "reading_time" in fields:
            data["reading_time"] = request.reading_time or None

        if "published" in fields and request.published is not None:
            data["published"] = request.published
            if request.published and request.published_at is None:
                data["published_at"] = self._clock().isoformat()
            elif not request.published:
                data["published_at"] = None
        if "published_at" in fields:
            data["published_at"] = request.published_at.isoformat() if request.published_at else None

        article = self._repo.update(article_id, data)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    async def delete_article(self, article_id: str) -> None:
        await self.get_article(article_id)
        self._repo.delete(article_id)
        logger.info(f"Article {article_id} deleted")

    async def approve_article(
        self,
        article_id: str,
        approve: Optional[bool],
        published_at: Optional[datetime] = None,
    ) -> Article:
        if approve is None:
            raise MissingApproveFlagError()

        data: dict[str, Any] = {"published": approve}
        if approve:
            data["published_at"] = (published_at or self._clock()).isoformat()
        else:
            data["published_at"] = None

        article = self._repo.update(article_id, data)
        if article is None:
            raise ArticleNotFoundError(article_id)

        logger.info(f"Article {article_id} {'published' if approve else 'unpublished'}")
        return article

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    async def generate_article(
        self,
        author_id: str,
        request: GenerateArticleRequest,
    ) -> GenerateArticleResponse:
        topic = self._check_topic(request.topic)
        prompt = await self._build_prompt(topic, request)

        if self._generator is None:
            raise GeneratorNotConfiguredError()
        generated = await self._generator.generate(prompt, topic)
        if not _SLUG_RE.match(generated.slug):
            raise InvalidSlugError(generated.slug)

        data: dict[str, Any] = {
            "title": generated.title,
            "content": generated.content,
            "excerpt": generated.excerpt,
            "reading_time": generated.reading_time,
            "seo_title": generated.seo_title,
            "seo_description": generated.seo_description,
            "seo_keywords": generated.seo_keywords,
            "author_id": author_id,
        }
        if request.category_id:
            data["category_id"] = request.category_id

        existing = self._repo.get_by_slug(generated.slug)
        if existing:
            article = self._repo.update_by_slug(generated.slug, data)
            action = "updated"
        else:
            article = self._repo.create({
                **data,
                "slug": generated.slug,
                "published": False,
                "published_at": None,
            })
            action = "created"

        logger.info(f"Generated article '{generated.slug}' ({action})")
        return GenerateArticleResponse(
            article=GeneratedArticleResult(id=article.id, **generated.model_dump()),
            action=action,
        )

    async def _build_prompt(self, topic: str, request: GenerateArticleRequest) -> str:
        """Prompt from the chosen template, or the built-in one."""
        if not request.template_id or self._templates is None:
            return create_article_prompt(topic, request.candle_type, request.language)

        template = await self._templates.get_template(request.template_id)

        category_name = None
        if request.category_id:
            category = self._repo.get_category(request.category_id)
            category_name = category.name if category else None

        values = create_variables_from_simple_mode(
            topic,
            candle_type=request.candle_type,
            language=request.language,
            category_name=category_name,
        )
        values.update(request.variables)

        validation = validate_template_variables(template, values)
        if not validation.valid:
            raise MissingTemplateVariablesError(validation.missing)

        return replace_template_variables(template.prompt, values)

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------

    async def list_import_files(self) -> list[ImportFile]:
        if not self._import_dir.is_dir():
            return []
        return [
            ImportFile(filename=path.name, slug=path.stem)
            for path in sorted(self._import_dir.glob("*.md"))
            if path.is_file()
        ]

    async def import_article(
        self,
        author_id: str,
        slug: Optional[str],
        filename: Optional[str],
    ) -> ImportArticleResponse:
        if not slug or not filename:
            raise InvalidImportRequestError()
        if "/" in filename or "\\" in filename or filename in (".", ".."):
            raise InvalidImportRequestError("Invalid filename")

        path = self._import_dir / filename
        if not path.is_file():
            raise ImportFileNotFoundError(filename)

        lines = path.read_text(encoding="utf-8").split("\n")
        title = ""
        body_start = 0
        for index, line in enumerate(lines):
            if line.startswith("# "):
                title = line[2:].strip()
                body_start = index + 1
                break
        title = title or title_from_slug(slug)
        content = "\n".join(lines[body_start:]).strip()

        data = {
            "title": title,
            "content": content,
            "excerpt": generate_excerpt(content),
            "reading_time": calculate_reading_time(content),
        }

        if self._repo.get_by_slug(slug):
            article = self._repo.update_by_slug(slug, data)
            action = "updated"
        else:
            article = self._repo.create({
                **data,
                "slug": slug,
                "author_id": author_id,
                "published": False,
            })
            action = "created"

        logger.info(f"Imported '{filename}' as article '{slug}' ({action})")
        return ImportArticleResponse(article=article, action=action)

    # -------------------------------------------------------------------------
    # Public
    # -------------------------------------------------------------------------

    async def list_published(self) -> list[Article]:
        return self._repo.list_published()

    async def get_published(self, slug: str) -> Article:
        article = self._repo.get_by_slug(slug, published_only=True)
        if article is None:
            raise ArticleNotFoundError(slug)
        return article

    # -------------------------------------------------------------------------
    # Validation helpers
    # -------------------------------------------------------------------------

    def _check_slug(self, slug: str, exclude_id: Optional[str] = None) -> None:
        if not _SLUG_RE.match(slug):
            raise InvalidSlugError(slug)
        if self._repo.slug_exists(slug, exclude_id=exclude_id):
            raise SlugConflictError(slug)

    def _check_category(self, category_id: str) -> None:
        if self._repo.get_category(category_id) is None:
            raise CategoryNotFoundError(category_id)

    @staticmethod
    def _check_topic(topic: str) -> str:
        if len(topic.strip()) < MIN_TOPIC_LENGTH:
            raise InvalidTopicError(f"Topic must be at least {MIN_TOPIC_LENGTH} characters long")
        if len(topic) > MAX_TOPIC_LENGTH:
            raise InvalidTopicError(f"Topic must be less than {MAX_TOPIC_LENGTH} characters")
        return topic.strip()
