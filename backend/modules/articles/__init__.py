"""
Articles module.

SEO articles: admin CRUD and approval, Markdown import, Gemini
generation and the public reading API.

Public API:
- IArticleService: Interface for article operations
- ArticleGenerator: Gemini generation with model fallback
- Content helpers: generate_slug, calculate_reading_time, generate_excerpt,
  extract_title, generate_seo_metadata, create_article_prompt
"""

from .interfaces import IArticleService
from .models import (
    Article,
    ArticleCategory,
    GeneratedArticle,
    SEOMetadata,
    CreateArticleRequest,
    UpdateArticleRequest,
    GenerateArticleRequest,
    GenerateArticleResponse,
)
from .content import (
    generate_slug,
    calculate_reading_time,
    generate_excerpt,
    extract_title,
    generate_seo_metadata,
    create_article_prompt,
)
from .generator import ArticleGenerator, is_rate_limit_error
from .exceptions import (
    ArticleNotFoundError,
    SlugConflictError,
    InvalidSlugError,
    CategoryNotFoundError,
    GenerationError,
    GenerationRateLimitError,
    GeneratorNotConfiguredError,
)

__all__ = [
    # Interface
    "IArticleService",
    # Models
    "Article",
    "ArticleCategory",
    "GeneratedArticle",
    "SEOMetadata",
    "CreateArticleRequest",
    "UpdateArticleRequest",
    "GenerateArticleRequest",
    "GenerateArticleResponse",
    # Content
    "generate_slug",
    "calculate_reading_time",
    "generate_excerpt",
    "extract_title",
    "generate_seo_metadata",
    "create_article_prompt",
    # Generation
    "ArticleGenerator",
    "is_rate_limit_error",
    # Exceptions
    "ArticleNotFoundError",
    "SlugConflictError",
    "InvalidSlugError",
    "CategoryNotFoundError",
    "GenerationError",
    "GenerationRateLimitError",
    "GeneratorNotConfiguredError",
]
