"""
Articles module data models.

Articles are Markdown pages with SEO metadata. They are written by hand,
imported from Markdown files, or generated with Gemini, and stay drafts
until an admin approves them.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


SLUG_PATTERN = r"^[a-z0-9-]+$"
MIN_TOPIC_LENGTH = 10
MAX_TOPIC_LENGTH = 200


class Article(BaseModel):
    """An article as stored in the ``articles`` table."""

    id: str = Field(..., description="Article ID (UUID)")
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    category_id: Optional[str] = None
    author_id: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[list[str]] = None
    featured_image_url: Optional[str] = None
    reading_time: Optional[int] = None
    published: bool = False
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ArticleCategory(BaseModel):
    id: str
    name: str
    slug: Optional[str] = None


class SEOMetadata(BaseModel):
    seo_title: str
    seo_description: str
    seo_keywords: list[str] = Field(default_factory=list)


class GeneratedArticle(BaseModel):
    """Post-processed output of the article generator."""

    title: str
    slug: str
    content: str
    excerpt: str
    seo_title: str
    seo_description: str
    seo_keywords: list[str] = Field(default_factory=list)
    reading_time: int


# -----------------------------------------------------------------------------
# API request / response models
# -----------------------------------------------------------------------------


class CreateArticleRequest(BaseModel):
    """Request to create an article by hand."""

    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category_id: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[list[str]] = None
    featured_image_url: Optional[str] = None
    reading_time: Optional[int] = None
    published: bool = False
    published_at: Optional[datetime] = None


class UpdateArticleRequest(BaseModel):
    """Partial update. Only fields present in the request are changed."""

    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category_id: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_keywords: Optional[list[str]] = None
    featured_image_url: Optional[str] = None
    reading_time: Optional[int] = None
    published: Optional[bool] = None
    published_at: Optional[datetime] = None


class ApproveArticleRequest(BaseModel):
    approve: Optional[bool] = Field(None, description="Publish (true) or unpublish (false)")
    published_at: Optional[datetime] = None


class GenerateArticleRequest(BaseModel):
    """Request to generate an article with Gemini."""

    topic: str = Field(..., description="Article topic (10-200 characters)")
    candle_type: Optional[str] = None
    language: Literal["ru", "en"] = "ru"
    category_id: Optional[str] = None
    template_id: Optional[str] = Field(None, description="Prompt template to use")
    variables: dict[str, str] = Field(default_factory=dict, description="Extra template values")


class GeneratedArticleResult(GeneratedArticle):
    id: str


class GenerateArticleResponse(BaseModel):
    article: GeneratedArticleResult
    action: Literal["created", "updated"]


class ArticleListResponse(BaseModel):
    articles: list[Article]


class ImportFile(BaseModel):
    """A Markdown file available for import."""

    filename: str
    slug: str


class ImportFilesResponse(BaseModel):
    files: list[ImportFile]


class ImportArticleRequest(BaseModel):
    slug: Optional[str] = None
    filename: Optional[str] = None


class ImportArticleResponse(BaseModel):
    article: Article
    action: Literal["created", "updated"]
