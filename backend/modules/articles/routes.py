"""
Article API endpoints.

``admin_router`` is mounted at /api/admin/articles and requires an admin;
``public_router`` is mounted at /api/articles and serves published
articles only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_article_service
from api.middleware.admin import require_admin
from modules.admin.models import IdentityUser
from modules.prompts.exceptions import TemplateNotFoundError

from .interfaces import IArticleService
from .models import (
    ApproveArticleRequest,
    Article,
    ArticleListResponse,
    CreateArticleRequest,
    GenerateArticleRequest,
    GenerateArticleResponse,
    ImportArticleRequest,
    ImportArticleResponse,
    ImportFilesResponse,
    UpdateArticleRequest,
)
from .exceptions import (
    ArticleNotFoundError,
    CategoryNotFoundError,
    GenerationError,
    GenerationRateLimitError,
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

admin_router = APIRouter()
public_router = APIRouter()

_ARTICLE_INPUT_ERRORS = (
    MissingArticleFieldsError,
    InvalidSlugError,
    SlugConflictError,
    CategoryNotFoundError,
)


@admin_router.get("", response_model=ArticleListResponse)
async def list_articles(
    published: Optional[bool] = Query(default=None, description="Filter by published flag"),
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> ArticleListResponse:
    return ArticleListResponse(articles=await service.list_articles(published))


@admin_router.post("", response_model=Article, status_code=201)
async def create_article(
    request: CreateArticleRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> Article:
    """
    Create an article by hand.

    ``published_at`` defaults to now when the article is published.
    """
    try:
        return await service.create_article(admin.id, request)
    except _ARTICLE_INPUT_ERRORS as e:
        raise HTTPException(status_code=400, detail=e.message)


@admin_router.post("/generate", response_model=GenerateArticleResponse)
async def generate_article(
    request: GenerateArticleRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> GenerateArticleResponse:
    """
    Generate an article with Gemini and save it as a draft.

    With ``template_id`` the template is filled from the topic, candle
    type, language, category and any extra ``variables``; otherwise the
    built-in prompt is used. An existing article with the same slug is
    updated instead of duplicated.
    """
    try:
        return await service.generate_article(admin.id, request)
    except (InvalidTopicError, MissingTemplateVariablesError, InvalidSlugError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
    except GenerationRateLimitError as e:
        raise HTTPException(status_code=429, detail=e.message)
    except GeneratorNotConfiguredError as e:
        raise HTTPException(status_code=500, detail=e.message)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=e.message)


@admin_router.get("/import", response_model=ImportFilesResponse)
async def list_import_files(
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> ImportFilesResponse:
    """Markdown files available for import."""
    return ImportFilesResponse(files=await service.list_import_files())


@admin_router.post("/import", response_model=ImportArticleResponse)
async def import_article(
    request: ImportArticleRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> ImportArticleResponse:
    try:
        return await service.import_article(admin.id, request.slug, request.filename)
    except InvalidImportRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ImportFileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")


@admin_router.get("/{article_id}", response_model=Article)
async def get_article(
    article_id: str,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> Article:
    try:
        return await service.get_article(article_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")


@admin_router.patch("/{article_id}", response_model=Article)
async def update_article(
    article_id: str,
    request: UpdateArticleRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> Article:
    """
    Update an article. Only fields present in the body are changed.

    Unpublishing clears ``published_at``.
    """
    try:
        return await service.update_article(article_id, request)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")
    except _ARTICLE_INPUT_ERRORS as e:
        raise HTTPException(status_code=400, detail=e.message)


@admin_router.delete("/{article_id}", status_code=204)
async def delete_article(
    article_id: str,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> None:
    try:
        await service.delete_article(article_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")


@admin_router.post("/{article_id}/approve", response_model=Article)
async def approve_article(
    article_id: str,
    request: ApproveArticleRequest,
    admin: IdentityUser = Depends(require_admin),
    service: IArticleService = Depends(get_article_service),
) -> Article:
    """Publish (``approve: true``) or unpublish (``approve: false``) an article."""
    try:
        return await service.approve_article(article_id, request.approve, request.published_at)
    except MissingApproveFlagError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")


# -----------------------------------------------------------------------------
# Public
# -----------------------------------------------------------------------------


@public_router.get("", response_model=ArticleListResponse)
async def list_published_articles(
    service: IArticleService = Depends(get_article_service),
) -> ArticleListResponse:
    return ArticleListResponse(articles=await service.list_published())


@public_router.get("/{slug}", response_model=Article)
async def get_published_article(
    slug: str,
    service: IArticleService = Depends(get_article_service),
) -> Article:
    try:
        return await service.get_published(slug)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")
