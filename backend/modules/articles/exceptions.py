"""
Articles module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    ExternalServiceError,
)


class ArticleNotFoundError(NotFoundError):
    """Raised when an article is not found."""

    def __init__(self, article_id: str):
        super().__init__(
            "Article not found",
            code="ARTICLE_NOT_FOUND",
            details={"article_id": article_id},
        )


class MissingArticleFieldsError(ValidationError):
    def __init__(self):
        super().__init__(
            "Missing required fields: title, slug, content",
            code="MISSING_ARTICLE_FIELDS",
        )


class InvalidSlugError(ValidationError):
    def __init__(self, slug: str):
        super().__init__(
            "Invalid slug format. Only lowercase letters, numbers, and hyphens are allowed.",
            code="INVALID_SLUG",
            details={"slug": slug},
        )


class SlugConflictError(ValidationError):
    """Raised when another article already uses the slug."""

    def __init__(self, slug: str):
        super().__init__(
            "Article with this slug already exists",
            code="SLUG_CONFLICT",
            details={"slug": slug},
        )


class CategoryNotFoundError(ValidationError):
    """Raised when an article references a category that does not exist."""

    def __init__(self, category_id: str):
        super().__init__(
            "Category not found",
            code="CATEGORY_NOT_FOUND",
            details={"category_id": category_id},
        )


class MissingApproveFlagError(ValidationError):
    def __init__(self):
        super().__init__("Missing approve parameter", code="MISSING_APPROVE")


class InvalidTopicError(ValidationError):
    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TOPIC")


class MissingTemplateVariablesError(ValidationError):
    """Raised when required template variables have no value."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Missing required variables: {', '.join(missing)}",
            code="MISSING_TEMPLATE_VARIABLES",
            details={"missing": missing},
        )


# -----------------------------------------------------------------------------
# Import
# -----------------------------------------------------------------------------


class InvalidImportRequestError(ValidationError):
    def __init__(self, message: str = "Missing slug or filename"):
        super().__init__(message, code="INVALID_IMPORT_REQUEST")


class ImportFileNotFoundError(NotFoundError):
    def __init__(self, filename: str):
        super().__init__(
            "File not found",
            code="IMPORT_FILE_NOT_FOUND",
            details={"filename": filename},
        )


# -----------------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------------


class GenerationError(ExternalServiceError):
    """Raised when the article generator fails."""

    def __init__(
        self,
        message: str = "Failed to generate article. Please try again.",
        code: Optional[str] = None,
        model: Optional[str] = None,
    ):
        super().__init__(
            message,
            service="gemini",
            code=code or "GENERATION_FAILED",
            details={"model": model} if model else None,
        )


class GenerationRateLimitError(GenerationError):
    """Raised when every retry hit the provider's rate limit."""

    def __init__(self, model: Optional[str] = None):
        super().__init__(
            "API rate limit exceeded. Please wait a few minutes and try again. "
            "The Gemini API limits the number of requests per minute.",
            code="GENERATION_RATE_LIMITED",
            model=model,
        )


class GeneratorNotConfiguredError(GenerationError):
    """Raised when no Gemini API key is configured."""

    def __init__(self):
        super().__init__(
            "Gemini API key is not configured. Please set GEMINI_API_KEY in environment variables.",
            code="GENERATOR_NOT_CONFIGURED",
        )
