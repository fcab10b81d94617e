"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING, Callable, Optional

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin.gate import AdminAccessGate
    from modules.admin.interfaces import ISiteSettingsService
    from modules.articles.generator import ArticleGenerator
    from modules.articles.interfaces import IArticleService
    from modules.articles.repository import ArticleRepository
    from modules.candles.interfaces import ICandleService
    from modules.candles.repository import CandleRepository
    from modules.prompts.interfaces import IPromptTemplateService
    from modules.prompts.repository import PromptTemplateRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._candle_repository: "CandleRepository | None" = None
        self._candle_service: "ICandleService | None" = None
        self._prompt_template_repository: "PromptTemplateRepository | None" = None
        self._prompt_template_service: "IPromptTemplateService | None" = None
        self._site_settings_service: "ISiteSettingsService | None" = None
        self._article_repository: "ArticleRepository | None" = None
        self._article_generator: "ArticleGenerator | None" = None
        self._article_service: "IArticleService | None" = None

    @property
    def candle_repository(self) -> "CandleRepository":
        if self._candle_repository is None:
            from modules.candles.repository import CandleRepository
            from shared.database import get_supabase_client
            self._candle_repository = CandleRepository(get_supabase_client())
        return self._candle_repository

    @property
    def candles(self) -> "ICandleService":
        """Get the candle service instance."""
        if self._candle_service is None:
            from modules.candles.service import CandleService
            from shared.config import get_settings
            settings = get_settings()
            self._candle_service = CandleService(
                repository=self.candle_repository,
                language=settings.default_language,
                map_limit=settings.map_candles_limit,
            )
        return self._candle_service

    @property
    def prompt_template_repository(self) -> "PromptTemplateRepository":
        if self._prompt_template_repository is None:
            from modules.prompts.repository import PromptTemplateRepository
            from shared.database import get_supabase_client
            self._prompt_template_repository = PromptTemplateRepository(get_supabase_client())
        return self._prompt_template_repository

    @property
    def prompt_templates(self) -> "IPromptTemplateService":
        """Get the prompt template service instance."""
        if self._prompt_template_service is None:
            from modules.prompts.service import PromptTemplateService
            self._prompt_template_service = PromptTemplateService(self.prompt_template_repository)
        return self._prompt_template_service

    @property
    def site_settings(self) -> "ISiteSettingsService":
        """Get the site settings service instance."""
        if self._site_settings_service is None:
            from modules.admin.settings import SiteSettingsRepository, SiteSettingsService
            from shared.database import get_supabase_client
            self._site_settings_service = SiteSettingsService(
                SiteSettingsRepository(get_supabase_client())
            )
        return self._site_settings_service

    @property
    def article_repository(self) -> "ArticleRepository":
        if self._article_repository is None:
            from modules.articles.repository import ArticleRepository
            from shared.database import get_supabase_client
            self._article_repository = ArticleRepository(get_supabase_client())
        return self._article_repository

    @property
    def article_generator(self) -> "Optional[ArticleGenerator]":
        """Gemini generator, or None when no API key is configured."""
        if self._article_generator is None:
            from shared.config import get_settings
            settings = get_settings()
            if not settings.gemini_api_key:
                return None
            from modules.articles.generator import ArticleGenerator
            self._article_generator = ArticleGenerator(
                api_key=settings.gemini_api_key,
                models=settings.gemini_models,
                max_retries=settings.gemini_max_retries,
                base_delay=settings.gemini_retry_base_delay,
            )
        return self._article_generator

    @property
    def articles(self) -> "IArticleService":
        """Get the article service instance."""
        if self._article_service is None:
            from modules.articles.service import ArticleService
            from shared.config import get_settings
            self._article_service = ArticleService(
                repository=self.article_repository,
                generator=self.article_generator,
                templates=self.prompt_templates,
                import_dir=get_settings().articles_import_dir,
            )
        return self._article_service

    def admin_gate(self, access_token: Optional[str]) -> "AdminAccessGate":
        """
        Build an admin gate for one request.

        Gates are per request because the identity lookup is bound to the
        caller's access token.
        """
        from modules.admin.gate import AdminAccessGate
        from modules.admin.identity import SupabaseIdentityProvider
        from shared.config import get_settings
        from shared.database import get_supabase_anon_client

        settings = get_settings()
        provider = SupabaseIdentityProvider(get_supabase_anon_client(), access_token)
        return AdminAccessGate(
            provider,
            admin_emails=settings.admin_emails,
            timeout=settings.admin_check_timeout,
        )

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._candle_repository = None
        self._candle_service = None
        self._prompt_template_repository = None
        self._prompt_template_service = None
        self._site_settings_service = None
        self._article_repository = None
        self._article_generator = None
        self._article_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_candle_service() -> "ICandleService":
    """FastAPI dependency for candle service."""
    return get_container().candles


def get_prompt_template_service() -> "IPromptTemplateService":
    """FastAPI dependency for prompt template service."""
    return get_container().prompt_templates


def get_site_settings_service() -> "ISiteSettingsService":
    """FastAPI dependency for site settings service."""
    return get_container().site_settings


def get_article_service() -> "IArticleService":
    """FastAPI dependency for article service."""
    return get_container().articles


def get_admin_gate_factory() -> Callable[[Optional[str]], "AdminAccessGate"]:
    """FastAPI dependency returning a per-request admin gate factory."""
    return get_container().admin_gate
