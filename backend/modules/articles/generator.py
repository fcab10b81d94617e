"""
Article generation with Gemini through LangChain.

Walks an ordered list of models: each rate-limited attempt waits
``2**attempt * base_delay`` seconds and retries with the next model.
Other failures are not retried.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Optional, Sequence

from providers.base import LLMProvider, ModelConfig
from providers.factory import get_provider

from .content import (
    calculate_reading_time,
    extract_title,
    generate_excerpt,
    generate_seo_metadata,
    generate_slug,
    strip_title,
)
from .models import GeneratedArticle
from .exceptions import (
    GenerationError,
    GenerationRateLimitError,
    GeneratorNotConfiguredError,
)

logger = logging.getLogger(__name__)

DEFAULT_MODELS = (
    "gemini-2.0-flash-exp",
    "gemini-2.0-flash",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
)

_RATE_LIMIT_MARKERS = ("rate limit", "quota", "429", "resource_exhausted")


def is_rate_limit_error(error: BaseException) -> bool:
    """Whether a provider error means "slow down"."""
    message = str(error).lower()
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return True

    code = getattr(error, "code", None) or getattr(error, "status_code", None)
    return code == 429 or code == "RESOURCE_EXHAUSTED"


def response_text(response: Any) -> str:
    """Text of a chat model response (string or list of content parts)."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict):
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


def build_generated_article(markdown: str, topic: str) -> GeneratedArticle:
    """
    Turn raw model output into a GeneratedArticle.

    The H1 becomes the title (the topic when there is none) and is removed
    from the body. When neither title nor topic yields a slug, a random
    ``article-<hex>`` slug is used so drafts never share an empty slug.
    """
    title = extract_title(markdown) or topic
    slug = generate_slug(title) or generate_slug(topic) or f"article-{uuid.uuid4().hex[:8]}"
    content = strip_title(markdown)
    seo = generate_seo_metadata(title, content)

    return GeneratedArticle(
        title=title,
        slug=slug,
        content=content,
        excerpt=generate_excerpt(content),
        seo_title=seo.seo_title,
        seo_description=seo.seo_description,
        seo_keywords=seo.seo_keywords,
        reading_time=calculate_reading_time(content),
    )


class ArticleGenerator:
    """
    Generates Markdown articles with a model fallback chain.

    Args:
        api_key: Gemini API key
        models: Model IDs, preferred first
        max_retries: Retries after the first attempt (rate limits only)
        base_delay: Seconds for the first backoff step
        provider: LLM provider (defaults to the Gemini provider)
        sleep: Awaitable sleep, replaceable in tests
    """

    def __init__(
        self,
        api_key: str,
        models: Sequence[str] = DEFAULT_MODELS,
        max_retries: int = 3,
        base_delay: float = 1.0,
        provider: Optional[LLMProvider] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if not models:
            raise ValueError("At least one model is required")
        self._api_key = api_key
        self._models = list(models)
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._provider = provider or get_provider("gemini")
        self._sleep = sleep

    def model_for_attempt(self, attempt: int) -> str:
        """Model used on the given attempt; the last model repeats."""
        return self._models[min(attempt, len(self._models) - 1)]

    async def generate(self, prompt: str, topic: str) -> GeneratedArticle:
        """
        Generate an article from a prompt.

        Args:
            prompt: Fully substituted prompt
            topic: Fallback title when the output has no H1

        Returns:
            The post-processed article

        Raises:
            GeneratorNotConfiguredError: No API key
            GenerationRateLimitError: Still rate limited after all retries
            GenerationError: Any other failure, including empty output
        """
        if not self._api_key:
            raise GeneratorNotConfiguredError()

        attempt = 0
        while True:
            model_id = self.model_for_attempt(attempt)
            try:
                markdown = await self._invoke(model_id, prompt)
            except GenerationError:
                raise
            except Exception as e:
                logger.error(f"Error generating article (model: {model_id}, retry: {attempt}): {e}")

                if not is_rate_limit_error(e):
                    raise GenerationError(str(e) or "Failed to generate article. Please try again.", model=model_id) from e

                if attempt >= self._max_retries:
                    raise GenerationRateLimitError(model=model_id) from e

                delay = (2 ** attempt) * self._base_delay
                logger.warning(
                    f"Rate limit hit. Retrying in {delay}s with model {self.model_for_attempt(attempt + 1)}"
                )
                await self._sleep(delay)
                attempt += 1
                continue

            return build_generated_article(markdown, topic)

    async def _invoke(self, model_id: str, prompt: str) -> str:
        config = ModelConfig(provider_type="gemini", model_id=model_id, api_key=self._api_key)
        llm = self._provider.get_llm(config)
        response = await llm.ainvoke(prompt)

        text = response_text(response)
        if not text:
            raise GenerationError("Gemini API returned empty content", model=model_id)
        return text
