"""Google Gemini LLM provider implementation.

Handles Google's Gemini models via the langchain-google-genai package.
Requires a valid API key for authentication.
"""

from langchain_google_genai import ChatGoogleGenerativeAI

from .base import LLMProvider, ModelConfig


class GeminiProvider(LLMProvider):
    """Provider for Google Gemini models used to write articles.

    Default fallback chain (newest first):
        - gemini-2.0-flash-exp
        - gemini-2.0-flash
        - gemini-1.5-flash
        - gemini-1.5-pro
    """

    def get_llm(self, config: ModelConfig) -> ChatGoogleGenerativeAI:
        """Return a ChatGoogleGenerativeAI client configured for Gemini.

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "Gemini API key is not configured. "
                "Set GEMINI_API_KEY in environment variables."
            )

        kwargs = {}
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature

        return ChatGoogleGenerativeAI(
            model=config.model_id,
            google_api_key=config.api_key,
            **kwargs,
        )
