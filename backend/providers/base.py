"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod

from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for one model in the generation fallback chain.

    Attributes:
        provider_type: Provider key (e.g., "gemini")
        model_id: Model identifier (e.g., "gemini-2.0-flash")
        api_key: API key for hosted providers
        temperature: Sampling temperature, None for the provider default
    """

    model_config = {"frozen": True}

    provider_type: str
    model_id: str
    api_key: str = ""
    temperature: float | None = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations return a LangChain chat model, so callers only depend
    on ``ainvoke`` and never on a vendor SDK.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> BaseChatModel:
        """Return a configured chat model for the given config.

        Args:
            config: Model configuration with provider details

        Returns:
            A configured LangChain chat model
        """
        pass
