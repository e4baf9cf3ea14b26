"""
Chat completion client.

Wraps the Azure OpenAI chat deployment behind a single ``complete`` call.
Unlike retrieval, failures here are never degraded: the generated reply is
the request's deliverable, so every error surfaces as UpstreamLLMError.
The call is attempted exactly once.

Dependencies: langchain_openai, langchain_core
System role: Language model boundary
"""

import logging
from collections.abc import Callable, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_openai import AzureChatOpenAI

from ragchat.configs.azure_openai import AzureOpenAISettings
from ragchat.core.exceptions import UpstreamLLMError

logger = logging.getLogger(__name__)

EMPTY_REPLY = "No reply."


def build_chat_model(settings: AzureOpenAISettings) -> BaseChatModel:
    """
    Create the Azure OpenAI chat model from settings.

    Args:
        settings: Azure OpenAI settings

    Returns:
        BaseChatModel: Configured chat model with retries disabled

    Raises:
        ValueError: Endpoint, key or deployment is not configured
    """
    missing = [
        name for name in ("endpoint", "api_key", "deployment")
        if not getattr(settings, name).strip()
    ]
    if missing:
        raise ValueError(f"Azure OpenAI is not configured: missing {', '.join(missing)}")
    return AzureChatOpenAI(
        azure_endpoint=settings.endpoint,
        api_key=settings.api_key,
        azure_deployment=settings.deployment,
        api_version=settings.api_version,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.timeout,
        max_retries=0,
    )


def _message_text(content: object) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            part if isinstance(part, str) else part.get("text", "")
            for part in content
            if isinstance(part, (str, dict))
        ]
        return "".join(parts)
    return ""


class CompletionClient:
    """Generates assistant replies from an assembled message list."""

    def __init__(
        self,
        model: BaseChatModel | None = None,
        model_factory: Callable[[], BaseChatModel] | None = None,
    ) -> None:
        """
        Initialize completion client.

        Args:
            model: Chat model used for generation
            model_factory: Builds the model on first completion when no model is given
        """
        if model is None and model_factory is None:
            raise ValueError("CompletionClient needs a model or a model_factory")
        self._model = model
        self._model_factory = model_factory

    @property
    def model(self) -> BaseChatModel:
        """Chat model, built on first use when created from a factory."""
        if self._model is None:
            self._model = self._model_factory()
        return self._model

    async def complete(self, messages: Sequence[BaseMessage]) -> str:
        """
        Generate a reply.

        Args:
            messages: Ordered prompt messages

        Returns:
            str: Reply text, or "No reply." when the model returned nothing

        Raises:
            UpstreamLLMError: On any transport or service failure
        """
        try:
            response = await self.model.ainvoke(list(messages))
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            logger.error(
                f"{__name__}:complete - Completion request failed: {type(e).__name__}: {e}",
                extra={"upstream_status": status_code},
            )
            raise UpstreamLLMError(
                "Completion request failed",
                status_code=status_code,
                detail=str(e),
            ) from e

        reply = _message_text(response.content)
        return reply if reply.strip() else EMPTY_REPLY
