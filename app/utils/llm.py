from __future__ import annotations

from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.config import Settings
from app.exceptions import ExternalServiceError
from app.logger import logger

PROVIDER_NAME = "OpenAI"


def build_chat_llm(settings: Settings) -> ChatOpenAI:
    """Chat model with the fixed sampling parameters used for readings."""
    kwargs = {
        "model": settings.openai_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
        "timeout": settings.llm_timeout_seconds,
        # A failed call drops to the static reading, never retried
        "max_retries": 0,
    }
    if settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return ChatOpenAI(**kwargs)


class ChatLLMTextGenerator:
    """TextGenerator backed by a LangChain chat model."""

    def __init__(self, settings: Settings, llm: Optional[ChatOpenAI] = None) -> None:
        self.settings = settings
        self._llm = llm

    @property
    def llm(self) -> ChatOpenAI:
        # Built lazily so a missing API key surfaces as a failed call, not a failed startup
        if self._llm is None:
            self._llm = build_chat_llm(self.settings)
        return self._llm

    async def generate(self, prompt: str, system_instruction: str) -> str:
        messages = [
            SystemMessage(content=system_instruction),
            HumanMessage(content=prompt),
        ]
        logger.info("llm_request_started", model=self.settings.openai_model, prompt_length=len(prompt))
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as exc:  # noqa: BLE001
            logger.error("llm_request_failed", error_type=type(exc).__name__, error=str(exc))
            raise ExternalServiceError(
                PROVIDER_NAME, "Chat completion request failed", original_error=str(exc)
            ) from exc

        content = getattr(response, "content", None)
        if not isinstance(content, str) or not content.strip():
            logger.warning("llm_empty_response", model=self.settings.openai_model)
            raise ExternalServiceError(PROVIDER_NAME, "Chat completion returned no message content")

        logger.info("llm_request_completed", response_length=len(content))
        return content

    async def aclose(self) -> None:
        if self._llm is None:
            return
        client = getattr(self._llm, "root_async_client", None)
        if client is not None:
            await client.close()
