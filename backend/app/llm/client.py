"""LangChain chat-model wrapper for image analyses (OpenAI / Anthropic)."""

from __future__ import annotations

import base64
import binascii
import logging

from pydantic import BaseModel, Field

from app.config import settings
from app.llm.model_router import get_api_key, get_model_for_provider
from app.llm.prompts import USER_INSTRUCTION
from app.models.analysis import TokenUsage
from app.models.requests import ImagePayload

logger = logging.getLogger(__name__)

# Image media types accepted by both providers
SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
_FALLBACK_MIME_TYPE = "image/jpeg"


class LLMProviderError(RuntimeError):
    """The provider call failed (network, quota, refused request...)."""


class Completion(BaseModel):
    text: str
    model: str = ""
    usage: TokenUsage = Field(default_factory=TokenUsage)
    configured: bool = True


def image_url_for(image: ImagePayload) -> str:
    """URL passed to the model: the remote URL, or a base64 data URL."""
    if image.url:
        return image.url
    if not image.data:
        raise ValueError("Image payload needs either 'url' or 'data'")

    try:
        raw = base64.b64decode(image.data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image data is not valid base64: {e}") from e
    if not raw:
        raise ValueError("Image data is empty")

    size_mb = len(raw) / (1024 * 1024)
    if size_mb > settings.max_image_mb:
        raise ValueError(f"Image too large: {size_mb:.2f}MB (max {settings.max_image_mb:g}MB)")

    mime_type = image.mime_type if image.mime_type in SUPPORTED_MIME_TYPES else _FALLBACK_MIME_TYPE
    return f"data:{mime_type};base64,{image.data}"


def _usage_from(response) -> TokenUsage:
    usage = getattr(response, "usage_metadata", None) or {}
    input_tokens = usage.get("input_tokens", 0) or 0
    output_tokens = usage.get("output_tokens", 0) or 0
    return TokenUsage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=usage.get("total_tokens", input_tokens + output_tokens) or 0,
    )


def _chat_model(provider: str, model_id: str, api_key: str):
    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=model_id,
            api_key=api_key,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )

    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=model_id,
        api_key=api_key,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )


async def complete_analysis(provider: str, system_prompt: str, image: ImagePayload) -> Completion:
    """Send one image analysis request and return the full response text."""
    model_id = get_model_for_provider(provider)
    api_key = get_api_key(provider)
    url = image_url_for(image)

    if not api_key:
        env_var = f"{provider.upper()}_API_KEY"
        return Completion(
            text=f"[LLM not configured: set {env_var} in .env]",
            model=model_id,
            configured=False,
        )

    from langchain_core.messages import HumanMessage, SystemMessage

    llm = _chat_model(provider, model_id, api_key)
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=[
            {"type": "text", "text": USER_INSTRUCTION},
            {"type": "image_url", "image_url": {"url": url, "detail": "high"}},
        ]),
    ]

    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        logger.warning("%s analysis call failed: %s", provider, e)
        raise LLMProviderError(f"{provider} error: {e}") from e

    text = response.content if isinstance(response.content, str) else "".join(
        block.get("text", "") for block in response.content if isinstance(block, dict)
    )
    usage = _usage_from(response)
    logger.info(
        "%s (%s) answered %d chars, %d tokens",
        provider,
        model_id,
        len(text),
        usage.total_tokens,
    )
    return Completion(text=text, model=model_id, usage=usage)
