from __future__ import annotations

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig


class LLMUnavailable(RuntimeError):
    """The LLM is disabled or has no API key configured."""


def chat_completion(
    messages: list[dict[str, str]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Send ``messages`` to Groq and return the assistant's reply text.

    Raises ``LLMUnavailable`` when disabled, and lets API errors propagate
    so callers decide how to fall back.
    """
    if not config.enabled or not config.api_key:
        raise LLMUnavailable("Groq API key not configured. Add GROQ_API_KEY to .env")

    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=messages,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
    content = response.choices[0].message.content
    if content is None:
        raise ValueError("Empty response from Groq")
    return content
