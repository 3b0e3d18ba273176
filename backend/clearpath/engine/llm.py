import logging

from openai import AsyncOpenAI

from ..config import settings

logger = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.openai_api_key)
    return _client


def is_configured() -> bool:
    return bool(settings.openai_api_key)


async def chat_text(
    system_prompt: str, messages: list[dict], max_tokens: int = 600
) -> str:
    """Single LLM call that returns plain text."""
    client = _get_client()
    response = await client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": system_prompt},
            *messages,
        ],
        temperature=0.2,
        max_tokens=max_tokens,
    )
    return response.choices[0].message.content or ""
