from typing import Any, AsyncIterator, Awaitable, Dict, List, Sequence, Tuple, Union

import google.generativeai as genai

from config import Config
from logger import logger

_configured_key = None


class GenerationError(Exception):
    """The generation service failed or returned no usable text."""


def _ensure_configured() -> None:
    global _configured_key
    if not Config.GEMINI_API_KEY:
        raise GenerationError("GEMINI_API_KEY is not configured")
    if _configured_key != Config.GEMINI_API_KEY:
        genai.configure(api_key=Config.GEMINI_API_KEY)
        _configured_key = Config.GEMINI_API_KEY


def to_gemini_contents(messages: Sequence[Dict[str, str]]) -> Tuple[str, List[Dict[str, Any]]]:
    """Split role-tagged messages into (system instruction, Gemini contents)."""
    system_parts: List[str] = []
    contents: List[Dict[str, Any]] = []
    for m in messages:
        role = m.get("role")
        if role == "system":
            system_parts.append(m["content"])
            continue
        contents.append({
            "role": "model" if role == "assistant" else "user",
            "parts": [m["content"]],
        })
    return "\n\n".join(system_parts), contents


def _generation_config(**config):
    return genai.types.GenerationConfig(
        temperature=config.get('temperature', Config.GEMINI_TEMPERATURE),
        top_p=config.get('top_p', Config.GEMINI_TOP_P),
        top_k=config.get('top_k', Config.GEMINI_TOP_K),
        max_output_tokens=config.get('max_output_tokens', Config.GEMINI_MAX_OUTPUT_TOKENS),
    )


def _model(system_instruction: str):
    _ensure_configured()
    return genai.GenerativeModel(Config.GEMINI_MODEL, system_instruction=system_instruction or None)


def _chunk_text(chunk) -> str:
    # .text raises when a candidate carries no parts (e.g. blocked by safety filters)
    try:
        return chunk.text or ""
    except ValueError:
        return ""


async def get_answer(messages: Sequence[Dict[str, str]], **config) -> str:
    """Single-result completion."""
    system_instruction, contents = to_gemini_contents(messages)
    try:
        response = await _model(system_instruction).generate_content_async(
            contents, generation_config=_generation_config(**config)
        )
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"[gemini] Error: {e}")
        raise GenerationError(str(e)) from e
    return _chunk_text(response)


async def stream_answer(messages: Sequence[Dict[str, str]], **config) -> AsyncIterator[str]:
    """Incremental completion; yields text fragments in generation order."""
    system_instruction, contents = to_gemini_contents(messages)
    try:
        response = await _model(system_instruction).generate_content_async(
            contents, generation_config=_generation_config(**config), stream=True
        )
        async for chunk in response:
            text = _chunk_text(chunk)
            if text:
                yield text
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"[gemini] Stream error: {e}")
        raise GenerationError(str(e)) from e


def generate(
    messages: Sequence[Dict[str, str]], stream: bool = True, **config
) -> Union[AsyncIterator[str], Awaitable[str]]:
    if stream:
        return stream_answer(messages, **config)
    return get_answer(messages, **config)
