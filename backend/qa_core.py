from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Sequence

from config import Config
from context import build_messages
from gemini_client import generate as gemini_generate
from intents import find_first_url, normalize_query
from logger import logger
from models import ChatTurn, ExtractionResult, SourceInfo
from prompts import compose_prompt
from response import ResponseStream
from scraper import scrape_url

Generator = Callable[..., Any]
Scraper = Callable[[str], Awaitable[ExtractionResult]]


def content_preview(extraction: Optional[ExtractionResult], limit: Optional[int] = None) -> Optional[str]:
    if extraction is None or not extraction.ok:
        return None
    limit = Config.PREVIEW_CHARS if limit is None else limit
    return extraction.body_text[:limit] + "..."


async def prepare_answer(
    message: str,
    history: Sequence[ChatTurn] = (),
    generate: Generator = gemini_generate,
    scrape: Scraper = scrape_url,
    stream: Optional[bool] = None,
    listener: Optional[Callable[[ResponseStream], None]] = None,
) -> ResponseStream:
    """Run detection, extraction and prompt composition for one message.

    Extraction finishes before the prompt is built. The generation call itself is
    deferred until the returned stream is iterated, so its failures surface as an
    errored stream rather than an exception here.
    """
    stream_mode = Config.GENERATION_STREAMING if stream is None else stream
    url = find_first_url(message)
    extraction: Optional[ExtractionResult] = None
    sources: List[SourceInfo] = []
    if url:
        logger.info(f"[chat] extracting {url}")
        extraction = await scrape(url)
        sources.append(SourceInfo(url=url, extractorUsed=extraction.extractor_used, error=extraction.error))
        if extraction.error:
            logger.warning(f"[chat] extraction degraded for {url}: {extraction.error}")

    query = normalize_query(message, url)
    prompt = compose_prompt(query, extraction)
    messages: List[Dict[str, str]] = build_messages(prompt, history)
    logger.debug(f"[chat] prompt ready: {len(prompt)} chars, {len(messages)} message(s), stream={stream_mode}")

    return ResponseStream(
        lambda: generate(messages, stream=stream_mode),
        sources=sources,
        extraction=extraction,
        listener=listener,
    )


async def answer_question_stream(
    message: str,
    history: Sequence[ChatTurn] = (),
    generate: Generator = gemini_generate,
    scrape: Scraper = scrape_url,
) -> AsyncIterator[str]:
    stream = await prepare_answer(message, history, generate=generate, scrape=scrape)
    async for chunk in stream:
        yield chunk
