import asyncio
import inspect
from enum import Enum
from typing import Any, AsyncIterator, Callable, List, Optional

from logger import logger
from models import ExtractionResult, SourceInfo

ERROR_TAG = "[ERROR]"


class StreamState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETE = "complete"
    ERRORED = "errored"
    CANCELLED = "cancelled"


async def _single(text: Optional[str]) -> AsyncIterator[str]:
    if text:
        yield text


async def _from_iterable(items) -> AsyncIterator[str]:
    for item in items:
        yield item


async def _close_quietly(iterator) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.debug(f"[stream] error while closing source: {e}")


class ResponseStream:
    """Relays generated text for one request.

    ``source`` is whatever the generation service hands back: a single result (an
    awaitable resolving to ``str``) or an incremental sequence (an async iterable of
    ``str``). It may also be a zero-argument callable producing either, in which case
    the call is deferred until iteration starts. The stream can be iterated once.

    ``sources`` and ``extraction`` are metadata fixed before iteration; they never
    appear in the content. ``listener`` is told about COMPLETE and ERRORED only;
    cancellation is silent.
    """

    def __init__(
        self,
        source: Any,
        sources: Optional[List[SourceInfo]] = None,
        extraction: Optional[ExtractionResult] = None,
        listener: Optional[Callable[["ResponseStream"], None]] = None,
    ):
        self._source = source
        self.sources: List[SourceInfo] = list(sources or [])
        self.extraction = extraction
        self._listener = listener
        self.state = StreamState.IDLE
        self.error_message: Optional[str] = None
        self._consumed = False

    def __aiter__(self) -> AsyncIterator[str]:
        if self._consumed:
            raise RuntimeError("response stream can only be consumed once")
        self._consumed = True
        return self._relay()

    def cancel(self) -> None:
        """Stop relaying. Chunks not yet delivered are dropped."""
        if self.state in (StreamState.IDLE, StreamState.STREAMING):
            self.state = StreamState.CANCELLED
            logger.info("[stream] cancelled by caller")

    @property
    def cancelled(self) -> bool:
        return self.state is StreamState.CANCELLED

    def _finish(self, state: StreamState) -> None:
        if self.cancelled:
            return
        self.state = state
        if self._listener is not None:
            self._listener(self)

    def _fail(self, reason: str, partial: bool) -> str:
        if partial:
            self.error_message = f"{ERROR_TAG} The response was interrupted: {reason}"
        else:
            self.error_message = f"{ERROR_TAG} Failed to generate a response: {reason}"
        self._finish(StreamState.ERRORED)
        return f"\n\n{self.error_message}" if partial else self.error_message

    async def _open(self) -> AsyncIterator[str]:
        source = self._source() if callable(self._source) else self._source
        if inspect.isawaitable(source):
            source = await source
        if source is None or isinstance(source, str):
            return _single(source)
        if hasattr(source, "__aiter__"):
            return source.__aiter__()
        return _from_iterable(source)

    async def _relay(self) -> AsyncIterator[str]:
        if self.cancelled:
            return
        self.state = StreamState.STREAMING
        produced = 0
        fragments = None
        try:
            fragments = await self._open()
            async for chunk in fragments:
                if self.cancelled:
                    return
                if not chunk:
                    continue
                produced += 1
                yield chunk
                if self.cancelled:
                    return
        except (asyncio.CancelledError, GeneratorExit):
            self.cancel()
            raise
        except Exception as e:
            if self.cancelled:
                logger.debug(f"[stream] ignoring failure after cancel: {e}")
                return
            logger.error(f"[stream] generation failed after {produced} chunk(s): {e}")
            yield self._fail(str(e) or type(e).__name__, partial=produced > 0)
            return
        finally:
            if fragments is not None:
                await _close_quietly(fragments)

        if self.cancelled:
            return
        if not produced:
            logger.error("[stream] generation returned no text")
            yield self._fail("the language model returned an empty response", partial=False)
            return
        logger.info(f"[stream] complete: {produced} chunk(s)")
        self._finish(StreamState.COMPLETE)


async def collect_full_answer(stream: ResponseStream) -> str:
    """Drain a stream into the buffered message. An errored stream yields only its error."""
    chunks: List[str] = []
    async for ch in stream:
        chunks.append(ch)
    if stream.state is StreamState.ERRORED:
        return stream.error_message or ERROR_TAG
    return "".join(chunks)


async def generate_streaming_response(stream: ResponseStream) -> AsyncIterator[str]:
    """Chunked-transfer encoding of a stream. Client disconnects cancel the request silently."""
    try:
        async for chunk in stream:
            yield chunk
    except asyncio.CancelledError:
        logger.info("[stream] client disconnected")
        raise
