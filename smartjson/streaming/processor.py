"""
Incremental JSON extraction from chunked input.

Text arriving in pieces (a model's streamed response, a socket, a large file)
is appended to a bounded rolling buffer. After every chunk the buffer is
rescanned from scratch for balanced ``{...}`` spans; each span that parses is
delivered and the text up to it is consumed. When the buffer grows past
``chunk_size * buffer_multiplier`` characters it is cut down to the last
``chunk_size`` characters, so an object whose opening brace has scrolled out
of that window is lost. Memory stays bounded no matter how much input
arrives without a closing brace.
"""

import asyncio
import codecs
import logging
from collections.abc import AsyncIterator, Iterable, Iterator
from typing import Any, Callable, Optional, Union

from ..core.engine import loads_strict, parse_with_repair
from ..core.scanner import scan_spans
from ..utils.config import StreamingConfig
from ..utils.exceptions import ParseError

logger = logging.getLogger(__name__)

Chunk = Union[str, bytes]


class ChunkBuffer:
    """Rolling text buffer with a hard ceiling on its length."""

    def __init__(self, chunk_size: int, max_size: int):
        self.chunk_size = chunk_size
        self.max_size = max_size
        self.text = ""
        self.dropped_chars = 0

    def __len__(self) -> int:
        return len(self.text)

    def append(self, chunk: str) -> None:
        """Append a chunk of text."""
        self.text += chunk

    def consume(self, count: int) -> None:
        """Discard the first ``count`` characters (already delivered)."""
        if count > 0:
            self.text = self.text[count:]

    def enforce_limit(self) -> int:
        """Truncate to the last ``chunk_size`` chars if over the ceiling.

        Returns:
            Number of characters dropped
        """
        if len(self.text) <= self.max_size:
            return 0

        dropped = len(self.text) - self.chunk_size
        self.text = self.text[-self.chunk_size :]
        self.dropped_chars += dropped
        logger.debug(
            "Buffer exceeded %d chars; dropped %d unparsed chars",
            self.max_size,
            dropped,
        )
        return dropped


class IncrementalExtractor:
    """Synchronous engine behind ``stream_extract`` and ``iter_extract``.

    Each instance owns one buffer; use a new instance per stream.
    """

    def __init__(self, config: Optional[StreamingConfig] = None):
        self.config = config or StreamingConfig()
        self.buffer = ChunkBuffer(self.config.chunk_size, self.config.max_buffer_size)
        self.documents_emitted = 0
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, chunk: Chunk) -> list[Any]:
        """
        Add a chunk and return the documents it completed.

        Documents are returned in the order their closing braces appear.
        Spans that fail to parse stay in the buffer.
        """
        if isinstance(chunk, (bytes, bytearray)):
            chunk = self._decoder.decode(bytes(chunk))

        self.buffer.append(chunk)

        documents = []
        consumed = 0
        for span in scan_spans(self.buffer.text):
            try:
                document = self._parse(span.text)
            except ParseError as e:
                logger.debug(
                    "Span at %d-%d does not parse: %s", span.start, span.end, e
                )
                continue
            documents.append(document)
            consumed = span.end + 1

        self.buffer.consume(consumed)
        self.buffer.enforce_limit()
        self.documents_emitted += len(documents)
        return documents

    def _parse(self, text: str) -> Any:
        if self.config.repair:
            return parse_with_repair(text)
        return loads_strict(text)


async def _iter_chunks(source: Any, chunk_size: int) -> AsyncIterator[Chunk]:
    """Normalize every supported source into an async stream of chunks.

    Synthetic sources (strings, plain iterables, blocking file objects) get an
    explicit scheduler yield after each chunk has been processed.
    """
    if isinstance(source, (str, bytes, bytearray)):
        for i in range(0, len(source), chunk_size):
            yield source[i : i + chunk_size]
            await asyncio.sleep(0)
    elif hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk
    elif hasattr(source, "read"):
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            yield chunk
            await asyncio.sleep(0)
    elif isinstance(source, Iterable):
        for chunk in source:
            yield chunk
            await asyncio.sleep(0)
    else:
        raise TypeError(f"Unsupported stream source: {type(source).__name__}")


async def stream_extract(
    source: Any,
    on_document: Callable[[Any], Any],
    config: Optional[StreamingConfig] = None,
    **options: Any,
) -> bool:
    """
    Extract JSON objects from a chunked source as they complete.

    Args:
        source: A str/bytes (sliced into ``chunk_size`` pieces), an async
            iterable of chunks, a file-like object with ``read()``, or any
            iterable of chunks
        on_document: Called synchronously with each parsed document, in the
            order the documents close in the stream
        config: StreamingConfig; mutually exclusive with keyword options
        **options: ``chunk_size`` (``chunkSize``), ``buffer_multiplier``,
            ``repair``

    Returns:
        True once the source is exhausted

    Raises:
        TypeError: If ``source`` is not a supported kind of stream
    """
    if config is not None and options:
        raise TypeError("Pass either config or keyword options, not both")
    if config is None:
        config = StreamingConfig.from_options(**options)

    extractor = IncrementalExtractor(config)
    async for chunk in _iter_chunks(source, config.chunk_size):
        for document in extractor.feed(chunk):
            on_document(document)

    logger.debug(
        "Stream finished: %d documents, %d chars dropped",
        extractor.documents_emitted,
        extractor.buffer.dropped_chars,
    )
    return True


def iter_extract(
    chunks: Union[str, Iterable[Chunk]],
    config: Optional[StreamingConfig] = None,
    **options: Any,
) -> Iterator[Any]:
    """Synchronous counterpart of ``stream_extract`` as a generator."""
    if config is not None and options:
        raise TypeError("Pass either config or keyword options, not both")
    if config is None:
        config = StreamingConfig.from_options(**options)

    if isinstance(chunks, (str, bytes)):
        size = config.chunk_size
        chunks = [chunks[i : i + size] for i in range(0, len(chunks), size)]

    extractor = IncrementalExtractor(config)
    for chunk in chunks:
        yield from extractor.feed(chunk)
