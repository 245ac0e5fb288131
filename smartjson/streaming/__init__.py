"""
Streaming extraction of JSON objects from chunked input.
"""

from .processor import ChunkBuffer, IncrementalExtractor, iter_extract, stream_extract

__all__ = ["ChunkBuffer", "IncrementalExtractor", "stream_extract", "iter_extract"]
