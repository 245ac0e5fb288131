"""
Extraction of JSON documents embedded in free text.
"""

from .extractor import DocumentExtractor, auto_extract, extract, extract_all

__all__ = ["DocumentExtractor", "extract", "extract_all", "auto_extract"]
