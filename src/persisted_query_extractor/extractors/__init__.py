"""Source extractors for different file types."""

from .base import BaseExtractor, ExtractedSource
from .graphql import GraphQLExtractor
from .javascript import JavaScriptExtractor

__all__ = [
    "BaseExtractor",
    "ExtractedSource",
    "GraphQLExtractor",
    "JavaScriptExtractor",
]
