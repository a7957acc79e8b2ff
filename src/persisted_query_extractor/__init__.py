"""Persisted query extractor - builds persisted-query manifests from GraphQL sources."""

__version__ = "0.1.0"
