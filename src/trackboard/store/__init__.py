"""Annotation store interface, record cache and fetcher."""

from .base import AnnotationStore
from .cache import RecordCache
from .fetcher import AnnotationFetcher
from .memory import InMemoryAnnotationStore

__all__ = [
    "AnnotationStore",
    "RecordCache",
    "AnnotationFetcher",
    "InMemoryAnnotationStore",
]
