# Infrastructure Adapters Package
from .json_store import JsonReviewStateRepository
from .memory_store import InMemoryReviewStateRepository

__all__ = ["InMemoryReviewStateRepository", "JsonReviewStateRepository"]
