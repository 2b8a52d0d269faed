"""Repository modules for response store access."""

from repositories.memory_repository import InMemoryResponseStore
from repositories.provider import ResponseStoreProtocol, get_response_store

__all__ = [
    "InMemoryResponseStore",
    "ResponseStoreProtocol",
    "get_response_store",
]
