from .memory_repository import InMemoryRepository

__all__ = ["InMemoryRepository"]
