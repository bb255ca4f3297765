from .memory_queue import InMemoryNotificationQueue

__all__ = ["InMemoryNotificationQueue"]
