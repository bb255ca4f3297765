from .dispatcher import NotificationDispatcher
from .lifecycle_engine import ApplicationLifecycleEngine, LifecycleOutcome
from .worker import DeliveryResult, NotificationWorker

__all__ = [
    "ApplicationLifecycleEngine",
    "LifecycleOutcome",
    "NotificationDispatcher",
    "NotificationWorker",
    "DeliveryResult",
]
