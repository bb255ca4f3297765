"""
Default wiring: SQL store + ARQ queue + dispatcher + lifecycle engine.
"""

from __future__ import annotations

from typing import Optional

from hiretrack.application.ports import ApplicationStorePort, NotificationQueuePort
from hiretrack.application.services import ApplicationLifecycleEngine, NotificationDispatcher
from hiretrack.config.settings import Settings, get_settings

from .container import Container


def bootstrap_dependencies(settings: Optional[Settings] = None, container: Optional[Container] = None) -> Container:
    settings = settings or get_settings()
    container = container or Container.instance()

    def _store() -> ApplicationStorePort:
        from hiretrack.infrastructure.stores.application_store import SqlAlchemyApplicationStore

        return SqlAlchemyApplicationStore(
            settings.database.url or None,
            auto_create_schema=settings.database.auto_create_schema,
        )

    def _queue() -> NotificationQueuePort:
        from hiretrack.infrastructure.queue.arq_queue import ArqNotificationQueue, redis_settings_from

        return ArqNotificationQueue(redis_settings_from(settings.redis), queue_name=settings.queue.queue_name)

    if not container.is_registered(ApplicationStorePort):
        container.register(ApplicationStorePort, _store, singleton=True)
    if not container.is_registered(NotificationQueuePort):
        container.register(NotificationQueuePort, _queue, singleton=True)
    container.register(
        NotificationDispatcher,
        lambda: NotificationDispatcher(container.resolve(NotificationQueuePort)),
        singleton=True,
    )
    container.register(
        ApplicationLifecycleEngine,
        lambda: ApplicationLifecycleEngine(
            container.resolve(ApplicationStorePort),
            container.resolve(NotificationDispatcher),
        ),
        singleton=True,
    )
    return container
