from .application_store_port import ApplicationStorePort
from .mail_transport_port import MailTransportPort
from .notification_queue_port import NotificationQueuePort

__all__ = ["ApplicationStorePort", "MailTransportPort", "NotificationQueuePort"]
