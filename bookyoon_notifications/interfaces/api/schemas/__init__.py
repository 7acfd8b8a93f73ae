from .notification import NotificationCreate, NotificationRead, NotificationUpdate

__all__ = ["NotificationCreate", "NotificationRead", "NotificationUpdate"]
