from booking_core.notifications.dispatcher import NotificationDispatcher
from booking_core.notifications.emailjs import EmailJSClient, NotificationError

__all__ = ["EmailJSClient", "NotificationDispatcher", "NotificationError"]
