"""Notification channel package."""
from .base import NotificationChannel, NotificationChannelPluginBase, EXT_NOTIFICATION_CHANNEL

from scitrera_app_framework import Variables, get_extension


def get_notification_channel(v: Variables = None) -> NotificationChannel:
    """Get the notification channel instance."""
    return get_extension(EXT_NOTIFICATION_CHANNEL, v)


__all__ = (
    'NotificationChannel',
    'NotificationChannelPluginBase',
    'get_notification_channel',
    'EXT_NOTIFICATION_CHANNEL',
)
