"""Reactive layer — change signals and their delivery to SSE clients."""

from dotview.reactive.broadcaster import Broadcaster
from dotview.reactive.bus import NotificationBus, Subscriber

__all__ = [
    "Broadcaster",
    "NotificationBus",
    "Subscriber",
]
