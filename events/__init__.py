"""
Event delivery for inbound chat messages.
"""

from .event_bus import ConcurrencyKind, EventBus, EventPriority, Listener
from .message_event import MessageEvent, flatten_command_components

__all__ = [
    "ConcurrencyKind",
    "EventBus",
    "EventPriority",
    "Listener",
    "MessageEvent",
    "flatten_command_components",
]
