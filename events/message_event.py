"""
Message events delivered by the chat transport.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

from utils.validation import ValidationUtils

if TYPE_CHECKING:
    from commands.sender import CommandSender


@dataclass
class MessageEvent:
    """An inbound chat message."""

    sender: "CommandSender"
    message: Any
    source: Optional[Any] = field(default=None, repr=False)

    def components(self) -> List[Any]:
        return flatten_command_components(self.message)


def flatten_command_components(message: Any) -> List[Any]:
    """
    Split a message into command components.

    Text is sanitized and split on whitespace. Non-text parts (mentions,
    images, ...) are kept as single components in their original order.

    Args:
        message: A string or an iterable of message parts

    Returns:
        List of components; the first one is the command token
    """
    if message is None:
        return []
    if isinstance(message, str):
        return ValidationUtils.sanitize_input(message).split()

    components: List[Any] = []
    for part in message:
        if isinstance(part, str):
            components.extend(ValidationUtils.sanitize_input(part).split())
        elif part is not None:
            components.append(part)
    return components
