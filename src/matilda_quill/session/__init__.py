"""Bulk message operations (format all, format last, undo)."""

from .formatter import NO_CHANGES, MessageFormatter, MessageSnapshot
from .host import ChatMessage, JsonlChatHost, MessageHost

__all__ = ["NO_CHANGES", "MessageFormatter", "MessageSnapshot", "ChatMessage", "JsonlChatHost", "MessageHost"]
