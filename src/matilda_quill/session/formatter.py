"""Bulk formatting over a host's message collection, with undo."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..core.config import setup_logging
from ..schemas.configuration import Configuration
from ..text_formatting import PipelineEngine, format_legacy
from ..text_formatting.internal.pipeline import get_engine
from .host import ChatMessage, MessageHost

logger = setup_logging(__name__)

NO_CHANGES = "No changes were made."


@dataclass(frozen=True)
class MessageSnapshot:
    text: str
    alternate_texts: tuple[str, ...]
    active_alternate_index: int

    @classmethod
    def of(cls, message: ChatMessage) -> "MessageSnapshot":
        return cls(message.text, tuple(message.alternate_texts), message.active_alternate_index)

    def restore(self, message: ChatMessage) -> None:
        message.text = self.text
        message.alternate_texts = list(self.alternate_texts)
        message.active_alternate_index = self.active_alternate_index


class MessageFormatter:
    """Format, and restore, the non-user messages of a host.

    Each message is snapshotted before its first change; ``undo`` restores
    those snapshots verbatim.
    """

    def __init__(self, host: MessageHost, use_legacy: bool = False, engine: PipelineEngine | None = None):
        self.host = host
        self.use_legacy = use_legacy
        self.engine = engine or get_engine()
        self._snapshots: dict[int, MessageSnapshot] = {}

    @property
    def can_undo(self) -> bool:
        return bool(self._snapshots)

    def _formatter(self, config: Configuration) -> Callable[[str], str]:
        if self.use_legacy:
            return format_legacy
        return lambda text: self.engine.run(text, config)

    def _format_message(self, index: int, message: ChatMessage, fmt: Callable[[str], str]) -> bool:
        snapshot = MessageSnapshot.of(message)
        new_alternates = [fmt(alternate) for alternate in message.alternate_texts]
        new_text = fmt(message.text)
        if new_text == message.text and new_alternates == message.alternate_texts:
            return False

        self._snapshots.setdefault(index, snapshot)
        message.text = new_text
        message.alternate_texts = new_alternates
        self.host.render_message(index)
        return True

    def _format_indexes(self, indexes: list[int]) -> int:
        messages = self.host.messages()
        fmt = self._formatter(self.host.get_configuration())
        changed = sum(1 for index in indexes if self._format_message(index, messages[index], fmt))
        if changed:
            self.host.notify(f"Formatted {changed} message(s).")
        else:
            self.host.notify(NO_CHANGES)
        logger.info(f"Formatted {changed} of {len(indexes)} message(s)")
        return changed

    def format_all(self) -> int:
        """Format every non-user message; returns how many changed."""
        messages = self.host.messages()
        return self._format_indexes([i for i, m in enumerate(messages) if not m.is_user_authored])

    def format_last(self) -> int:
        """Format the most recent non-user message; returns 1 if it changed."""
        messages = self.host.messages()
        for index in range(len(messages) - 1, -1, -1):
            if not messages[index].is_user_authored:
                return self._format_indexes([index])
        self.host.notify(NO_CHANGES)
        return 0

    def undo(self) -> int:
        """Restore every message changed since the last undo."""
        if not self._snapshots:
            self.host.notify("Nothing to undo.")
            return 0
        messages = self.host.messages()
        restored = 0
        for index, snapshot in sorted(self._snapshots.items()):
            if index >= len(messages):
                logger.warning(f"Message {index} no longer exists; cannot restore it")
                continue
            snapshot.restore(messages[index])
            self.host.render_message(index)
            restored += 1
        self._snapshots.clear()
        self.host.notify(f"Restored {restored} message(s).")
        return restored
