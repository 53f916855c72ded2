"""Host-side services the message formatter relies on.

The formatter only needs the ``MessageHost`` protocol. ``JsonlChatHost``
implements it over a JSON Lines chat log (one header line followed by one
record per message with ``is_user``, ``mes``, ``swipes`` and ``swipe_id``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from ..core.config import ConfigLoader, setup_logging
from ..schemas.configuration import Configuration

logger = setup_logging(__name__)


@dataclass
class ChatMessage:
    """One chat message as seen by the formatter.

    ``alternate_texts`` holds regenerated variants of the message;
    ``text`` is the variant currently shown.
    """

    text: str
    is_user_authored: bool = False
    alternate_texts: list[str] = field(default_factory=list)
    active_alternate_index: int = 0


class MessageHost(Protocol):
    def get_configuration(self) -> Configuration: ...

    def set_configuration(self, config: Configuration) -> None: ...

    def messages(self) -> list[ChatMessage]: ...

    def render_message(self, index: int) -> None: ...

    def notify(self, message: str) -> None: ...


class JsonlChatHost:
    """Chat log stored as JSON Lines on disk."""

    def __init__(self, path: str | Path, config_loader: ConfigLoader | None = None):
        self.path = Path(path)
        self._config = (config_loader or ConfigLoader()).configuration
        self.header: dict[str, Any] | None = None
        self._records: list[dict[str, Any]] = []
        self._messages: list[ChatMessage] = []
        self.rendered: list[int] = []
        self.notifications: list[str] = []
        self._load()

    def _load(self) -> None:
        with open(self.path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise ValueError(f"{self.path}:{line_number}: invalid JSON: {e}") from e
                if "mes" not in record and self.header is None and not self._records:
                    self.header = record
                    continue
                self._records.append(record)
                self._messages.append(
                    ChatMessage(
                        text=str(record.get("mes", "")),
                        is_user_authored=bool(record.get("is_user", False)),
                        alternate_texts=[str(s) for s in record.get("swipes", [])],
                        active_alternate_index=int(record.get("swipe_id", 0)),
                    )
                )
        logger.debug(f"Loaded {len(self._messages)} messages from {self.path}")

    def get_configuration(self) -> Configuration:
        return self._config

    def set_configuration(self, config: Configuration) -> None:
        self._config = config

    def messages(self) -> list[ChatMessage]:
        return self._messages

    def render_message(self, index: int) -> None:
        self.rendered.append(index)

    def notify(self, message: str) -> None:
        logger.info(message)
        self.notifications.append(message)

    def dumps(self) -> str:
        lines = []
        if self.header is not None:
            lines.append(json.dumps(self.header, ensure_ascii=False))
        for record, message in zip(self._records, self._messages):
            record["mes"] = message.text
            if message.alternate_texts or "swipes" in record:
                record["swipes"] = list(message.alternate_texts)
                record["swipe_id"] = message.active_alternate_index
            lines.append(json.dumps(record, ensure_ascii=False))
        return "\n".join(lines) + "\n"

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        target.write_text(self.dumps(), encoding="utf-8")
        return target
