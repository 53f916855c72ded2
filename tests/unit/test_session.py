"""Unit tests for bulk message formatting and undo."""

import json

import pytest

from matilda_quill.core.config import ConfigLoader
from matilda_quill.schemas.configuration import Configuration
from matilda_quill.session import NO_CHANGES, ChatMessage, JsonlChatHost, MessageFormatter


class FakeHost:
    """In-memory MessageHost that records every callback."""

    def __init__(self, messages, config=None):
        self._messages = messages
        self.config = config or Configuration()
        self.rendered = []
        self.notifications = []

    def get_configuration(self):
        return self.config

    def set_configuration(self, config):
        self.config = config

    def messages(self):
        return self._messages

    def render_message(self, index):
        self.rendered.append(index)

    def notify(self, message):
        self.notifications.append(message)


@pytest.fixture
def host():
    return FakeHost(
        [
            ChatMessage(text='"I am happy," I said.', is_user_authored=True),
            ChatMessage(text='He said, "I am happy," and walked away.'),
            ChatMessage(
                text='"So sad," she said.',
                alternate_texts=['"So sad," she said.', '"Good day," he said.'],
            ),
        ]
    )


class TestFormatAll:
    """Test formatting every non-user message."""

    def test_formats_assistant_messages_only(self, host):
        changed = MessageFormatter(host).format_all()
        messages = host.messages()
        assert changed == 2
        assert messages[0].text == '"I am happy," I said.'
        assert messages[1].text == 'He said, "I am happy!" and walked away.'
        assert messages[2].text == '"So sad..." she said.'
        assert messages[2].alternate_texts == ['"So sad..." she said.', '"Good day!" he said.']
        assert host.rendered == [1, 2]
        assert host.notifications == ["Formatted 2 message(s)."]

    def test_no_changes_notifies(self):
        host = FakeHost([ChatMessage(text="Nothing to fix here.")])
        assert MessageFormatter(host).format_all() == 0
        assert host.notifications == [NO_CHANGES]
        assert host.rendered == []

    def test_uses_host_configuration(self, host):
        host.set_configuration(Configuration(smart_punctuation={"enabled": False}))
        assert MessageFormatter(host).format_all() == 0

    def test_legacy_mode(self):
        host = FakeHost([ChatMessage(text='He smiled. "I am happy," he said.')])
        MessageFormatter(host, use_legacy=True).format_all()
        assert host.messages()[0].text == '*He smiled.* "I am happy!" *he said.*'


class TestFormatLast:
    def test_only_last_assistant_message(self, host):
        assert MessageFormatter(host).format_last() == 1
        assert host.messages()[1].text == 'He said, "I am happy," and walked away.'
        assert host.messages()[2].text == '"So sad..." she said.'
        assert host.rendered == [2]

    def test_no_assistant_messages(self):
        host = FakeHost([ChatMessage(text="hi", is_user_authored=True)])
        assert MessageFormatter(host).format_last() == 0
        assert host.notifications == [NO_CHANGES]


class TestUndo:
    """Test restoring pre-format snapshots."""

    def test_undo_restores_verbatim(self, host):
        originals = [(m.text, list(m.alternate_texts)) for m in host.messages()]
        formatter = MessageFormatter(host)
        formatter.format_all()
        assert formatter.can_undo

        assert formatter.undo() == 2
        assert [(m.text, m.alternate_texts) for m in host.messages()] == originals
        assert not formatter.can_undo
        assert host.notifications[-1] == "Restored 2 message(s)."

    def test_undo_after_repeated_formatting_restores_original(self):
        host = FakeHost([ChatMessage(text='"Good,"')])
        formatter = MessageFormatter(host)
        formatter.format_all()
        host.set_configuration(Configuration(case_formatter_enabled=True))
        host.messages()[0].text = '"good,"'
        formatter.format_all()
        formatter.undo()
        assert host.messages()[0].text == '"Good,"'

    def test_nothing_to_undo(self, host):
        assert MessageFormatter(host).undo() == 0
        assert host.notifications == ["Nothing to undo."]


class TestJsonlChatHost:
    """Test the JSON Lines chat log host."""

    def _write_chat(self, path):
        records = [
            {"user_name": "User", "character_name": "Ava"},
            {"name": "User", "is_user": True, "mes": '"Hi," I said.'},
            {"name": "Ava", "is_user": False, "mes": '"Good morning," she said.', "swipes": ['"Good morning," she said.'], "swipe_id": 0},
        ]
        path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")

    def test_load_format_save(self, tmp_path):
        chat = tmp_path / "chat.jsonl"
        self._write_chat(chat)
        host = JsonlChatHost(chat, ConfigLoader(tmp_path / "missing.toml"))
        assert host.header == {"user_name": "User", "character_name": "Ava"}
        assert [m.is_user_authored for m in host.messages()] == [True, False]

        assert MessageFormatter(host).format_all() == 1
        host.save()

        reloaded = JsonlChatHost(chat, ConfigLoader(tmp_path / "missing.toml"))
        assert reloaded.header == host.header
        assert reloaded.messages()[0].text == '"Hi," I said.'
        assert reloaded.messages()[1].text == '"Good morning!" she said.'
        assert reloaded.messages()[1].alternate_texts == ['"Good morning!" she said.']

    def test_invalid_json_line(self, tmp_path):
        chat = tmp_path / "broken.jsonl"
        chat.write_text('{"mes": "ok"}\nnot json\n', encoding="utf-8")
        with pytest.raises(ValueError):
            JsonlChatHost(chat, ConfigLoader(tmp_path / "missing.toml"))
