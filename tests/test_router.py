"""Tests for command routing, including bare-mention conversations."""

import pytest

from appy.commands import ALL_COMMANDS, help_cmd, joke, router
from appy.commands.router import Message
from appy.transport import ConversationUnsupported, Transport


class RecordingTransport(Transport):
    self_id = "appy-bot"

    def __init__(self, can_create=True):
        self.can_create = can_create
        self.sent = []

    def send_text(self, conversation_id, text):
        self.sent.append(("text", conversation_id, text))

    def knock(self, conversation_id):
        self.sent.append(("knock", conversation_id))

    def create_direct(self, participant):
        if not self.can_create:
            raise ConversationUnsupported("nope")
        return f"dm-{participant}"


@pytest.fixture(autouse=True)
def clean_router(monkeypatch, tmp_path):
    monkeypatch.setattr(router, "_commands", {})
    monkeypatch.setattr(router, "_transport", None)
    monkeypatch.setattr(router, "_LOG_PATH", str(tmp_path / "appy.log"))
    for cmd in ALL_COMMANDS:
        router.register(cmd)


def test_not_addressed_is_ignored():
    assert router.dispatch("hello @Appy") is None
    assert router.dispatch("@Bob calc 1+1") is None


def test_commands_route_case_insensitively():
    assert router.dispatch("@Appy calc 2+3*4") == "🧮 Result: 14"
    assert router.dispatch("@Appy CALC 2+3*4") == "🧮 Result: 14"
    assert router.dispatch("@Appy🤣 Echo hi there") == "🦜 hi there"


def test_help():
    assert router.dispatch("@Appy help") == help_cmd.HELP_TEXT


def test_unknown_command_shows_help():
    reply = router.dispatch("@Appy dance")
    assert reply.startswith("🤨 I don’t recognize that command")
    assert reply.endswith(help_cmd.HELP_TEXT)


def test_empty_args():
    assert router.dispatch("@Appy echo") == "🦜 Nothing to echo!"
    assert "Usage" in router.dispatch("@Appy calc")
    assert "Usage" in router.dispatch("@Appy weather")
    assert "Usage" in router.dispatch("@Appy timer")


def test_joke_goes_through_router(monkeypatch):
    monkeypatch.setattr(joke, "fetch_joke_online", lambda: ("😂 knock knock", "Test — x"))
    assert router.dispatch("@Appy joke") == "😂 knock knock\n\n_Source: Test — x_"


def test_bare_mention_shows_help():
    assert router.dispatch("@Appy") == help_cmd.HELP_TEXT


def test_bare_mention_reply_creates_conversation():
    transport = RecordingTransport()
    router.set_transport(transport)
    reply = router.dispatch(Message("@Appy", conversation_id="group", reply_to_sender="bob"))

    assert reply.startswith("✅ Created a new conversation")
    assert transport.sent == [
        ("knock", "dm-bob"),
        ("text", "dm-bob", "👋 I created this conversation so you two can chat here."),
    ]


def test_bare_mention_reply_unsupported():
    transport = RecordingTransport(can_create=False)
    router.set_transport(transport)
    reply = router.dispatch(Message("@Appy", reply_to_sender="bob"))
    assert reply.startswith("⚠️ I couldn’t create a new conversation")
    assert transport.sent == []


def test_bare_mention_reply_to_self_shows_help():
    transport = RecordingTransport()
    router.set_transport(transport)
    assert router.dispatch(Message("@Appy", reply_to_sender="appy-bot")) == help_cmd.HELP_TEXT
    assert transport.sent == []


def test_requests_are_logged(tmp_path):
    router.dispatch(Message("@Appy calc 1+1", source="[test]"))
    router.dispatch(Message("just chatting", source="[test]"))
    log = (tmp_path / "appy.log").read_text()
    assert "[test]  @Appy calc 1+1\n  -> command='calc', args='1+1'\n" in log
    assert "just chatting\n  -> ignored\n" in log


def test_transport_announce_knocks_first():
    transport = RecordingTransport()
    transport.announce("c", "⏰ Timer done: 1 minute!")
    assert transport.sent == [("knock", "c"), ("text", "c", "⏰ Timer done: 1 minute!")]
