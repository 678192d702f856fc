"""Command router: parses the mention, dispatches to the named command.

Each command module must provide:
    NAME                                  # command word, lower-case
    handle(args: str, message: Message) -> str

A bare "@Appy" is handled here: as a reply to someone else it opens a direct
conversation with that person, otherwise it shows help.
"""

import os
from dataclasses import dataclass
from datetime import datetime

from appy.commands import help_cmd
from appy.commands.parse import parse_mention_and_command
from appy.transport import ConversationUnsupported

_commands = {}
_transport = None

# Log file: lives next to the appy package directory
_LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "appy.log")


@dataclass
class Message:
    text: str
    conversation_id: object = None
    sender_id: object = None
    reply_to_sender: object = None  # author of the message being replied to
    source: str = "[console]"       # log tag, e.g. "[Telegram:Joe]"


def _log_request(message, parsed):
    """Append a compact 2-line entry to the log file."""
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if parsed is None:
        parse_line = "  -> ignored"
    else:
        parse_line = f"  -> command={parsed.command!r}, args={parsed.args!r}"
    try:
        with open(_LOG_PATH, "a") as f:
            f.write(f"{ts} {message.source}  {message.text}\n{parse_line}\n")
    except OSError:
        pass


def register(command_module):
    """Register a command module (must have NAME and handle)."""
    _commands[command_module.NAME] = command_module


def set_transport(transport):
    """Set the transport used to open conversations for a bare mention."""
    global _transport
    _transport = transport


def _bare_mention(message):
    target = message.reply_to_sender
    if target is None or _transport is None or target == _transport.self_id:
        return help_cmd.HELP_TEXT

    try:
        conversation_id = _transport.create_direct(target)
    except ConversationUnsupported as e:
        print(f"  [router] no direct conversation with {target}: {e}", flush=True)
        return "⚠️ I couldn’t create a new conversation in this environment."

    _transport.knock(conversation_id)
    _transport.send_text(conversation_id, "👋 I created this conversation so you two can chat here.")
    return "✅ Created a new conversation with that person. Check your chat list."


def dispatch(message):
    """Route one incoming message.

    Args:
        message: a Message, or plain text.

    Returns:
        The reply text, or None when the message doesn't address the bot.
    """
    if isinstance(message, str):
        message = Message(message)

    parsed = parse_mention_and_command(message.text)
    _log_request(message, parsed)
    if parsed is None:
        return None

    name = parsed.command.lower()
    if name == "":
        return _bare_mention(message)

    cmd = _commands.get(name)
    if cmd is None:
        return ("🤨 I don’t recognize that command, but I do recognize great taste in bots.\n\n"
                + help_cmd.HELP_TEXT)
    return cmd.handle(parsed.args, message)
