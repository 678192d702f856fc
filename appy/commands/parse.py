"""Mention parsing for the command system.

A message addresses the bot when it starts with "@<name>". Decorations glued
to the mention are ignored, so "@Appy", "@appy🤣" and "@ApPy🤪" all match.
The router turns the result into a call to the matching command module.
"""

from dataclasses import dataclass

# Lower-case, letters only (compared against the normalized mention)
BOT_NAME = "appy"


@dataclass(frozen=True)
class ParsedCommand:
    command: str   # as typed, e.g. "calc" or "Weather"; "" for a bare mention
    args: str = ""


def _normalize_mention(token):
    """'@Appy🤣' -> 'appy'"""
    name = token[1:] if token.startswith("@") else token
    return "".join(ch for ch in name.lower() if ch.isalpha())


def parse_mention_and_command(raw, bot_name=BOT_NAME):
    """Split raw text into a ParsedCommand, or None if the bot isn't mentioned first.

    Examples:
        "@Appy calc 2+3"  -> ParsedCommand("calc", "2+3")
        "@Appy🤣 joke"    -> ParsedCommand("joke", "")
        "@Appy"           -> ParsedCommand("", "")
        "hello @Appy"     -> None
    """
    s = raw.strip()
    if not s.startswith("@"):
        return None

    parts = s.split(None, 1)
    if _normalize_mention(parts[0]) != bot_name:
        return None

    tail = parts[1].strip() if len(parts) > 1 else ""
    if not tail:
        return ParsedCommand("", "")

    pieces = tail.split(None, 1)
    args = pieces[1].strip() if len(pieces) > 1 else ""
    return ParsedCommand(pieces[0], args)


if __name__ == "__main__":
    tests = [
        "@Appy",
        "@Appy help",
        "@Appy🤣 joke",
        "@ApPy🤪   calc  (2+3*4)/5 ",
        "@Appy timer 1 min tea break",
        "hello @Appy",
        "@Bob calc 1+1",
    ]
    for t in tests:
        print(f"  {t!r:40s} => {parse_mention_and_command(t)}")
