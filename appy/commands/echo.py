"""Echo command: repeats the arguments back.

Handles:
    "@Appy echo Appy is the best bot 🎉"
"""

NAME = "echo"


def handle(args, message=None):
    msg = args.strip()
    if not msg:
        return "🦜 Nothing to echo!"
    return f"🦜 {msg}"
