"""Appy main loop.

Registers the commands, starts the Telegram bot, and waits.

Usage:
    python -m appy
"""

import time

from appy.commands import router, timer, ALL_COMMANDS


def log(msg):
    print(msg, flush=True)


def main():
    # Register commands
    for cmd in ALL_COMMANDS:
        router.register(cmd)
    log(f"Commands: {', '.join(cmd.NAME for cmd in ALL_COMMANDS)}")

    # Wire up bare-mention conversations and timer pings once the bot is up
    def on_ready(transport):
        router.set_transport(transport)
        timer.set_announce_callback(transport.announce)

    try:
        from appy.telegram_bot import start_telegram
        started = start_telegram(on_ready)
    except Exception as e:
        log(f"Telegram bot failed to start: {e}")
        started = False

    if not started:
        log("Nothing to listen to. Try: python -m appy -say \"@Appy help\"")
        return

    log("Listening... mention @Appy to begin.\n")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        log("\nShutting down.")


if __name__ == "__main__":
    main()
