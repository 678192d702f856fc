"""Entry point for `python -m appy`.

    python -m appy                      run the Telegram bot
    python -m appy -parse <text>        show how a message is parsed
    python -m appy -say <text>          answer a message on the console
"""

import sys
import time


def _parse_cmd(text):
    """Parse a single input and print the result in test_cases.txt format."""
    from appy.commands.parse import parse_mention_and_command

    print(f"> {text}")
    p = parse_mention_and_command(text)
    if p is None:
        print("module: none")
        return
    print(f"command: {p.command}")
    print(f"args: {p.args}")


def _say_cmd(text):
    """Dispatch one message through a console transport and print the reply."""
    from appy.commands import router, timer, ALL_COMMANDS
    from appy.transport import ConsoleTransport

    for cmd in ALL_COMMANDS:
        router.register(cmd)
    transport = ConsoleTransport()
    router.set_transport(transport)
    timer.set_announce_callback(transport.announce)

    response = router.dispatch(router.Message(text, conversation_id="console"))
    if response is None:
        print("(not addressed to Appy — ignored)")
        return
    print(response)

    # Wait for a started timer so its ping shows up (Ctrl-C to skip)
    try:
        while timer.pending():
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\nTimer abandoned.")


if __name__ == "__main__" or not sys.argv[0]:
    if len(sys.argv) >= 3 and sys.argv[1] == "-parse":
        _parse_cmd(" ".join(sys.argv[2:]))
    elif len(sys.argv) >= 3 and sys.argv[1] == "-say":
        _say_cmd(" ".join(sys.argv[2:]))
    else:
        from appy.main import main
        main()
