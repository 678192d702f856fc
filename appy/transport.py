"""Outbound messaging capabilities used by the router and timers.

A transport knows how to talk to one chat service. The router only needs
three things from it: send a text, send a knock (a short notifying ping),
and open a direct conversation with a participant.

ConsoleTransport prints everything; it backs `python -m appy -say ...`.
"""


class ConversationUnsupported(Exception):
    """The transport can't open a conversation with that participant."""


class Transport:
    self_id = None  # the bot's own participant id, if known

    def send_text(self, conversation_id, text):
        raise NotImplementedError

    def knock(self, conversation_id):
        raise NotImplementedError

    def create_direct(self, participant):
        """Open (or find) a direct conversation; returns its id."""
        raise ConversationUnsupported(f"{type(self).__name__} can't create conversations")

    def announce(self, conversation_id, text):
        """Knock, then send text. Used for timer expiry."""
        self.knock(conversation_id)
        self.send_text(conversation_id, text)


class ConsoleTransport(Transport):

    def send_text(self, conversation_id, text):
        print(f"[{conversation_id}] {text}", flush=True)

    def knock(self, conversation_id):
        print(f"[{conversation_id}] *knock*", flush=True)
