"""Telegram interface for Appy.

Runs the bot in a background thread with its own event loop. Incoming text
messages go through the command router in a worker thread, so command
handlers (and the timer checker) can call the blocking TelegramTransport
methods, which hop back onto the bot's loop.

Requires telegram_credentials.py with TELEGRAM_TOKEN from @BotFather.
If not configured, start_telegram() logs a message and returns without error.
"""

import asyncio
import threading

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ApplicationBuilder, ContextTypes, MessageHandler, filters

from appy.commands import router
from appy.transport import ConversationUnsupported, Transport

_SEND_TIMEOUT = 15  # seconds
_KNOCK_TEXT = "🔔"


def _log(msg):
    print(msg, flush=True)


class TelegramTransport(Transport):
    """Blocking sends onto a running bot. Call from any thread but the bot's own."""

    def __init__(self, bot, loop):
        self._bot = bot
        self._loop = loop
        self.self_id = bot.id

    def _run(self, coro):
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout=_SEND_TIMEOUT)

    def send_text(self, conversation_id, text):
        try:
            self._run(self._bot.send_message(chat_id=conversation_id, text=text))
        except (TelegramError, TimeoutError) as e:
            _log(f"  Send to {conversation_id} failed: {e}")

    def knock(self, conversation_id):
        try:
            self._run(self._bot.send_message(chat_id=conversation_id, text=_KNOCK_TEXT))
        except (TelegramError, TimeoutError) as e:
            _log(f"  Knock to {conversation_id} failed: {e}")

    def create_direct(self, participant):
        # A user's private chat with the bot has the user's id; it only exists
        # once they have started the bot.
        try:
            chat = self._run(self._bot.get_chat(participant))
        except (TelegramError, TimeoutError) as e:
            raise ConversationUnsupported(str(e)) from e
        return chat.id


def _to_message(tg_message):
    user = tg_message.from_user
    username = (user.first_name or user.username) if user else None
    replied = tg_message.reply_to_message
    reply_to = replied.from_user.id if replied and replied.from_user else None
    return router.Message(
        text=tg_message.text,
        conversation_id=tg_message.chat_id,
        sender_id=user.id if user else None,
        reply_to_sender=reply_to,
        source=f"[Telegram:{username or 'unknown'}]",
    )


async def _handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle an incoming Telegram message."""
    if update.message is None or not update.message.text:
        return

    message = _to_message(update.message)
    _log(f"  {message.source} \"{message.text}\"")

    response = await asyncio.to_thread(router.dispatch, message)
    if response is None:
        return

    _log(f"  Response: \"{response}\"")
    try:
        await update.message.reply_text(response)
    except TelegramError as e:
        _log(f"  Reply failed: {e}")


async def _run_bot_async(token, on_ready):
    """Run the Telegram bot polling loop (async)."""
    app = ApplicationBuilder().token(token).build()
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, _handle_message))

    await app.initialize()
    if on_ready is not None:
        on_ready(TelegramTransport(app.bot, asyncio.get_running_loop()))
    await app.updater.start_polling(drop_pending_updates=True)
    await app.start()
    _log(f"Telegram bot started as @{app.bot.username}.")

    # Block forever (until thread is killed as daemon)
    stop_event = asyncio.Event()
    await stop_event.wait()


def _run_bot(token, on_ready):
    """Run the Telegram bot (blocking). Meant to be called in a thread."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    loop.run_until_complete(_run_bot_async(token, on_ready))


def start_telegram(on_ready=None):
    """Start the Telegram bot in a background daemon thread.

    on_ready(transport) is called from the bot thread once the bot is
    initialized, before polling starts.

    Returns True if started, False if skipped (no token).
    """
    try:
        from appy.telegram_credentials import TELEGRAM_TOKEN as token
    except ImportError:
        _log("No telegram_credentials.py — Telegram disabled.")
        return False

    t = threading.Thread(target=_run_bot, args=(token, on_ready), daemon=True)
    t.start()
    return True
