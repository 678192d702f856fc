"""Timer command: wait a while, then ping the conversation.

Handles:
    "@Appy timer 30s"
    "@Appy timer 1 min tea break"
    "@Appy timer 2 days project report"
    "@Appy timer 5 months"     (a month is a flat 30 days)

When a timer expires, the announce callback gets the conversation and the
done message; the transport knocks first, then sends the text.
"""

import itertools
import re
import threading
import time
from dataclasses import dataclass

NAME = "timer"

_SECOND = 1_000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# singular word -> (aliases, milliseconds)
_UNITS = {
    "second": (("s", "sec", "secs", "second", "seconds"), _SECOND),
    "minute": (("m", "min", "mins", "minute", "minutes"), _MINUTE),
    "hour": (("h", "hr", "hrs", "hour", "hours"), _HOUR),
    "day": (("d", "day", "days"), _DAY),
    "week": (("w", "wk", "wks", "week", "weeks"), 7 * _DAY),
    "month": (("mo", "mon", "mons", "month", "months"), 30 * _DAY),
}

_ALIASES = {alias: word for word, (aliases, _) in _UNITS.items() for alias in aliases}

# Longest aliases first so "mins" wins over "m"
_DURATION_RE = re.compile(
    r"^(\d+)\s*(" + "|".join(sorted(_ALIASES, key=len, reverse=True)) + r")(?:\s+(.*))?$",
    re.IGNORECASE | re.DOTALL)

_USAGE = ("⏱️ Usage: `@Appy timer 30s [optional label]`\n"
          "Examples: `@Appy timer 1 min tea break`, `@Appy timer 2 days report`")


@dataclass(frozen=True)
class TimerSpec:
    millis: int
    human: str     # "1 minute", "2 days"
    label: str = ""


# --- Duration parsing ---

def parse_duration(text):
    """Parse '<N><unit> [label]' into a TimerSpec, or None.

    "30s"            -> TimerSpec(30000, "30 seconds", "")
    "1 min"          -> TimerSpec(60000, "1 minute", "")
    "2 days report"  -> TimerSpec(172800000, "2 days", "report")
    """
    m = _DURATION_RE.match(text.strip())
    if m is None:
        return None
    value = int(m.group(1))
    word = _ALIASES[m.group(2).lower()]
    millis = value * _UNITS[word][1]
    human = f"{value} {word}{'' if value == 1 else 's'}"
    return TimerSpec(millis=millis, human=human, label=(m.group(3) or "").strip())


def _describe(spec):
    if spec.label:
        return f"{spec.human} — {spec.label}"
    return spec.human


# --- Scheduling ---

# Pending timers: {timer_id: {"end": timestamp, "conversation_id": ..., "spec": TimerSpec}}
_timers = {}
_lock = threading.Lock()
_ids = itertools.count(1)

_POLL_SECONDS = 0.5

# Callback for firing timers (set by main via set_announce_callback)
_announce_cb = None


def set_announce_callback(cb):
    """Set the function to call when a timer expires. cb(conversation_id, text) -> None."""
    global _announce_cb
    _announce_cb = cb


_checker_thread = None


def _start_checker():
    global _checker_thread
    if _checker_thread is not None and _checker_thread.is_alive():
        return

    def _check_loop():
        while True:
            time.sleep(_POLL_SECONDS)
            fire_expired()

    _checker_thread = threading.Thread(target=_check_loop, daemon=True)
    _checker_thread.start()


def schedule(spec, conversation_id, now=None):
    """Register a timer; returns its id."""
    start = time.time() if now is None else now
    timer_id = next(_ids)
    with _lock:
        _timers[timer_id] = {
            "end": start + spec.millis / 1000,
            "conversation_id": conversation_id,
            "spec": spec,
        }
    return timer_id


def pending():
    """Number of timers still waiting."""
    with _lock:
        return len(_timers)


def fire_expired(now=None):
    """Announce and drop every timer due at `now`. Returns how many fired."""
    now = time.time() if now is None else now
    expired = []
    with _lock:
        for timer_id, info in list(_timers.items()):
            if now >= info["end"]:
                expired.append(info)
                del _timers[timer_id]
    for info in expired:
        if not _announce_cb:
            continue
        try:
            _announce_cb(info["conversation_id"], f"⏰ Timer done: {_describe(info['spec'])}!")
        except Exception as e:
            print(f"  [timer] announce failed: {e}", flush=True)
    return len(expired)


# --- Command handling ---

def handle(args, message=None):
    spec = parse_duration(args)
    if spec is None:
        return _USAGE

    _start_checker()
    schedule(spec, message.conversation_id if message is not None else None)
    return f"⏳ Timer started for {_describe(spec)}."


# --- Standalone test ---

if __name__ == "__main__":
    tests = [
        "30s", "1 min", "1 min tea break", "20 hrs", "2 days report",
        "1 week", "5 months", "90 SECONDS", "banana", "10 lightyears", "",
    ]
    for t in tests:
        print(f"  {t!r:22s} => {parse_duration(t)}")
