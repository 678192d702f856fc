"""Joke command: a programming or dad joke, online if possible.

Handles:
    "@Appy joke"

Tries JokeAPI first, then icanhazdadjoke. If both fail, falls back to a
built-in joke.
"""

import random
import urllib.request

from appy.commands.jsonscan import extract_string

NAME = "joke"

_HTTP_TIMEOUT = 8  # seconds

# (name, url, source line)
_PROVIDERS = [
    ("JokeAPI",
     "https://v2.jokeapi.dev/joke/Programming?type=single&safe-mode",
     "JokeAPI — https://v2.jokeapi.dev"),
    ("icanhazdadjoke",
     "https://icanhazdadjoke.com/",
     "icanhazdadjoke — https://icanhazdadjoke.com"),
]

_OFFLINE_JOKES = [
    "🤣 There are 10 types of people: those who understand binary and those who don’t.",
    "😅 Why do Java developers wear glasses? Because they can’t C#!",
    "🧠 Debugging: Removing the needles from the haystack.",
    "🤖 I told my computer I needed a break, and it froze!",
    "😂 I would tell you a UDP joke, but you might not get it.",
]


def _fetch(url):
    """GET url and return the body as text. Raises on network or HTTP errors."""
    req = urllib.request.Request(url, headers={
        "Accept": "application/json",
        "User-Agent": "appy-bot",
    })
    with urllib.request.urlopen(req, timeout=_HTTP_TIMEOUT) as resp:
        return resp.read().decode("utf-8")


def fetch_joke_online():
    """Returns (joke, source) from the first provider that answers, or None."""
    for name, url, source in _PROVIDERS:
        try:
            body = _fetch(url)
        except Exception as e:
            print(f"  [joke] {name} failed: {e}", flush=True)
            continue
        joke = extract_string(body, "joke")
        if joke:
            return f"😂 {joke}", source
    return None


def handle(args="", message=None):
    online = fetch_joke_online()
    if online is not None:
        joke, source = online
        return f"{joke}\n\n_Source: {source}_"
    return random.choice(_OFFLINE_JOKES)
