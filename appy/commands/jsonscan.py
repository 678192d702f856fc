"""Scoped field extraction from JSON-ish API responses.

Pulls a handful of named values out of a response body without building a
parse tree. Each call finds the first occurrence of "field", then scans
forward from the following colon for the kind of value asked for.

Callers compose lookups themselves:

    >>> body = '{"current":{"temperature_2m":21.4,"weather_code":3}}'
    >>> current = extract_object(body, "current")
    >>> extract_number(current, "temperature_2m")
    21.4

Every function returns None when the field is missing or its value can't be
read. Nothing here validates the document; the input is never modified.
"""

import re

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_NUMBER_CHARS = "-+.0123456789eE"
_INT_RE = re.compile(r"[-+]?\d+")


def _value_start(buf, field):
    """Index just past the colon that follows "field", or -1."""
    key = f'"{field}"'
    i = buf.find(key)
    if i == -1:
        return -1
    colon = buf.find(":", i + len(key))
    if colon == -1:
        return -1
    return colon + 1


def _read_quoted(s, i):
    """Decode a string whose opening quote is at s[i-1].

    Returns (text, index of the closing quote, or len(s) if unterminated).
    """
    out = []
    escaped = False
    n = len(s)
    while i < n:
        ch = s[i]
        if escaped:
            if ch == "u":
                if i + 4 < n:
                    try:
                        code = int(s[i + 1:i + 5], 16)
                    except ValueError:
                        code = ord("?")
                    i += 4
                    # join a UTF-16 surrogate pair into one character
                    if 0xD800 <= code <= 0xDBFF and s[i + 1:i + 3] == "\\u":
                        try:
                            low = int(s[i + 3:i + 7], 16)
                        except ValueError:
                            low = None
                        if low is not None and 0xDC00 <= low <= 0xDFFF:
                            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                            i += 6
                    if 0xD800 <= code <= 0xDFFF:
                        code = 0xFFFD
                    out.append(chr(code))
            else:
                out.append(_ESCAPES.get(ch, ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            break
        else:
            out.append(ch)
        i += 1
    return "".join(out), i


def _balanced(s, start, open_ch, close_ch):
    """Index of the bracket closing the one at s[start], or -1 if unbalanced."""
    depth = 0
    for j in range(start, len(s)):
        ch = s[j]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return j
    return -1


# --- Scalars ---

def extract_string(buf, field):
    """Decoded string value of field, or None."""
    start = _value_start(buf, field)
    if start == -1:
        return None
    quote = buf.find('"', start)
    if quote == -1:
        return None
    text, _ = _read_quoted(buf, quote + 1)
    return text


def extract_number(buf, field):
    """Numeric value of field as a float, or None."""
    start = _value_start(buf, field)
    if start == -1:
        return None
    i = start
    n = len(buf)
    while i < n and buf[i].isspace():
        i += 1
    j = i
    while j < n and buf[j] in _NUMBER_CHARS:
        j += 1
    try:
        return float(buf[i:j])
    except ValueError:
        return None


# --- Objects ---

def extract_object(buf, field):
    """Raw '{...}' slice for field, braces included, or None."""
    start = _value_start(buf, field)
    if start == -1:
        return None
    brace = buf.find("{", start)
    if brace == -1:
        return None
    end = _balanced(buf, brace, "{", "}")
    if end == -1:
        return None
    return buf[brace:end + 1]


def extract_first_object_in_array(buf, field):
    """Raw slice of the first object inside the array field, or None if empty."""
    start = _value_start(buf, field)
    if start == -1:
        return None
    bracket = buf.find("[", start)
    if bracket == -1:
        return None
    for j in range(bracket + 1, len(buf)):
        ch = buf[j]
        if ch == "{":
            end = _balanced(buf, j, "{", "}")
            return buf[j:end + 1] if end != -1 else None
        if ch == "]":
            return None
    return None


# --- Arrays ---

def extract_array_raw(buf, field):
    """Interior of the array field (brackets stripped), or None."""
    start = _value_start(buf, field)
    if start == -1:
        return None
    bracket = buf.find("[", start)
    if bracket == -1:
        return None
    end = _balanced(buf, bracket, "[", "]")
    if end == -1:
        return None
    return buf[bracket + 1:end]


def extract_array_of_strings(buf, field):
    """List of decoded strings in the array field; non-strings are skipped."""
    raw = extract_array_raw(buf, field)
    if raw is None:
        return None
    out = []
    i = 0
    n = len(raw)
    while i < n:
        while i < n and raw[i].isspace():
            i += 1
        if i >= n:
            break
        if raw[i] == '"':
            text, i = _read_quoted(raw, i + 1)
            out.append(text)
            i += 1
            while i < n and (raw[i].isspace() or raw[i] == ","):
                i += 1
        else:
            while i < n and raw[i] != ",":
                i += 1
            i += 1
    return out


def extract_array_of_numbers(buf, field):
    """List of floats in the array field; unparsable entries (null) are dropped."""
    raw = extract_array_raw(buf, field)
    if raw is None:
        return None
    out = []
    for part in raw.split(","):
        try:
            out.append(float(part.strip()))
        except ValueError:
            continue
    return out


def extract_array_of_ints(buf, field):
    """List of ints in the array field; non-integer entries are dropped."""
    raw = extract_array_raw(buf, field)
    if raw is None:
        return None
    return [int(part.strip()) for part in raw.split(",") if _INT_RE.fullmatch(part.strip())]


# --- Standalone tests ---

if __name__ == "__main__":
    body = (
        '{"latitude":52.52,"current":{"temperature_2m":-3.5,"nested":{"a":1}},'
        '"hourly":{"time":["2025-11-11T00:00","2025-11-11T01:00"],'
        '"weather_code":[3,61,null]},'
        '"results":[{"name":"Berlin","timezone":"Europe/Berlin"}],'
        '"joke":"Tab\\tand \\"quote\\" \\u00e9"}'
    )
    print("latitude     ", extract_number(body, "latitude"))
    print("current      ", extract_object(body, "current"))
    print("results[0]   ", extract_first_object_in_array(body, "results"))
    print("hourly.time  ", extract_array_of_strings(extract_object(body, "hourly"), "time"))
    print("weather_code ", extract_array_of_ints(body, "weather_code"))
    print("joke         ", extract_string(body, "joke"))
    print("missing      ", extract_string(body, "missing"))
