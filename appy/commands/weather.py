"""Weather command: current conditions and forecast via Open-Meteo.

Handles:
    "@Appy weather Berlin"
    "@Appy weather Munich"

Looks the city up with the Open-Meteo geocoder, then fetches current,
hourly and 10-day daily data. Responses are read with jsonscan lookups.
"""

import urllib.parse
import urllib.request
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from appy.commands.jsonscan import (
    extract_array_of_ints, extract_array_of_numbers, extract_array_of_strings,
    extract_first_object_in_array, extract_number, extract_object, extract_string,
)

NAME = "weather"

_HTTP_TIMEOUT = 8  # seconds
_GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/search"
_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
_FORECAST_DAYS = 10

_USAGE = "🌤️ Usage: `@Appy weather <city>`\nExample: `@Appy weather Berlin`"

# Parts of today worth a line, by local hour
_SLOTS = [("Afternoon", 12), ("Evening", 18), ("Night", 22)]

# WMO weather codes to short descriptions
_WMO_CODES = {
    0: "☀️ Clear",
    1: "🌤️ Mostly clear",
    2: "🌤️ Mostly clear",
    3: "☁️ Cloudy",
    45: "🌫️ Fog",
    48: "🌫️ Fog",
    51: "🌦️ Drizzle",
    53: "🌦️ Drizzle",
    55: "🌦️ Drizzle",
    61: "🌧️ Rain",
    63: "🌧️ Rain",
    65: "🌧️ Rain",
    66: "🌧️🌡️ Freezing rain",
    67: "🌧️🌡️ Freezing rain",
    71: "🌨️ Snow",
    73: "🌨️ Snow",
    75: "🌨️ Snow",
    77: "❄️ Snow grains",
    80: "🌦️ Showers",
    81: "🌦️ Showers",
    82: "🌦️ Showers",
    85: "🌨️ Snow showers",
    86: "🌨️ Snow showers",
    95: "⛈️ Thunderstorm",
    96: "⛈️⚠️ Thunderstorm (hail)",
    99: "⛈️⚠️ Thunderstorm (hail)",
}


@dataclass(frozen=True)
class Geo:
    lat: float
    lon: float
    name: str
    tz: str = None


def _fetch(url, params):
    """GET url?params and return the body as text. Raises on network or HTTP errors."""
    full = f"{url}?{urllib.parse.urlencode(params)}"
    req = urllib.request.Request(full, headers={"User-Agent": "appy-bot"})
    with urllib.request.urlopen(req, timeout=_HTTP_TIMEOUT) as resp:
        return resp.read().decode("utf-8")


def _describe_weather_code(code):
    return _WMO_CODES.get(code, "🌍 Weather")


def _round1(x):
    return str(round(x * 10) / 10)


def _weekday(iso_date):
    try:
        return date.fromisoformat(iso_date).strftime("%a")
    except ValueError:
        return "Day"


def _zone(tz):
    try:
        return ZoneInfo(tz or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def _at(values, i):
    return values[i] if i < len(values) else None


# --- Geocoding ---

def parse_geocode(body, query):
    """Read the first geocoder result. Returns a Geo, or None."""
    first = extract_first_object_in_array(body, "results")
    if first is None:
        return None
    lat = extract_number(first, "latitude")
    lon = extract_number(first, "longitude")
    if lat is None or lon is None:
        return None
    name = extract_string(first, "name") or query
    return Geo(lat, lon, name, extract_string(first, "timezone"))


def geocode_city(query):
    try:
        body = _fetch(_GEOCODE_URL, {"name": query, "count": 1, "language": "en", "format": "json"})
    except Exception as e:
        print(f"  [weather] geocoding {query!r} failed: {e}", flush=True)
        return None
    return parse_geocode(body, query)


def fetch_forecast(geo):
    params = {
        "latitude": geo.lat,
        "longitude": geo.lon,
        "current": "temperature_2m,apparent_temperature,precipitation,weather_code,"
                   "wind_speed_10m,wind_gusts_10m,wind_direction_10m,relative_humidity_2m",
        "hourly": "temperature_2m,precipitation_probability,precipitation,weather_code,"
                  "wind_speed_10m,relative_humidity_2m",
        "daily": "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,"
                 "precipitation_probability_max,wind_speed_10m_max,sunrise,sunset",
        "wind_speed_unit": "ms",
        "forecast_days": _FORECAST_DAYS,
        "timezone": geo.tz or "auto",
    }
    return _fetch(_FORECAST_URL, params)


# --- Report building ---

def _current_line(body):
    current = extract_object(body, "current")
    if current is None:
        return None
    temp = extract_number(current, "temperature_2m")
    if temp is None:
        return None
    feels = extract_number(current, "apparent_temperature")
    humidity = extract_number(current, "relative_humidity_2m")
    wind = extract_number(current, "wind_speed_10m")
    precip = extract_number(current, "precipitation")
    code = extract_number(current, "weather_code")

    parts = [f"Now: {_round1(temp)}°C"]
    if feels is not None:
        parts.append(f"(feels {_round1(feels)}°C)")
    if humidity is not None:
        parts.append(f"💧{int(humidity)}%")
    if wind is not None:
        parts.append(f"💨{_round1(wind)} m/s")
    if precip is not None and precip > 0:
        parts.append(f"🌧️ {_round1(precip)} mm")
    desc = f" – {_describe_weather_code(int(code))}" if code is not None else ""
    return f"• {'  '.join(parts)}{desc}"


def _later_today_lines(body, now_local):
    hourly = extract_object(body, "hourly")
    if hourly is None:
        return []
    times = extract_array_of_strings(hourly, "time") or []
    temps = extract_array_of_numbers(hourly, "temperature_2m") or []
    probs = extract_array_of_numbers(hourly, "precipitation_probability") or []
    precs = extract_array_of_numbers(hourly, "precipitation") or []
    codes = extract_array_of_ints(hourly, "weather_code") or []

    today = now_local.date().isoformat()
    lines = []
    for label, hour in _SLOTS:
        if hour <= now_local.hour:
            continue
        # e.g. "2025-11-11T18:00", local to the requested zone
        stamp = f"{today}T{hour:02d}"
        idx = next((i for i, t in enumerate(times) if t.startswith(stamp)), -1)
        if idx < 0:
            continue
        temp = _at(temps, idx)
        prob = _at(probs, idx)
        prec = _at(precs, idx)
        code = _at(codes, idx)
        parts = []
        if temp is not None:
            parts.append(f"🌡️ {_round1(temp)}°C")
        if prob is not None:
            parts.append(f"☔ {int(prob)}%")
        if prec is not None and prec > 0:
            parts.append(f"🌧️ {_round1(prec)} mm")
        desc = _describe_weather_code(code) if code is not None else ""
        lines.append(f"• {label}: {desc}  {'  '.join(parts)}")
    return lines


def _daily_lines(body):
    daily = extract_object(body, "daily")
    if daily is None:
        return []
    days = extract_array_of_strings(daily, "time") or []
    t_max = extract_array_of_numbers(daily, "temperature_2m_max") or []
    t_min = extract_array_of_numbers(daily, "temperature_2m_min") or []
    p_sum = extract_array_of_numbers(daily, "precipitation_sum") or []
    p_prob = extract_array_of_numbers(daily, "precipitation_probability_max") or []
    codes = extract_array_of_ints(daily, "weather_code") or []

    lines = []
    for i in range(max(len(days), len(t_max), len(t_min))):
        day = _at(days, i)
        if day is None:
            continue
        hi = _at(t_max, i)
        lo = _at(t_min, i)
        total = _at(p_sum, i)
        prob = _at(p_prob, i)
        code = _at(codes, i)

        parts = []
        if hi is not None and lo is not None:
            parts.append(f"🌡️ {_round1(lo)}–{_round1(hi)}°C")
        elif hi is not None:
            parts.append(f"🌡️ max {_round1(hi)}°C")
        if prob is not None:
            parts.append(f"☔ {int(prob)}%")
        if total is not None and total > 0:
            parts.append(f"🌧️ {_round1(total)} mm")
        desc = _describe_weather_code(code) if code is not None else ""
        lines.append(f"• {_weekday(day)} {day} {desc}  {'  '.join(parts)}")
    return lines


def build_report(geo, body, now=None):
    """Format the forecast body for geo. `now` (aware datetime) is for tests."""
    zone = _zone(geo.tz)
    now_local = now.astimezone(zone) if now is not None else datetime.now(zone)

    out = [f"🌤️ *Weather for {geo.name}*"]
    current = _current_line(body)
    if current:
        out.append(current)

    later = _later_today_lines(body, now_local)
    if later:
        out += ["", "🕒 *Later today*"] + later

    out += ["", f"📅 *{_FORECAST_DAYS}-day forecast*"] + _daily_lines(body)
    out += ["", "_Source: Open-Meteo — https://open-meteo.com_"]
    return "\n".join(out)


def handle(args, message=None):
    query = args.strip()
    if not query:
        return _USAGE

    geo = geocode_city(query)
    if geo is None:
        return (f"🌤️ I couldn’t fetch weather for “{query}”. Try a larger city name "
                f"(e.g., `Berlin`, `Munich`, `Hamburg`).")
    try:
        return build_report(geo, fetch_forecast(geo))
    except Exception as e:
        print(f"  [weather] forecast for {geo.name} failed: {e}", flush=True)
        return f"🌤️ Couldn’t fetch forecast for {geo.name}."
