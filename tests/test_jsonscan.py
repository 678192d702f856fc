"""Tests for scoped field extraction."""

import pytest

from appy.commands.jsonscan import (
    extract_array_of_ints, extract_array_of_numbers, extract_array_of_strings,
    extract_array_raw, extract_first_object_in_array, extract_number, extract_object,
    extract_string,
)

GEOCODE = (
    '{"results":[{"id":2950159,"name":"Berlin","latitude":52.52437,'
    '"longitude":13.41053,"elevation":74.0,"timezone":"Europe/Berlin",'
    '"postcodes":["10967","13347"]}],"generationtime_ms":0.9}'
)

FORECAST = (
    '{"latitude":52.52,"longitude":13.419998,'
    '"current_units":{"time":"iso8601","temperature_2m":"°C"},'
    '"current":{"time":"2025-11-11T10:00","temperature_2m":7.3,"weather_code":3},'
    '"hourly":{"time":["2025-11-11T00:00","2025-11-11T01:00","2025-11-11T02:00"],'
    '"temperature_2m":[6.1,5.9,null],"weather_code":[3,61,2]}}'
)


# --- Strings ---

def test_string():
    assert extract_string(GEOCODE, "name") == "Berlin"
    assert extract_string(GEOCODE, "timezone") == "Europe/Berlin"


@pytest.mark.parametrize("raw, decoded", [
    (r'"a \"quoted\" word"', 'a "quoted" word'),
    (r'"back\\slash"', "back\\slash"),
    (r'"http:\/\/x"', "http://x"),
    (r'"line\nbreak\ttab"', "line\nbreak\ttab"),
    (r'"\b\f\r"', "\b\f\r"),
    (r'"caf\u00e9"', "café"),
    (r'"bad \uZZZZ hex"', "bad ? hex"),
    (r'"odd \q escape"', "odd q escape"),
    (r'"lol \ud83d\ude02"', "lol 😂"),
    (r'"lone \ud83d here"', "lone \ufffd here"),
])
def test_string_escapes(raw, decoded):
    text = extract_string('{"joke":' + raw + "}", "joke")
    assert text == decoded
    text.encode("utf-8")


def test_string_stops_at_first_unescaped_quote():
    assert extract_string('{"a":"one","b":"two"}', "a") == "one"


def test_string_absent():
    assert extract_string(GEOCODE, "country") is None
    assert extract_string('{"joke":', "joke") is None


def test_string_takes_first_occurrence():
    assert extract_string('{"name":"first","inner":{"name":"second"}}', "name") == "first"


# --- Numbers ---

def test_number():
    assert extract_number(GEOCODE, "latitude") == 52.52437
    assert extract_number(GEOCODE, "id") == 2950159.0


def test_number_with_space_and_exponent():
    assert extract_number('{"x": -1.5e3}', "x") == -1500.0


def test_number_absent_or_unparsable():
    assert extract_number(GEOCODE, "nope") is None
    assert extract_number('{"x":null}', "x") is None
    assert extract_number('{"x":"12"}', "x") is None


# --- Objects ---

def test_object_keeps_nested_braces():
    buf = '{"current":{"a":{"b":1}},"other":2}'
    assert extract_object(buf, "current") == '{"a":{"b":1}}'


def test_object_composes_with_scalars():
    current = extract_object(FORECAST, "current")
    assert current == '{"time":"2025-11-11T10:00","temperature_2m":7.3,"weather_code":3}'
    assert extract_number(current, "temperature_2m") == 7.3


def test_object_unbalanced():
    assert extract_object('{"current":{"a":{"b":1}', "current") is None


def test_first_object_in_array():
    first = extract_first_object_in_array(GEOCODE, "results")
    assert first.startswith('{"id":2950159')
    assert first.endswith('"postcodes":["10967","13347"]}')
    assert extract_string(first, "name") == "Berlin"


def test_first_object_in_empty_array():
    assert extract_first_object_in_array('{"results":[]}', "results") is None
    assert extract_first_object_in_array('{"generationtime_ms":0.5}', "results") is None


# --- Arrays ---

def test_array_raw():
    assert extract_array_raw('{"a":[1,[2,3],4]}', "a") == "1,[2,3],4"
    assert extract_array_raw('{"a":[1,2', "a") is None


def test_array_of_strings():
    hourly = extract_object(FORECAST, "hourly")
    assert extract_array_of_strings(hourly, "time") == [
        "2025-11-11T00:00", "2025-11-11T01:00", "2025-11-11T02:00",
    ]


def test_array_of_strings_honors_escapes_and_skips_others():
    buf = r'{"a":["x, y", "say \"hi\"", 3, null, "é", "\ud83d\ude02"]}'
    assert extract_array_of_strings(buf, "a") == ["x, y", 'say "hi"', "é", "😂"]


def test_array_of_numbers_drops_nulls():
    hourly = extract_object(FORECAST, "hourly")
    assert extract_array_of_numbers(hourly, "temperature_2m") == [6.1, 5.9]


def test_array_of_ints():
    assert extract_array_of_ints(extract_object(FORECAST, "hourly"), "weather_code") == [3, 61, 2]
    assert extract_array_of_ints('{"a":[1, 2.5, -3, null]}', "a") == [1, -3]


def test_arrays_absent():
    assert extract_array_of_strings(FORECAST, "missing") is None
    assert extract_array_of_numbers(FORECAST, "missing") is None
    assert extract_array_of_ints(FORECAST, "missing") is None


def test_empty_array():
    assert extract_array_of_numbers('{"a":[]}', "a") == []
    assert extract_array_of_strings('{"a":[]}', "a") == []


def test_repeated_calls_return_the_same_value():
    results = {extract_object(FORECAST, "hourly") for _ in range(3)}
    assert len(results) == 1
    assert extract_number(FORECAST, "latitude") == extract_number(FORECAST, "latitude")
