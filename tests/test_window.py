"""Tests for the drift window search."""

from __future__ import annotations

import pytest

from authotp.exceptions import MissingToken
from authotp.window import Window, scan


def recording_generate(calls, tokens=None):
    tokens = tokens or {}

    def generate(counter):
        calls.append(counter)
        return tokens.get(counter, "------")

    return generate


def test_coerce_int():
    assert Window.coerce(3) == Window(3, 3)
    assert Window.coerce(0) == Window(0, 0)


def test_coerce_pair_and_window():
    assert Window.coerce((1, 5)) == Window(past=1, future=5)
    assert Window.coerce([2, 0]) == Window(2, 0)
    assert Window.coerce(Window(4, 1)) == Window(4, 1)


@pytest.mark.parametrize("value", [-1, (1, -1), (1, 2, 3), "4", True, (1.5, 1), None])
def test_coerce_rejects_bad_values(value):
    with pytest.raises(ValueError):
        Window.coerce(value)


def test_scan_is_ascending():
    calls = []
    assert scan(recording_generate(calls), "123456", 10, (2, 3)) is None
    assert calls == [8, 9, 10, 11, 12, 13]


def test_scan_stops_at_first_match():
    calls = []
    generate = recording_generate(calls, {9: "123456", 11: "123456"})
    assert scan(generate, "123456", 10, (2, 2)) == -1
    assert calls == [8, 9]


def test_scan_zero_window_is_exact():
    calls = []
    generate = recording_generate(calls, {10: "123456", 11: "654321"})
    assert scan(generate, "123456", 10, 0) == 0
    assert scan(generate, "654321", 10, 0) is None
    assert calls == [10, 10]


def test_scan_skips_negative_counters():
    calls = []
    scan(recording_generate(calls), "123456", 1, (3, 1))
    assert calls == [0, 1, 2]


def test_scan_skips_counters_past_64_bits():
    calls = []
    top = 2**64 - 1
    scan(recording_generate(calls), "123456", top, (1, 2))
    assert calls == [top - 1, top]


@pytest.mark.parametrize("token", ["", None])
def test_scan_missing_token(token):
    calls = []
    with pytest.raises(MissingToken):
        scan(recording_generate(calls), token, 10)
    assert calls == []


def test_scan_compares_in_constant_time(monkeypatch):
    compared = []

    def spy(a, b):
        compared.append((a, b))
        return False

    monkeypatch.setattr("authotp.window.strings_equal", spy)
    scan(lambda counter: str(counter), "5", 5, 1)
    assert compared == [("5", "4"), ("5", "5"), ("5", "6")]
