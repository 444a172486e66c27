"""Tests for HOTP generation and verification (RFC 4226)."""

from __future__ import annotations

import pytest

from authotp import hotp
from authotp.exceptions import InvalidCounter, InvalidSecret, MissingToken
from authotp.hotp import HOTP
from authotp.otp import Algorithm

RFC_SECRET = b"12345678901234567890"
RFC_SECRET_BASE32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

# RFC 4226, Appendix D
RFC_TOKENS = [
    "755224",
    "287082",
    "359152",
    "969429",
    "338314",
    "254676",
    "287922",
    "162583",
    "399871",
    "520489",
]

SECRET = "JBSWY3DPEHPK3PXP"


@pytest.mark.parametrize("counter,expected", list(enumerate(RFC_TOKENS)))
def test_rfc4226_vectors(counter, expected):
    assert HOTP(RFC_SECRET).at(counter) == expected
    assert hotp.generate(RFC_SECRET_BASE32, counter) == expected


def test_known_base32_secret():
    otp = HOTP(SECRET)
    assert otp.at(0) == "282760"
    assert otp.at(1) == "996554"


def test_generate_is_deterministic():
    assert hotp.generate(SECRET, 42) == hotp.generate(SECRET, 42)
    assert HOTP(SECRET).generate(42) == HOTP(SECRET).at(42)


def test_token_is_zero_padded():
    for counter in range(200):
        token = hotp.generate(RFC_SECRET, counter, digits=8)
        assert len(token) == 8
        assert token.isdigit()


def test_digits_and_algorithm_change_token():
    assert hotp.generate(RFC_SECRET, 0, digits=8).endswith("755224")
    assert hotp.generate(RFC_SECRET, 0, algorithm=Algorithm.SHA256) != "755224"
    assert hotp.generate(RFC_SECRET, 0, algorithm="sha512") == hotp.generate(RFC_SECRET, 0, algorithm=Algorithm.SHA512)


@pytest.mark.parametrize("digits", [0, 11, -1, 6.0, True])
def test_rejects_bad_digits(digits):
    with pytest.raises(ValueError):
        HOTP(SECRET, digits=digits)


def test_rejects_unknown_algorithm():
    with pytest.raises(ValueError, match="algorithm"):
        HOTP(SECRET, algorithm="MD5")


@pytest.mark.parametrize("value", [b"", ""])
def test_empty_secret(value):
    with pytest.raises(InvalidSecret):
        hotp.generate(value, 0)


@pytest.mark.parametrize("counter", [-1, 2**64, 1.5, "1", None, True])
def test_invalid_counter(counter):
    with pytest.raises(InvalidCounter):
        HOTP(SECRET).at(counter)


def test_largest_counter():
    assert len(HOTP(SECRET).at(2**64 - 1)) == 6


def test_verify_exact_counter():
    token = hotp.generate(SECRET, 0)
    assert hotp.verify(SECRET, token, 0, window=0) is True
    assert hotp.verify(SECRET, token, 1, window=(0, 0)) is False


def test_verify_wrong_token():
    assert HOTP(SECRET).verify("000000", 0, window=0) is False


def test_verify_accepts_normalized_digits():
    assert HOTP(SECRET).verify("２８２７６０", 0, window=0) is True


@pytest.mark.parametrize("token", ["", None])
def test_verify_missing_token(token):
    assert HOTP(SECRET).verify(token, 0) is None
    assert hotp.verify(SECRET, token, 0) is None


def test_match_missing_token_raises():
    with pytest.raises(MissingToken):
        HOTP(SECRET).match("", 0)


def test_verify_rejects_negative_expected_counter():
    with pytest.raises(InvalidCounter):
        HOTP(SECRET).verify("282760", -1)


@pytest.mark.parametrize("past", [0, 1, 3])
def test_window_past(past):
    otp = HOTP(RFC_SECRET)
    expected = 10
    for k in range(past + 1):
        assert otp.verify(otp.at(expected - k), expected, window=(past, 0)) is True
    assert otp.verify(otp.at(expected - past - 1), expected, window=(past, 0)) is False


@pytest.mark.parametrize("future", [0, 1, 3])
def test_window_future(future):
    otp = HOTP(RFC_SECRET)
    expected = 10
    for k in range(future + 1):
        assert otp.verify(otp.at(expected + k), expected, window=(0, future)) is True
    assert otp.verify(otp.at(expected + future + 1), expected, window=(0, future)) is False


def test_default_window_is_four_each_way():
    otp = HOTP(RFC_SECRET)
    assert otp.verify(RFC_TOKENS[0], 4) is True
    assert otp.verify(RFC_TOKENS[8], 4) is True
    assert otp.verify(RFC_TOKENS[9], 4) is False


def test_match_reports_offset():
    otp = HOTP(RFC_SECRET)
    assert otp.match(RFC_TOKENS[7], 5, window=(0, 3)) == 2
    assert otp.match(RFC_TOKENS[3], 5, window=(2, 0)) == -2
    assert otp.match(RFC_TOKENS[5], 5, window=0) == 0
    assert otp.match(RFC_TOKENS[9], 5, window=(0, 3)) is None


def test_window_near_zero_does_not_wrap():
    otp = HOTP(RFC_SECRET)
    assert otp.match(RFC_TOKENS[0], 1, window=(5, 0)) == -1
    assert otp.verify(otp.at(2**64 - 1), 0, window=(1, 0)) is False
