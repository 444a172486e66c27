"""
Secret generation and the base32 text form of secrets.

Secrets are raw bytes inside the library. Their canonical external form is
RFC 4648 base32, uppercase and without "=" padding, which is what the
otpauth scheme and authenticator apps expect.
"""

import base64
import binascii
import re
import secrets
from typing import Union

from .exceptions import InvalidEncoding, InvalidSecret

DEFAULT_SECRET_BYTES = 20

_BASE32 = re.compile(r"^[A-Z2-7]*$")


def generate(byte_length: int = DEFAULT_SECRET_BYTES) -> bytes:
    """
    Draws a new secret from the operating system's CSPRNG.

    :param byte_length: number of random bytes, 20 (160 bits) by default
    :returns: secret bytes
    """
    if byte_length < 1:
        raise ValueError("byte_length must be a positive integer")
    return secrets.token_bytes(byte_length)


def encode(secret: bytes) -> str:
    """Base32-encodes a secret, uppercase and without padding."""
    if not secret:
        raise InvalidSecret("secret must not be empty")
    return base64.b32encode(secret).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Decodes base32 secret text back into bytes.

    Lower case, spaces and trailing padding are accepted since authenticator
    apps commonly display secrets that way.
    """
    secret = text.replace(" ", "").upper().rstrip("=")
    if not secret:
        raise InvalidSecret("secret must not be empty")
    if not _BASE32.match(secret):
        raise InvalidEncoding("secret contains characters outside the base32 alphabet")

    # The otpauth scheme DOES NOT use base32 padding for secret lengths not
    # divisible by 8, but b32decode insists on it.
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret)
    except binascii.Error as e:
        raise InvalidEncoding("secret is not valid base32: {}".format(e)) from e


def random_base32(byte_length: int = DEFAULT_SECRET_BYTES) -> str:
    """Generates a secret and returns its base32 text form."""
    return encode(generate(byte_length))


def to_bytes(secret: Union[bytes, str]) -> bytes:
    """
    Normalizes a secret given either as raw bytes or as base32 text.

    :raises InvalidSecret: when the secret is empty or of the wrong type
    :raises InvalidEncoding: when text is not base32
    """
    if isinstance(secret, str):
        return decode(secret)
    if isinstance(secret, (bytes, bytearray, memoryview)):
        if not secret:
            raise InvalidSecret("secret must not be empty")
        return bytes(secret)
    raise InvalidSecret("secret must be bytes or base32 text, not {}".format(type(secret).__name__))
