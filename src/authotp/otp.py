import enum
import hashlib
import hmac
from typing import Any, Callable, Union

from .exceptions import InvalidCounter
from .secret import to_bytes
from .utils import MAX_COUNTER

DEFAULT_DIGITS = 6
MAX_DIGITS = 10


class Algorithm(enum.Enum):
    """
    HMAC hash functions allowed for OTP generation.

    The value is the spelling used in otpauth URIs.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self) -> Callable[..., Any]:
        return getattr(hashlib, self.value.lower())

    @classmethod
    def coerce(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None


class OTPType(enum.Enum):
    TOTP = "totp"
    HOTP = "hotp"

    @classmethod
    def coerce(cls, value: Union["OTPType", str]) -> "OTPType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError("Not a supported OTP type: {!r}".format(value)) from None


class OTP(object):
    """
    Base class for OTP handlers.

    Instances hold their own parameters and are never mutated after
    construction, so one handler may be shared between threads.
    """

    def __init__(
        self,
        s: Union[bytes, str],
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[Algorithm, str] = Algorithm.SHA1,
    ) -> None:
        """
        :param s: secret as raw bytes or base32 text
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param algorithm: hash function used in the HMAC
        """
        if isinstance(digits, bool) or not isinstance(digits, int) or not 1 <= digits <= MAX_DIGITS:
            raise ValueError("digits must be an integer between 1 and {}".format(MAX_DIGITS))
        self.digits = digits
        self.algorithm = Algorithm.coerce(algorithm)
        self.secret = to_bytes(s)

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        # Implements RFC 4226
        check_counter(input)
        hasher = hmac.new(self.secret, self.int_to_bytestring(input), self.algorithm.digest)
        hmac_hash = bytearray(hasher.digest())
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        # Left pad with zeros by slicing from a larger number.
        str_code = str(10_000_000_000 + (code % 10**self.digits))
        return str_code[-self.digits :]

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        result = bytearray()
        while i != 0:
            result.append(i & 0xFF)
            i >>= 8
        return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def check_counter(counter: Any) -> int:
    """
    Ensures ``counter`` fits the 8-byte unsigned counter RFC 4226 specifies.

    :raises InvalidCounter: for non-integers, negatives and values over 64 bits
    """
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidCounter("counter must be an integer, not {}".format(type(counter).__name__))
    if counter < 0:
        raise InvalidCounter("counter must not be negative")
    if counter > MAX_COUNTER:
        raise InvalidCounter("counter must fit in 64 bits")
    return counter
