from typing import Optional, Union

from .otp import DEFAULT_DIGITS, OTP, Algorithm, check_counter
from .window import DEFAULT_WINDOW, WindowLike, scan


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.

    The counter is owned by the caller, who must persist it and move it past
    every successfully verified counter so a token cannot be replayed.
    """

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(count)

    generate = at

    def match(self, otp: Optional[str], counter: int, window: WindowLike = DEFAULT_WINDOW) -> Optional[int]:
        """
        Finds which counter around ``counter`` produced ``otp``.

        :param otp: the OTP to check against
        :param counter: the counter the caller expects
        :param window: counters accepted before and after ``counter``
        :returns: offset of the matching counter from ``counter``, or None
        :raises MissingToken: when ``otp`` is empty
        """
        return scan(self.at, otp, check_counter(counter), window)

    def verify(self, otp: Optional[str], counter: int, window: WindowLike = DEFAULT_WINDOW) -> Optional[bool]:
        """
        Verifies the OTP passed in against the counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        :param window: counters accepted before and after ``counter``
        :returns: None when no OTP was given, otherwise whether it matched
        """
        if not otp:
            return None
        return self.match(otp, counter, window) is not None


def generate(
    secret: Union[bytes, str],
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = Algorithm.SHA1,
) -> str:
    return HOTP(secret, digits=digits, algorithm=algorithm).at(counter)


def verify(
    secret: Union[bytes, str],
    token: Optional[str],
    counter: int,
    window: WindowLike = DEFAULT_WINDOW,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = Algorithm.SHA1,
) -> Optional[bool]:
    return HOTP(secret, digits=digits, algorithm=algorithm).verify(token, counter, window)
