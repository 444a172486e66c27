import calendar
import datetime
import math
import time
from typing import Callable, Optional, Union

from .exceptions import InvalidCounter
from .otp import DEFAULT_DIGITS, OTP, Algorithm, check_counter
from .window import DEFAULT_WINDOW, WindowLike, scan

DEFAULT_STEP = 30

TimeLike = Union[int, float, datetime.datetime]


class TOTP(OTP):
    """
    Handler for time-based OTP counters.

    The counter is the number of whole ``step`` periods since the Unix epoch.
    Verification windows are therefore counted in steps: ``window=1`` with the
    default step accepts the previous, current and next 30 second slots, not
    one second either way.
    """

    def __init__(
        self,
        s: Union[bytes, str],
        step: int = DEFAULT_STEP,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[Algorithm, str] = Algorithm.SHA1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        :param s: secret as raw bytes or base32 text
        :param step: the time step in seconds. The OTP changes every step.
        :param digits: number of integers in the OTP
        :param algorithm: hash function used in the HMAC
        :param clock: returns the current Unix time; injectable for tests
        """
        if isinstance(step, bool) or not isinstance(step, int) or step < 1:
            raise ValueError("step must be a positive number of seconds")
        self.step = step
        self.clock = clock
        super().__init__(s, digits=digits, algorithm=algorithm)

    def timestamp(self, for_time: Optional[TimeLike] = None) -> float:
        if for_time is None:
            for_time = self.clock()
        if isinstance(for_time, datetime.datetime):
            # Naive datetimes are read as UTC.
            if for_time.tzinfo:
                return calendar.timegm(for_time.utctimetuple())
            return calendar.timegm(for_time.timetuple())
        if isinstance(for_time, bool) or not isinstance(for_time, (int, float)):
            raise InvalidCounter("time must be a Unix timestamp or a datetime")
        if not math.isfinite(for_time) or for_time < 0:
            raise InvalidCounter("time must be a finite, non-negative Unix timestamp")
        return for_time

    def timecode(self, for_time: Optional[TimeLike] = None) -> int:
        """
        Accepts either a Unix timestamp or a datetime, and returns the
        counter for the step containing it.
        """
        timestamp = self.timestamp(for_time)
        if timestamp < 0:
            raise InvalidCounter("time must not be before the Unix epoch")
        return int(timestamp // self.step)

    def generate(self, for_time: Optional[TimeLike] = None) -> str:
        """
        Generates the OTP for the given time, or for the clock's time.

        :param for_time: Unix timestamp or datetime
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.generate()

    def remaining(self, for_time: Optional[TimeLike] = None) -> float:
        """Seconds until the OTP for ``for_time`` expires."""
        return self.step - self.timestamp(for_time) % self.step

    def match(
        self,
        otp: Optional[str],
        for_time: Optional[TimeLike] = None,
        window: WindowLike = DEFAULT_WINDOW,
    ) -> Optional[int]:
        """
        Finds which time step around ``for_time`` produced ``otp``.

        :returns: offset in steps from the step containing ``for_time``, or None
        :raises MissingToken: when ``otp`` is empty
        """
        return scan(self.generate_otp, otp, check_counter(self.timecode(for_time)), window)

    def verify(
        self,
        otp: Optional[str],
        for_time: Optional[TimeLike] = None,
        window: WindowLike = DEFAULT_WINDOW,
    ) -> Optional[bool]:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: time to check OTP at (defaults to the clock's time)
        :param window: time steps accepted before and after ``for_time``
        :returns: None when no OTP was given, otherwise whether it matched
        """
        if not otp:
            return None
        return self.match(otp, for_time, window) is not None


def generate(
    secret: Union[bytes, str],
    for_time: Optional[TimeLike] = None,
    step: int = DEFAULT_STEP,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = Algorithm.SHA1,
    clock: Callable[[], float] = time.time,
) -> str:
    return TOTP(secret, step=step, digits=digits, algorithm=algorithm, clock=clock).generate(for_time)


def verify(
    secret: Union[bytes, str],
    token: Optional[str],
    for_time: Optional[TimeLike] = None,
    step: int = DEFAULT_STEP,
    window: WindowLike = DEFAULT_WINDOW,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = Algorithm.SHA1,
    clock: Callable[[], float] = time.time,
) -> Optional[bool]:
    return TOTP(secret, step=step, digits=digits, algorithm=algorithm, clock=clock).verify(token, for_time, window)
