"""
Drift-tolerant token search shared by the HOTP and TOTP engines.

A window ``(past, future)`` accepts tokens generated for any counter from
``expected - past`` up to ``expected + future``. For TOTP the counter is a
time step, so the window is measured in steps and never in seconds.
"""

import logging
from typing import Callable, NamedTuple, Optional, Sequence, Union

from .exceptions import MissingToken
from .utils import MAX_COUNTER, strings_equal

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 4


class Window(NamedTuple):
    past: int
    future: int

    @classmethod
    def coerce(cls, value: Union["Window", int, Sequence[int]]) -> "Window":
        """
        Builds a window from an int (same value both ways), a pair, or a Window.
        """
        if isinstance(value, bool):
            raise ValueError("window must be an int or a (past, future) pair")
        if isinstance(value, int):
            past = future = value
        else:
            try:
                past, future = value
            except (TypeError, ValueError) as e:
                raise ValueError("window must be an int or a (past, future) pair") from e
        for bound in (past, future):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise ValueError("window bounds must be integers")
            if bound < 0:
                raise ValueError("window bounds must not be negative")
        return cls(past, future)


WindowLike = Union[Window, int, Sequence[int]]


def scan(
    generate: Callable[[int], str],
    token: Optional[str],
    expected: int,
    window: WindowLike = DEFAULT_WINDOW,
) -> Optional[int]:
    """
    Searches the window around ``expected`` for a counter producing ``token``.

    Counters are tried in ascending order and every comparison is constant
    time. Counters outside the 64-bit unsigned range are skipped rather than
    wrapped.

    :param generate: maps a counter to its token
    :param token: the candidate token
    :param expected: the counter the caller expects the token to be for
    :param window: drift tolerance, see :class:`Window`
    :returns: offset of the first matching counter from ``expected``, or None
    :raises MissingToken: when ``token`` is None or empty
    """
    if not token:
        raise MissingToken("no token to verify")
    window = Window.coerce(window)

    candidate = str(token)
    for counter in range(expected - window.past, expected + window.future + 1):
        if counter < 0 or counter > MAX_COUNTER:
            continue
        if strings_equal(candidate, generate(counter)):
            logger.debug("token matched at offset %d", counter - expected)
            return counter - expected

    logger.debug("token rejected within window (-%d, +%d)", window.past, window.future)
    return None
