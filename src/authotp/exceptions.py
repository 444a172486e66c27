class OTPError(ValueError):
    """
    Base class for every input error raised by authotp.

    Subclasses ValueError so callers that only catch ValueError keep working.
    """


class InvalidSecret(OTPError):
    """The secret is empty or cannot be turned into key bytes."""


class InvalidEncoding(InvalidSecret):
    """The secret text is not valid base32."""


class InvalidCounter(OTPError):
    """The counter (or the time it is derived from) is negative, too large or not an integer."""


class InvalidName(OTPError):
    """The enrollment label is empty."""


class MissingToken(OTPError):
    """
    No candidate token was supplied at verification time.

    This is a caller-input problem, not a rejected token.
    """
