import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

# Largest value an 8-byte unsigned counter can hold.
MAX_COUNTER = 2**64 - 1

# Characters JavaScript's encodeURIComponent leaves alone, on top of the
# alphanumerics and "_.-~" that quote() never escapes.
_LABEL_SAFE = "!*'()"


def quote_label(text: str) -> str:
    """
    Percent-encodes one provisioning URI label component.

    Every reserved character is escaped, including ":" and "@", so that
    ``quote_label("App:user@example.com") == "App%3Auser%40example.com"``.
    """
    return quote(text, safe=_LABEL_SAFE)


def build_uri(
    otp_type: str,
    label: str,
    secret: str,
    name: str,
    counter: Optional[int] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for an OTP; works for either TOTP or HOTP.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param otp_type: "totp" or "hotp"
    :param label: already percent-encoded path label
    :param secret: the base32 secret
    :param name: display name, encoded here as a query value
    :param counter: HOTP counter; omitted from the URI when None
    :param algorithm: the algorithm used in the OTP generation.
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :returns: provisioning uri
    """
    # Handling values different from defaults
    is_algorithm_set = algorithm is not None and algorithm.upper() != "SHA1"
    is_digits_set = digits is not None and digits != 6
    is_period_set = period is not None and period != 30

    url_args: Dict[str, Union[int, str]] = {"secret": secret, "name": name}

    # counter may be 0 as a valid param
    if counter is not None:
        url_args["counter"] = counter
    if is_algorithm_set:
        url_args["algorithm"] = algorithm.upper()  # type: ignore
    if is_digits_set:
        url_args["digits"] = digits
    if is_period_set:
        url_args["period"] = period

    return "otpauth://{0}/{1}?{2}".format(otp_type, label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
