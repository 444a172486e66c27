"""
Account enrollment: a fresh secret plus the otpauth:// URI that carries it
into an authenticator app.

The URI looks like this::

    otpauth://totp/App%3Auser%40example.com?secret=JBSWY3DPEHPK3PXP&name=App
    otpauth://hotp/App%3Auser%40example.com?secret=JBSWY3DPEHPK3PXP&name=App&counter=0

The label is the display name, optionally followed by a colon and the
account, percent-encoded as a single path segment.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qsl, unquote, urlparse

from . import qr
from .exceptions import InvalidName
from .hotp import HOTP
from .otp import DEFAULT_DIGITS, OTP, Algorithm, OTPType, check_counter
from .secret import DEFAULT_SECRET_BYTES, encode, generate, to_bytes
from .totp import DEFAULT_STEP, TOTP
from .utils import build_uri, quote_label

logger = logging.getLogger(__name__)

DEFAULT_NAME = "App"


@dataclasses.dataclass(frozen=True)
class ProvisioningURI:
    """
    Value object for an otpauth:// provisioning URI.

    ``str(uri)`` renders it. ``counter`` is always set for HOTP (0 unless
    given) and always None for TOTP.
    """

    otp_type: OTPType
    name: str
    secret: str
    account: Optional[str] = None
    counter: Optional[int] = None
    algorithm: Algorithm = Algorithm.SHA1
    digits: int = DEFAULT_DIGITS
    step: int = DEFAULT_STEP

    def __post_init__(self) -> None:
        object.__setattr__(self, "otp_type", OTPType.coerce(self.otp_type))
        object.__setattr__(self, "algorithm", Algorithm.coerce(self.algorithm))
        if not self.label:
            raise InvalidName("the provisioning label must not be empty")

        if self.otp_type is OTPType.HOTP:
            object.__setattr__(self, "counter", check_counter(0 if self.counter is None else self.counter))
        else:
            object.__setattr__(self, "counter", None)
        object.__setattr__(self, "secret", encode(to_bytes(self.secret)))
        # Rejects digits and steps an authenticator could not use.
        self.otp()

    @property
    def label(self) -> str:
        text = self.name
        if self.account:
            text += ":" + self.account
        return quote_label(text)

    def __str__(self) -> str:
        return build_uri(
            self.otp_type.value,
            self.label,
            self.secret,
            name=self.name,
            counter=self.counter,
            algorithm=self.algorithm.value,
            digits=self.digits,
            period=self.step if self.otp_type is OTPType.TOTP else None,
        )

    def otp(self) -> OTP:
        """Returns the HOTP or TOTP handler this URI provisions."""
        if self.otp_type is OTPType.HOTP:
            return HOTP(self.secret, digits=self.digits, algorithm=self.algorithm)
        return TOTP(self.secret, step=self.step, digits=self.digits, algorithm=self.algorithm)


@dataclasses.dataclass(frozen=True)
class Enrollment:
    """
    Everything a caller needs to finish enrolling an account.

    The caller persists ``secret`` and, for HOTP, ``uri.counter``.
    """

    secret: bytes
    uri: ProvisioningURI
    qr: Any = None

    @property
    def secret_base32(self) -> str:
        return self.uri.secret


def build(
    name: Optional[str] = None,
    account: Optional[str] = None,
    otp_type: Union[OTPType, str] = OTPType.TOTP,
    counter: Optional[int] = None,
    secret_length: int = DEFAULT_SECRET_BYTES,
) -> Enrollment:
    """
    Generates a new secret and the provisioning URI for it.

    :param name: display name of the application; "App" when None
    :param account: account identifier shown next to the name, e.g. an email
    :param otp_type: TOTP or HOTP
    :param counter: HOTP starting counter, 0 when None; ignored for TOTP
    :param secret_length: secret size in bytes
    :raises InvalidName: when the label would be empty
    """
    otp_type = OTPType.coerce(otp_type)
    if name is None:
        name = DEFAULT_NAME

    raw = generate(secret_length)
    uri = ProvisioningURI(
        otp_type=otp_type,
        name=name,
        account=account,
        secret=encode(raw),
        counter=counter if otp_type is OTPType.HOTP else None,
    )
    return Enrollment(secret=raw, uri=uri)


def enroll(
    name: Optional[str] = None,
    account: Optional[str] = None,
    otp_type: Union[OTPType, str] = OTPType.TOTP,
    counter: Optional[int] = None,
    secret_length: int = DEFAULT_SECRET_BYTES,
    encoder: Optional[qr.QREncoder] = qr.data_url,
) -> Enrollment:
    """
    Builds an enrollment and hands its finished URI to ``encoder``.

    The encoder's output is stored unchanged in ``Enrollment.qr``. Pass
    ``encoder=None`` to skip rendering.
    """
    enrollment = build(name, account, otp_type, counter, secret_length)
    logger.info("enrolled new %s secret", enrollment.uri.otp_type.name)
    if encoder is None:
        return enrollment
    return dataclasses.replace(enrollment, qr=encoder(str(enrollment.uri)))


def parse_uri(uri: str) -> ProvisioningURI:
    """
    Parses a provisioning URI; works for either TOTP or HOTP.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the hotp/totp URI to parse
    :returns: ProvisioningURI
    """
    otp_data: Dict[str, Any] = {}

    parsed_uri = urlparse(uri)
    if parsed_uri.scheme != "otpauth":
        raise ValueError("Not an otpauth URI")
    otp_data["otp_type"] = OTPType.coerce(parsed_uri.netloc)

    name = None
    for key, value in parse_qsl(parsed_uri.query, keep_blank_values=True):
        if key == "secret":
            otp_data["secret"] = value
        elif key in ("name", "issuer"):
            if name is not None and name != value:
                raise ValueError("If both name and issuer are specified, they should be equal.")
            name = value
        elif key == "algorithm":
            otp_data["algorithm"] = Algorithm.coerce(value)
        elif key == "digits":
            otp_data["digits"] = int(value)
        elif key == "period":
            otp_data["step"] = int(value)
        elif key == "counter":
            otp_data["counter"] = int(value)

    # Every OTP needs a secret
    if not otp_data.get("secret"):
        raise ValueError("No secret found in URI")

    # Parse name/account info. The name parameter tells where the name ends
    # when the name itself contains a colon.
    label = unquote(parsed_uri.path[1:])
    if name is not None and label.startswith(name + ":"):
        otp_data["name"], otp_data["account"] = name, label[len(name) + 1 :]
    else:
        accountinfo_parts = label.split(":", 1)
        if name is not None and name != accountinfo_parts[0]:
            raise ValueError("If the name is specified in both label and parameters, it should be equal.")
        otp_data["name"] = accountinfo_parts[0]
        if len(accountinfo_parts) == 2:
            otp_data["account"] = accountinfo_parts[1]

    return ProvisioningURI(**otp_data)
