from typing import Optional, Union

from . import hotp, qr, totp
from .enrollment import DEFAULT_NAME as DEFAULT_NAME
from .enrollment import Enrollment as Enrollment
from .enrollment import ProvisioningURI as ProvisioningURI
from .enrollment import build as build
from .enrollment import enroll as enroll
from .enrollment import parse_uri as parse_uri
from .exceptions import InvalidCounter as InvalidCounter
from .exceptions import InvalidEncoding as InvalidEncoding
from .exceptions import InvalidName as InvalidName
from .exceptions import InvalidSecret as InvalidSecret
from .exceptions import MissingToken as MissingToken
from .exceptions import OTPError as OTPError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import Algorithm as Algorithm
from .otp import OTPType as OTPType
from .secret import random_base32 as random_base32
from .totp import TOTP as TOTP
from .window import Window as Window
from .window import DEFAULT_WINDOW, WindowLike

# Shortcut functions. Every option is an explicit argument; nothing is read
# from shared state.


def generate_token(secret: Union[bytes, str], **kwargs) -> str:
    """
    Generates the current TOTP token.

    :param kwargs: for_time, step, digits, algorithm and clock, as for
        :func:`authotp.totp.generate`
    """
    return totp.generate(secret, **kwargs)


def verify_token(
    secret: Union[bytes, str], token: Optional[str] = None, window: WindowLike = DEFAULT_WINDOW, **kwargs
) -> Optional[bool]:
    """
    Verifies a TOTP token. The window counts 30 second steps (or ``step``
    seconds), not seconds.

    :returns: None when the token is missing, otherwise whether it is valid
    """
    return totp.verify(secret, token, window=window, **kwargs)


def generate_hotp_token(secret: Union[bytes, str], counter: int = 0, **kwargs) -> str:
    """Generates the HOTP token for ``counter``."""
    return hotp.generate(secret, counter, **kwargs)


def verify_hotp_token(
    secret: Union[bytes, str],
    token: Optional[str] = None,
    counter: int = 0,
    window: WindowLike = DEFAULT_WINDOW,
    **kwargs,
) -> Optional[bool]:
    return hotp.verify(secret, token, counter, window=window, **kwargs)


def generate_secret(
    name: Optional[str] = None,
    account: Optional[str] = None,
    otp_type: Union[OTPType, str] = OTPType.TOTP,
    counter: Optional[int] = None,
    encoder: Optional[qr.QREncoder] = qr.data_url,
) -> Enrollment:
    """
    Creates a secret with its provisioning URI and, unless ``encoder`` is
    None, a QR code data URL for authenticator apps.
    """
    return enroll(name, account, otp_type, counter, encoder=encoder)
