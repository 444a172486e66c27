"""Renders provisioning URIs as scannable QR codes."""

import base64
import io
from typing import Any, Callable

import qrcode

# Accepts the finished provisioning URI and returns an opaque image payload.
QREncoder = Callable[[str], Any]


def png_bytes(text: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=4,
    )
    qr.add_data(text)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    return buffered.getvalue()


def data_url(text: str) -> str:
    """
    Encodes ``text`` as a QR code PNG wrapped in a data URL, ready for an
    ``<img src=...>`` attribute.
    """
    return "data:image/png;base64," + base64.b64encode(png_bytes(text)).decode("ascii")
