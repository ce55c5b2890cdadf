from __future__ import annotations

from io import BytesIO

import qrcode


def render_qr_png(data: str, *, box_size: int = 8, border: int = 2) -> BytesIO:
    """Render ``data`` as a PNG QR code into an in-memory buffer."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
