import base64
import json
from io import BytesIO
from typing import Any, Dict

import qrcode
from qrcode.image.svg import SvgPathImage


def encode(payload: Dict[str, Any]) -> str:
    """Render a QR payload as an SVG data URI the web client can show directly."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=2,
    )
    qr.add_data(json.dumps(payload, separators=(",", ":")))
    qr.make(fit=True)
    img = qr.make_image(image_factory=SvgPathImage)
    stream = BytesIO()
    img.save(stream)
    svg = base64.b64encode(stream.getvalue()).decode("ascii")
    return f"data:image/svg+xml;base64,{svg}"
