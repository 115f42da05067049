from typing import Optional
import os

import qrcode
from qrcode import constants
from PIL import Image

from airways.config import settings
from airways.exceptions import DownstreamError
from airways.logger_config import logger

class QRCodeService:
    """Renders booking payloads as QR code images on local storage"""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        url_prefix: Optional[str] = None,
        image_size: int = 300
    ):
        self.qr_code_dir = output_dir or settings.QR_CODE_DIR
        self.url_prefix = (url_prefix or settings.QR_CODE_URL_PREFIX).rstrip("/")
        self.image_size = image_size

    def generate_qr_code(self, data: str, booking_id: str) -> str:
        """Render ``data`` to ``booking_<id>.png`` and return its public path"""

        qr = qrcode.QRCode(
            version=1,
            error_correction=constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(data)
        qr.make(fit=True)

        qr_image = qr.make_image(fill_color="black", back_color="white")
        qr_image = qr_image.resize((self.image_size, self.image_size), Image.LANCZOS)

        filename = f"booking_{booking_id}.png"
        file_path = os.path.join(self.qr_code_dir, filename)
        try:
            os.makedirs(self.qr_code_dir, exist_ok=True)
            qr_image.save(file_path)
        except OSError as e:
            raise DownstreamError(f"Could not store QR code for booking {booking_id}: {e}") from e

        logger.debug(f"Wrote QR code {file_path}")
        return f"{self.url_prefix}/{filename}"
