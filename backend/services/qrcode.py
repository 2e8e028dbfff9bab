import qrcode
from io import BytesIO

from core.exceptions import ValidationException


class QRCodeService:
    """Renders check-in URLs as PNG QR codes."""

    @staticmethod
    def render_png(data: str, box_size: int = 10, border: int = 2) -> bytes:
        """
        Generate a QR code for ``data`` and return the PNG bytes.

        Args:
            data: Text to encode, usually the public check-in URL
            box_size: Pixel size of each module
            border: Quiet-zone width in modules

        Returns:
            PNG image bytes
        """
        if not data or not data.strip():
            raise ValidationException(message="QR code data cannot be empty")

        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buffer = BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
