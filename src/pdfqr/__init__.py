"""Read QR codes from images and rendered PDF pages."""

from pdfqr.core.errors import ConfigError, ImageDecodeError, PageOutOfRangeError, PdfQrError
from pdfqr.core.models import PageDimensions, Rect
from pdfqr.info.config import ReaderSettings, load_settings
from pdfqr.core.qr_reader import (
    QrCodeReader,
    decode_qr,
    read_qr_from_image,
    read_qr_from_image_bytes,
    read_qr_from_image_file,
    read_qr_from_pdf_bytes,
    read_qr_from_pdf_bytes_at_page,
    read_qr_from_pdf_file,
    read_qr_from_pdf_file_at_page,
)
from pdfqr.utils.logger import configure_logging, setup_logging

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ImageDecodeError",
    "PageDimensions",
    "PageOutOfRangeError",
    "PdfQrError",
    "QrCodeReader",
    "ReaderSettings",
    "Rect",
    "configure_logging",
    "decode_qr",
    "load_settings",
    "read_qr_from_image",
    "read_qr_from_image_bytes",
    "read_qr_from_image_file",
    "read_qr_from_pdf_bytes",
    "read_qr_from_pdf_bytes_at_page",
    "read_qr_from_pdf_file",
    "read_qr_from_pdf_file_at_page",
    "setup_logging",
]
