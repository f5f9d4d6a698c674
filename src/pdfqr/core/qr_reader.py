import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from pyzbar.pyzbar import ZBarSymbol, decode

from pdfqr.core.errors import PageOutOfRangeError
from pdfqr.core.models import Color, PageDimensions, Rect, parse_color
from pdfqr.core.pdf_reader import PageReader, open_document
from pdfqr.info.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    ReaderSettings,
    load_settings,
)
from pdfqr.utils.image_utils import crop, load_image, load_pixel_data, set_background, to_luminance
from pdfqr.utils.logger import configure_logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def decode_qr(image: np.ndarray) -> Optional[str]:
    """
    Run a single QR decode pass over a pixel image.

    Args:
        image: BGRA pixel image

    Returns:
        The decoded QR code content, or None if not found.
    """
    luminance = to_luminance(image)
    decoded_objects = decode(luminance, symbols=[ZBarSymbol.QRCODE])
    for obj in decoded_objects:
        return obj.data.decode("utf-8", errors="replace")
    return None


def read_qr_from_image(image: np.ndarray) -> str:
    """From a pixel image, retrieve the data in the QR code, "" when there is none."""
    return decode_qr(image) or ""


def read_qr_from_image_bytes(data: bytes) -> str:
    """
    Decode an encoded image and scan it for a QR code.

    The image is decoded as-is, without background normalization.

    Args:
        data: The image file content as bytes

    Returns:
        str: The data from the QR code, "" if not found
    """
    return read_qr_from_image(load_image(data))


def read_qr_from_image_file(path: PathLike) -> str:
    """Read an image file from ``path`` and scan it for a QR code."""
    return read_qr_from_image_bytes(Path(path).read_bytes())


class QrCodeReader:
    """
    Extracts QR code data from PDF documents and images.

    Attributes:
        page_dimensions: Raster size used when rendering PDF pages
        background_color: Solid (r, g, b) color forced behind every rendered page

    Both attributes are read at call time. Mutating them while another thread
    uses the same reader is not supported.
    """

    def __init__(
        self,
        page_dimensions: Optional[PageDimensions] = None,
        background_color: Color = DEFAULT_BACKGROUND_COLOR,
    ):
        self.page_dimensions = page_dimensions or PageDimensions(DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT)
        self.background_color = parse_color(background_color)

    @classmethod
    def from_settings(cls, settings: ReaderSettings) -> "QrCodeReader":
        return cls(settings.page_dimensions, settings.background_color)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "QrCodeReader":
        """
        Build a reader from PDFQR_* environment variables (and a .env file).

        The log file and level from the same settings are applied to the
        ``pdfqr`` logger.
        """
        settings = load_settings(env_file)
        configure_logging(settings)
        return cls.from_settings(settings)

    # Images

    read_qr_from_image = staticmethod(read_qr_from_image)
    read_qr_from_image_bytes = staticmethod(read_qr_from_image_bytes)
    read_qr_from_image_file = staticmethod(read_qr_from_image_file)

    # PDFs

    def read_qr_from_pdf_file(self, path: PathLike, region: Optional[Rect] = None) -> str:
        """
        Reads a QR code from a PDF file, scanning every page.

        Args:
            path: Path to the PDF
            region: Optional area, in rendered page pixels, to look for the QR code

        Returns:
            str: The data from the first QR code found, "" if no page has one
        """
        return self.read_qr_from_pdf_bytes(Path(path).read_bytes(), region)

    def read_qr_from_pdf_bytes(self, pdf_bytes: bytes, region: Optional[Rect] = None) -> str:
        """
        Reads a QR code from PDF bytes, scanning pages in order.

        The first page yielding a non-blank result wins; later pages are not rendered.

        Args:
            pdf_bytes: The PDF file content as bytes
            region: Optional area, in rendered page pixels, to look for the QR code

        Returns:
            str: The data from the first QR code found, "" if no page has one
        """
        with open_document(pdf_bytes, self.page_dimensions) as doc_reader:
            count = doc_reader.page_count()
            logger.info(f"Searching for QR code in {count} pages")

            for page_num in range(count):
                with doc_reader.page_reader(page_num) as page_reader:
                    result = self._read_qr_from_page(page_reader, region)

                if result.strip():
                    logger.info(f"QR code found on page {page_num + 1}")
                    return result
                logger.debug(f"No QR code on page {page_num + 1}")

        logger.warning("No QR code found in any page")
        return ""

    def read_qr_from_pdf_file_at_page(self, path: PathLike, page: int, region: Optional[Rect] = None) -> str:
        """
        Reads a QR code from a specific page of a PDF file.

        Args:
            path: Path to the PDF
            page: Page number (first page is 0)
            region: Optional area, in rendered page pixels, to look for the QR code
        """
        return self.read_qr_from_pdf_bytes_at_page(Path(path).read_bytes(), page, region)

    def read_qr_from_pdf_bytes_at_page(self, pdf_bytes: bytes, page: int, region: Optional[Rect] = None) -> str:
        """
        Reads a QR code from a specific page of a PDF given as bytes.

        Args:
            pdf_bytes: The PDF file content as bytes
            page: Page number (first page is 0)
            region: Optional area, in rendered page pixels, to look for the QR code

        Returns:
            str: The data from the QR code, "" if not found

        Raises:
            PageOutOfRangeError: if the document has no such page
        """
        with open_document(pdf_bytes, self.page_dimensions) as doc_reader:
            try:
                page_reader = doc_reader.page_reader(page)
            except PageOutOfRangeError as e:
                logger.error(str(e))
                raise

            with page_reader:
                return self._read_qr_from_page(page_reader, region)

    def _read_qr_from_page(self, page_reader: PageReader, region: Optional[Rect] = None) -> str:
        img = load_pixel_data(
            page_reader.get_image(),
            page_reader.get_page_width(),
            page_reader.get_page_height(),
        )

        if region is not None:
            if not isinstance(region, Rect):
                region = Rect(*region)
            img = crop(img, region)

        # transparent page backgrounds decode as black otherwise
        set_background(img, self.background_color)

        return read_qr_from_image(img)


_default_reader = QrCodeReader()


def read_qr_from_pdf_file(path: PathLike, region: Optional[Rect] = None) -> str:
    return _default_reader.read_qr_from_pdf_file(path, region)


def read_qr_from_pdf_bytes(pdf_bytes: bytes, region: Optional[Rect] = None) -> str:
    return _default_reader.read_qr_from_pdf_bytes(pdf_bytes, region)


def read_qr_from_pdf_file_at_page(path: PathLike, page: int, region: Optional[Rect] = None) -> str:
    return _default_reader.read_qr_from_pdf_file_at_page(path, page, region)


def read_qr_from_pdf_bytes_at_page(pdf_bytes: bytes, page: int, region: Optional[Rect] = None) -> str:
    return _default_reader.read_qr_from_pdf_bytes_at_page(pdf_bytes, page, region)
