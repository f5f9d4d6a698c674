import logging
from typing import Optional

import cv2
import fitz  # PyMuPDF
import numpy as np

from pdfqr.core.errors import PageOutOfRangeError
from pdfqr.core.models import PageDimensions
from pdfqr.utils.debug_dump import dump

logger = logging.getLogger(__name__)


class PageReader:
    """
    Renders a single PDF page to BGRA8 pixels.

    Use it as a context manager; the rendered pixmap is dropped on exit.
    """

    def __init__(self, page: fitz.Page, page_index: int, scaling: float):
        self._page_index = page_index
        pix = page.get_pixmap(matrix=fitz.Matrix(scaling, scaling), alpha=True)
        self._width = pix.width
        self._height = pix.height

        rgba = np.frombuffer(pix.samples, np.uint8).reshape((pix.height, pix.width, pix.n))
        self._pixels = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA).tobytes()

        logger.debug(f"Rendered page {page_index} at {self._width}x{self._height} (scaling {scaling:.4f})")

    def get_image(self) -> bytes:
        """Raw pixels, 4 bytes per pixel in blue-green-red-alpha order."""
        if self._pixels is None:
            raise RuntimeError(f"Page reader for page {self._page_index} is closed")
        return self._pixels

    def get_page_width(self) -> int:
        return self._width

    def get_page_height(self) -> int:
        return self._height

    def close(self) -> None:
        self._pixels = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class DocumentReader:
    """
    Owns an opened PDF for as long as it is being processed.

    Args:
        pdf_bytes: The PDF file content as bytes
        dimensions: Target raster size used for every page

    Raises:
        fitz.FileDataError / fitz.EmptyFileError: if the bytes are not a readable PDF
    """

    def __init__(self, pdf_bytes: bytes, dimensions: Optional[PageDimensions] = None):
        self._dimensions = dimensions or PageDimensions()
        logger.debug(f"Opening PDF of {len(pdf_bytes)} bytes, header {dump(pdf_bytes[:8])}")
        self._document = fitz.open(stream=pdf_bytes, filetype="pdf")

    def page_count(self) -> int:
        return self._document.page_count

    def page_reader(self, page_index: int) -> PageReader:
        """
        Render the page at ``page_index`` (first page is 0).

        Raises:
            PageOutOfRangeError: if the index is outside the document
        """
        count = self.page_count()
        if page_index < 0 or page_index >= count:
            raise PageOutOfRangeError(page_index, count)

        page = self._document.load_page(page_index)
        scaling = self._dimensions.scaling_for(page.rect.width, page.rect.height)
        return PageReader(page, page_index, scaling)

    def close(self) -> None:
        if self._document is not None:
            self._document.close()
            self._document = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def open_document(pdf_bytes: bytes, dimensions: Optional[PageDimensions] = None) -> DocumentReader:
    """Open PDF bytes for rasterization; use the result in a ``with`` block."""
    return DocumentReader(pdf_bytes, dimensions)
