class PdfQrError(Exception):
    """Base class for every error raised by pdfqr itself."""


class PageOutOfRangeError(PdfQrError, IndexError):
    """Raised when a page index falls outside the document."""

    def __init__(self, page: int, page_count: int):
        self.page = page
        self.page_count = page_count
        if page < 0:
            message = f"Page: {page} is negative, the first page is 0."
        else:
            message = f"Page: {page} is larger than the total number of pages: {page_count}."
        super().__init__(message)


class ImageDecodeError(PdfQrError, ValueError):
    """Raised when image bytes cannot be decoded into pixels."""


class ConfigError(PdfQrError, ValueError):
    """Raised for an invalid configuration value."""
