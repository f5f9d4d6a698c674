import io
import sys
from pathlib import Path

import fitz
import pytest
import qrcode
from PIL import Image

# Adds the src directory to PYTHONPATH
src_path = str(Path(__file__).parent.parent / "src")
sys.path.insert(0, src_path)

# US Letter, in points
PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def make_qr_png(text: str, box_size: int = 10, border: int = 4) -> bytes:
    """Render ``text`` as a QR code PNG."""
    qr = qrcode.QRCode(box_size=box_size, border=border)
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_transparent_qr_png(text: str) -> bytes:
    """QR code PNG whose light modules are fully transparent black pixels."""
    img = Image.open(io.BytesIO(make_qr_png(text))).convert("RGBA")
    pixels = [(0, 0, 0, 0) if r > 128 else (0, 0, 0, 255) for r, _, _, _ in img.getdata()]
    img.putdata(pixels)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_jpeg(text: str) -> bytes:
    img = Image.open(io.BytesIO(make_qr_png(text))).convert("RGB")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


def make_pdf(pages, qr_rect=(300, 100, 500, 300)) -> bytes:
    """
    Build a PDF with one page per entry of ``pages``.

    Each entry is the QR payload to place on that page, or None for a page
    holding only some text.
    """
    doc = fitz.open()
    for index, payload in enumerate(pages):
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        page.insert_text((72, 72), f"Page {index + 1}")
        if payload is not None:
            page.insert_image(fitz.Rect(*qr_rect), stream=make_qr_png(payload))
    data = doc.tobytes()
    doc.close()
    return data


def make_vector_qr_pdf(text: str, origin=(150, 150), module: float = 8) -> bytes:
    """
    Build a one-page PDF where the QR code is drawn as filled black squares
    only, leaving the light modules transparent once rendered.
    """
    qr = qrcode.QRCode(border=4)
    qr.add_data(text)
    qr.make(fit=True)
    matrix = qr.get_matrix()

    doc = fitz.open()
    page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
    x0, y0 = origin
    for row, cells in enumerate(matrix):
        for col, dark in enumerate(cells):
            if dark:
                rect = fitz.Rect(x0 + col * module, y0 + row * module,
                                 x0 + (col + 1) * module, y0 + (row + 1) * module)
                page.draw_rect(rect, color=None, fill=(0, 0, 0), width=0)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def qr_png():
    return make_qr_png


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def vector_pdf_factory():
    return make_vector_qr_pdf
