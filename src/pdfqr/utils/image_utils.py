import logging

import cv2
import numpy as np

from pdfqr.core.errors import ImageDecodeError
from pdfqr.core.models import Color, Rect

logger = logging.getLogger(__name__)

CHANNELS = 4


def load_image(data: bytes) -> np.ndarray:
    """
    Decode an encoded image (PNG, JPEG, BMP, ...) into a BGRA pixel image.

    Args:
        data: The encoded image as bytes

    Returns:
        np.ndarray: Array of shape (height, width, 4), dtype uint8
    """
    if not data:
        raise ImageDecodeError("Image data is empty")

    nparr = np.frombuffer(data, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageDecodeError(f"Image not readable by OpenCV ({len(data)} bytes)")

    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise ImageDecodeError(f"Unsupported image sample type: {img.dtype}")

    if img.ndim == 2 or img.shape[2] == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
    if img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2BGRA)
    return img


def load_pixel_data(pixels: bytes, width: int, height: int) -> np.ndarray:
    """
    Wrap raw BGRA8 samples into a pixel image.

    The result is a writable copy, so it can be mutated without touching the
    buffer it came from.
    """
    expected = width * height * CHANNELS
    if len(pixels) != expected:
        raise ValueError(
            f"Pixel buffer holds {len(pixels)} bytes, expected {expected} for {width}x{height} BGRA"
        )
    return np.frombuffer(pixels, np.uint8).reshape((height, width, CHANNELS)).copy()


def crop(image: np.ndarray, rect: Rect) -> np.ndarray:
    """
    Cut ``rect`` out of ``image``.

    Raises:
        ValueError: if the rectangle is empty or not fully inside the image
    """
    height, width = image.shape[:2]
    if rect.width <= 0 or rect.height <= 0:
        raise ValueError(f"Crop rectangle must have a positive size, got {rect}")
    if rect.x < 0 or rect.y < 0 or rect.right > width or rect.bottom > height:
        raise ValueError(f"Crop rectangle {rect} is outside of the image bounds {width}x{height}")

    return np.ascontiguousarray(image[rect.y:rect.bottom, rect.x:rect.right])


def set_background(image: np.ndarray, color: Color) -> np.ndarray:
    """
    Composite a BGRA image onto a solid background color, in place.

    Samples are expected premultiplied by alpha, as MuPDF renders them.
    Transparent areas take the background color and the alpha channel ends
    up fully opaque.

    Args:
        image: premultiplied BGRA pixel image, modified in place
        color: Background as (red, green, blue)

    Returns:
        np.ndarray: the same array
    """
    alpha = image[:, :, 3:4].astype(np.float32) / 255.0
    bgr = image[:, :, :3].astype(np.float32)
    red, green, blue = color
    background = np.array([blue, green, red], dtype=np.float32)

    blended = bgr + background * (1.0 - alpha)
    image[:, :, :3] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
    image[:, :, 3] = 255
    return image


def to_luminance(image: np.ndarray) -> np.ndarray:
    """
    Convert a BGRA image to a single 8-bit luminance plane.

    Translucent pixels are blended toward white, so a dark code on a
    transparent image stays readable.
    """
    gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    alpha = image[:, :, 3]
    if (alpha == 255).all():
        return gray

    weight = alpha.astype(np.float32) / 255.0
    blended = gray.astype(np.float32) * weight + 255.0 * (1.0 - weight)
    return np.clip(np.rint(blended), 0, 255).astype(np.uint8)
