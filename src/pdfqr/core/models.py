import numbers
from dataclasses import dataclass
from typing import Optional, Tuple

from pdfqr.core.errors import ConfigError

Color = Tuple[int, int, int]

NAMED_COLORS = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}


@dataclass(frozen=True)
class Rect:
    """
    A region of a rasterized page, in pixels.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width of the region
        height: Height of the region
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class PageDimensions:
    """
    Target raster size for PDF pages.

    The page keeps its aspect ratio: its short side is fitted to the smaller
    dimension and its long side to the larger one, whichever is tighter.
    When ``scaling_factor`` is set it is used as-is and the dimensions are ignored.
    """
    dim_one: int = 1080
    dim_two: int = 1920
    scaling_factor: Optional[float] = None

    def __post_init__(self):
        if self.scaling_factor is not None:
            if self.scaling_factor <= 0:
                raise ConfigError(f"Scaling factor must be positive, got {self.scaling_factor}")
        elif self.dim_one <= 0 or self.dim_two <= 0:
            raise ConfigError(f"Page dimensions must be positive, got {self.dim_one}x{self.dim_two}")

    def scaling_for(self, page_width: float, page_height: float) -> float:
        """Return the zoom factor for a page of the given size in points."""
        if self.scaling_factor is not None:
            return self.scaling_factor

        small_dim = min(self.dim_one, self.dim_two)
        large_dim = max(self.dim_one, self.dim_two)
        small_page = min(page_width, page_height)
        large_page = max(page_width, page_height)
        return min(small_dim / small_page, large_dim / large_page)


def parse_color(value) -> Color:
    """
    Parse a background color.

    Accepts an (r, g, b) sequence, a name such as "white", "#RRGGBB", "#RGB"
    or "r,g,b".

    Returns:
        Color: (red, green, blue) with every channel in 0..255
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text in NAMED_COLORS:
            return NAMED_COLORS[text]
        if text.startswith("#"):
            digits = text[1:]
            if len(digits) == 3:
                digits = "".join(c * 2 for c in digits)
            if len(digits) != 6:
                raise ConfigError(f"Invalid hex color: {value!r}")
            try:
                return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
            except ValueError:
                raise ConfigError(f"Invalid hex color: {value!r}") from None
        parts = [p.strip() for p in text.split(",")]
    else:
        try:
            parts = list(value)
        except TypeError:
            raise ConfigError(f"Invalid color: {value!r}") from None

    if len(parts) != 3:
        raise ConfigError(f"A color needs exactly three channels, got {value!r}")
    if any(isinstance(p, bool) or not isinstance(p, (str, numbers.Integral)) for p in parts):
        raise ConfigError(f"Color channels must be integers, got {value!r}")
    try:
        channels = tuple(int(p) for p in parts)
    except ValueError:
        raise ConfigError(f"Invalid color: {value!r}") from None
    if any(c < 0 or c > 255 for c in channels):
        raise ConfigError(f"Color channels must be within 0..255, got {value!r}")
    return channels
