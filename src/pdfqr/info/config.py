import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from pdfqr.core.errors import ConfigError
from pdfqr.core.models import Color, PageDimensions, parse_color

# Raster defaults for PDF pages
DEFAULT_PAGE_WIDTH = 1080
DEFAULT_PAGE_HEIGHT = 1920

# Forced behind every rendered page, helps with transparent PDF backgrounds
DEFAULT_BACKGROUND_COLOR: Color = (255, 255, 255)

DEFAULT_LOG_LEVEL = "INFO"


@dataclass
class ReaderSettings:
    page_width: int = DEFAULT_PAGE_WIDTH
    page_height: int = DEFAULT_PAGE_HEIGHT
    scaling_factor: Optional[float] = None
    background_color: Color = DEFAULT_BACKGROUND_COLOR
    log_file: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def page_dimensions(self) -> PageDimensions:
        return PageDimensions(self.page_width, self.page_height, self.scaling_factor)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(env_file: Optional[str] = None) -> ReaderSettings:
    """
    Build reader settings from the environment, loading a .env file first.

    Args:
        env_file: Path to a .env file; by default the nearest .env found
            walking up from the current directory

    Returns:
        ReaderSettings: values from PDFQR_* variables, defaults elsewhere
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    background = os.getenv("PDFQR_BACKGROUND_COLOR")
    return ReaderSettings(
        page_width=_env_int("PDFQR_PAGE_WIDTH", DEFAULT_PAGE_WIDTH),
        page_height=_env_int("PDFQR_PAGE_HEIGHT", DEFAULT_PAGE_HEIGHT),
        scaling_factor=_env_float("PDFQR_SCALING_FACTOR"),
        background_color=parse_color(background) if background else DEFAULT_BACKGROUND_COLOR,
        log_file=os.getenv("PDFQR_LOG_FILE") or None,
        log_level=os.getenv("PDFQR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
