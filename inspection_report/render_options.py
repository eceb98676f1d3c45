"""Render Options Dataclass

Configuration options for the report rendering pipeline.
"""
import os
from dataclasses import dataclass
from typing import Optional

from .config import (
    DEFAULT_CHART_SERVICE_URL,
    DEFAULT_CHART_TIMEOUT_SECONDS,
    DEFAULT_CHART_WIDTH,
    DEFAULT_CHART_HEIGHT,
)
from .exceptions import InvalidConfigurationError


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RenderOptions:
    """Configuration options for the report rendering pipeline.

    Attributes:
        fonts_dir: Directory holding the gobCL font files. If None, the built-in
            Helvetica family is used.
        images_dir: Directory holding the header images (bicolor line and logo).
            If None, the bicolor line is drawn as vector shapes and no logo is drawn.

        # Chart Options
        include_chart: If True, request the monthly supervisions bar chart
        chart_service_url: QuickChart-compatible endpoint receiving chart configs
        chart_timeout: Seconds before the chart request is abandoned
        chart_width: Chart width in points (also the requested pixel width)
        chart_height: Chart height in points (also the requested pixel height)

        # Output Options
        invariant: If True, the PDF is byte-stable (no timestamps or random IDs)
        draw_page_numbers: If True, a "Página N" footer is drawn on each page
    """

    fonts_dir: Optional[str] = None
    images_dir: Optional[str] = None

    # Chart Options
    include_chart: bool = True
    chart_service_url: str = DEFAULT_CHART_SERVICE_URL
    chart_timeout: float = DEFAULT_CHART_TIMEOUT_SECONDS
    chart_width: int = DEFAULT_CHART_WIDTH
    chart_height: int = DEFAULT_CHART_HEIGHT

    # Output Options
    invariant: bool = False
    draw_page_numbers: bool = True

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if self.chart_timeout <= 0:
            raise InvalidConfigurationError(
                f"chart_timeout must be positive, got {self.chart_timeout}"
            )
        if self.chart_width <= 0 or self.chart_height <= 0:
            raise InvalidConfigurationError(
                f"chart size must be positive, got {self.chart_width}x{self.chart_height}"
            )
        if not self.chart_service_url.startswith(("http://", "https://")):
            raise InvalidConfigurationError(
                f"chart_service_url must be an http(s) URL, got {self.chart_service_url!r}"
            )
        for name in ("fonts_dir", "images_dir"):
            path = getattr(self, name)
            if path is not None and not os.path.isdir(path):
                raise InvalidConfigurationError(f"{name} is not a directory: {path}")

    @classmethod
    def from_env(cls) -> "RenderOptions":
        """
        Build options from environment variables.

        Reads REPORT_FONTS_DIR, REPORT_IMAGES_DIR, CHART_SERVICE_URL,
        CHART_TIMEOUT_SECONDS, INCLUDE_CHART and PDF_INVARIANT. Entry points call
        load_dotenv() first so a .env file can provide them.
        """
        return cls(
            fonts_dir=os.getenv("REPORT_FONTS_DIR") or None,
            images_dir=os.getenv("REPORT_IMAGES_DIR") or None,
            include_chart=_env_flag("INCLUDE_CHART", True),
            chart_service_url=os.getenv("CHART_SERVICE_URL", DEFAULT_CHART_SERVICE_URL),
            chart_timeout=float(os.getenv("CHART_TIMEOUT_SECONDS", DEFAULT_CHART_TIMEOUT_SECONDS)),
            invariant=_env_flag("PDF_INVARIANT", False),
        )
