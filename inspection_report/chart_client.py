"""Chart Service Client Module

Handles communication with a QuickChart-compatible chart rendering service.
"""
import json
import logging
from typing import Dict, Sequence

import requests

from .config import (
    DEFAULT_CHART_SERVICE_URL,
    DEFAULT_CHART_TIMEOUT_SECONDS,
    DEFAULT_CHART_WIDTH,
    DEFAULT_CHART_HEIGHT,
    CHART_BAR_COLOR,
)
from .document_builder.image_loader import image_from_bytes
from .exceptions import ChartFetchError, ImageLoadError

logger = logging.getLogger(__name__)


class ChartClient:
    """Client for a chart service that renders Chart.js configs to PNG."""

    def __init__(
        self,
        service_url: str = DEFAULT_CHART_SERVICE_URL,
        timeout: float = DEFAULT_CHART_TIMEOUT_SECONDS,
        width: int = DEFAULT_CHART_WIDTH,
        height: int = DEFAULT_CHART_HEIGHT,
    ):
        """
        Initialize chart client.

        Args:
            service_url: Endpoint accepting POSTed chart configs (QuickChart /chart)
            timeout: Seconds before the request is abandoned
            width: Requested image width in pixels
            height: Requested image height in pixels
        """
        self.service_url = service_url
        self.timeout = timeout
        self.width = width
        self.height = height

    @staticmethod
    def build_bar_chart_config(title: str, labels: Sequence[str], values: Sequence[float]) -> Dict:
        """
        Build a Chart.js bar chart config.

        Args:
            title: Dataset label and chart title
            labels: Category labels (one per bar)
            values: Bar heights

        Returns:
            Chart.js config dict
        """
        return {
            "type": "bar",
            "data": {
                "labels": list(labels),
                "datasets": [{
                    "label": title,
                    "data": list(values),
                    "backgroundColor": CHART_BAR_COLOR,
                }],
            },
            "options": {
                "legend": {"display": False},
                "title": {"display": True, "text": title},
                "scales": {"yAxes": [{"ticks": {"beginAtZero": True, "precision": 0}}]},
            },
        }

    def fetch_chart(self, chart_config: Dict) -> bytes:
        """
        Render a chart config to PNG bytes.

        Args:
            chart_config: Chart.js config

        Returns:
            PNG image bytes

        Raises:
            ChartFetchError: On network error, timeout, non-2xx status or a body
                             that is not a decodable image
        """
        payload = {
            "chart": chart_config,
            "width": self.width,
            "height": self.height,
            "format": "png",
            "backgroundColor": "white",
        }

        try:
            response = requests.post(
                self.service_url,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise ChartFetchError(self.service_url, f"timed out after {self.timeout} seconds") from e
        except requests.RequestException as e:
            raise ChartFetchError(self.service_url, str(e)) from e

        content_type = response.headers.get("Content-Type", "")
        if not content_type.startswith("image/"):
            raise ChartFetchError(
                self.service_url,
                f"unexpected content type {content_type or 'missing'!r}",
            )

        try:
            image_from_bytes(response.content, source=self.service_url)
        except ImageLoadError as e:
            raise ChartFetchError(self.service_url, str(e)) from e

        logger.debug("Fetched chart (%d bytes) from %s", len(response.content), self.service_url)
        return response.content

    def fetch_bar_chart(self, title: str, labels: Sequence[str], values: Sequence[float]) -> bytes:
        """Build a bar chart config and render it. See fetch_chart for errors."""
        config = self.build_bar_chart_config(title, labels, values)
        logger.debug("Requesting bar chart: %s", json.dumps(config, ensure_ascii=False))
        return self.fetch_chart(config)
