"""Page Decorations Module

Fixed page header (bicolor line and logo) and footer (page number), drawn by the
layout engine on every page it opens or finishes.
"""
from typing import Optional

from reportlab.lib.utils import ImageReader

from ..config import (
    HEADER_LINE_WIDTH,
    HEADER_LINE_HEIGHT,
    HEADER_LOGO_WIDTH,
    HEADER_LOGO_HEIGHT,
    HEADER_LOGO_TOP_OFFSET,
    FOOTER_Y,
    FOOTER_FONT_SIZE,
    COLOR_BICOLOR_BLUE,
    COLOR_BICOLOR_RED,
    COLOR_TEXT,
)


class PageHeader:
    """Draws the bicolor top line and the logo.

    With no bicolor image the line is drawn as two filled rectangles (blue and
    red halves). With no logo image the logo is omitted.
    """

    def __init__(self, bicolor_line: Optional[ImageReader] = None, logo: Optional[ImageReader] = None):
        self.bicolor_line = bicolor_line
        self.logo = logo

    def __call__(self, canvas, engine):
        x = engine.margins.left
        line_y = engine.page_height - HEADER_LINE_HEIGHT

        if self.bicolor_line is not None:
            canvas.drawImage(self.bicolor_line, x, line_y,
                             width=HEADER_LINE_WIDTH, height=HEADER_LINE_HEIGHT, mask="auto")
        else:
            half = HEADER_LINE_WIDTH / 2
            canvas.setFillColor(COLOR_BICOLOR_BLUE)
            canvas.rect(x, line_y, half, HEADER_LINE_HEIGHT, stroke=0, fill=1)
            canvas.setFillColor(COLOR_BICOLOR_RED)
            canvas.rect(x + half, line_y, half, HEADER_LINE_HEIGHT, stroke=0, fill=1)

        if self.logo is not None:
            canvas.drawImage(self.logo, x, engine.page_height - HEADER_LOGO_TOP_OFFSET,
                             width=HEADER_LOGO_WIDTH, height=HEADER_LOGO_HEIGHT, mask="auto")


class PageFooter:
    """Draws "Página N" right-aligned at the bottom of the page."""

    def __init__(self, font_name: str, font_size: float = FOOTER_FONT_SIZE):
        self.font_name = font_name
        self.font_size = font_size

    def __call__(self, canvas, engine):
        canvas.setFillColor(COLOR_TEXT)
        canvas.setFont(self.font_name, self.font_size)
        canvas.drawRightString(
            engine.page_width - engine.margins.right,
            FOOTER_Y,
            f"Página {engine.page_count}",
        )
