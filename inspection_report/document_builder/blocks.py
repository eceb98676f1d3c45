"""Content Blocks Module

Renderable units of a report page. A block never draws on its own: it splits
itself into pieces of known height and the LayoutEngine reserves space for each
piece before handing it the canvas and the top coordinate it may draw from.

Block types:
- Heading: single line, no wrapping
- KeyValueTable: bordered two-column grid, never split across pages
- WrappedParagraph: one piece per wrapped line, may continue on the next page
- ImageBlock: fixed-size image
- ChartBlock: fixed-size chart image, or a placeholder line when unavailable
- SignatureBlock: rule plus two centred lines, never split
- Spacer: vertical gap that never forces a page break
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from reportlab.lib.utils import ImageReader

from ..config import (
    HEADING_FONT_SIZE,
    HEADING_SPACING,
    BODY_FONT_SIZE,
    LINE_SPACING,
    TABLE_ROW_HEIGHT,
    TABLE_COLUMN_WIDTHS,
    TABLE_CELL_PADDING,
    TABLE_BORDER_WIDTH,
    TABLE_FONT_SIZE,
    SIGNATURE_LINE_WIDTH,
    SIGNATURE_HEIGHT,
    SIGNATURE_TOP_GAP,
    SIGNATURE_FONT_SIZE,
    COLOR_TEXT,
    COLOR_TABLE_BORDER,
    COLOR_PLACEHOLDER,
    CHART_PLACEHOLDER_TEXT,
)
from ..report_content import CONTINUATION_SUFFIX
from ..report_data import TableRow
from ..utils import format_value
from .text_wrap import wrap_paragraphs, measure_text

# Signature: (canvas, x, top_y) -> None, where x is the left margin and top_y
# the cursor position reserved for the piece.
DrawFunction = Callable[[object, float, float], None]


@dataclass
class Piece:
    """A unit of vertical space reserved atomically by the layout engine."""
    height: float
    draw: DrawFunction


class Block:
    """Base class for everything the layout engine can place on a page."""

    # Title repeated (with " (continuación)") when the block continues on a new page
    continuation_title: Optional[str] = None

    # If True, the engine keeps this block on the same page as the first piece
    # of the following block
    keep_with_next: bool = False

    def pieces(self, engine) -> List[Piece]:
        raise NotImplementedError

    def continuation_pieces(self, engine) -> List[Piece]:
        if not self.continuation_title:
            return []
        heading = Heading(self.continuation_title + CONTINUATION_SUFFIX)
        return heading.pieces(engine)

    def height(self, engine) -> float:
        """Total vertical extent of the block, before any page break."""
        return sum(piece.height for piece in self.pieces(engine))


def _draw_text_line(canvas, text: str, font_name: str, font_size: float,
                    x: float, baseline: float, align: str, content_width: float):
    canvas.setFont(font_name, font_size)
    if align == "center":
        canvas.drawCentredString(x + content_width / 2, baseline, text)
    elif align == "right":
        canvas.drawRightString(x + content_width, baseline, text)
    else:
        canvas.drawString(x, baseline, text)


@dataclass
class Heading(Block):
    """Single-line heading. Height is font size plus a fixed spacing."""

    text: str
    font_role: str = "bold"
    font_size: float = HEADING_FONT_SIZE
    spacing: float = HEADING_SPACING
    align: str = "left"
    keep_with_next: bool = True

    def pieces(self, engine) -> List[Piece]:
        font_name = engine.fonts.get_font_name(self.font_role)
        content_width = engine.content_width

        def draw(canvas, x, top_y):
            canvas.setFillColor(COLOR_TEXT)
            _draw_text_line(canvas, self.text, font_name, self.font_size,
                            x, top_y - self.font_size, self.align, content_width)

        return [Piece(self.font_size + self.spacing, draw)]


@dataclass
class KeyValueTable(Block):
    """Two-column bordered table: label on the left, value on the right.

    The table is one piece, so it is either drawn whole on the current page or
    moved whole to the next one.
    """

    rows: Sequence[TableRow]
    column_widths: Sequence[float] = TABLE_COLUMN_WIDTHS
    row_height: float = TABLE_ROW_HEIGHT
    font_size: float = TABLE_FONT_SIZE

    def pieces(self, engine) -> List[Piece]:
        if not self.rows:
            return []
        font_name = engine.fonts.get_font_name("regular")
        rows = [(row.label, format_value(row.value)) for row in self.rows]

        def draw(canvas, x, top_y):
            canvas.setStrokeColor(COLOR_TABLE_BORDER)
            canvas.setLineWidth(TABLE_BORDER_WIDTH)
            canvas.setFillColor(COLOR_TEXT)
            canvas.setFont(font_name, self.font_size)
            for row_index, cells in enumerate(rows):
                cell_y = top_y - self.row_height * (row_index + 1)
                cell_x = x
                for col_index, cell_text in enumerate(cells):
                    width = self.column_widths[col_index]
                    canvas.rect(cell_x, cell_y, width, self.row_height, stroke=1, fill=0)
                    canvas.drawString(
                        cell_x + TABLE_CELL_PADDING,
                        cell_y + self.row_height / 4,
                        cell_text,
                    )
                    cell_x += width

        return [Piece(self.row_height * len(rows), draw)]


@dataclass
class WrappedParagraph(Block):
    """Free text wrapped to the content width, one piece per line.

    Long paragraphs may break between lines; when continuation_title is set it
    is repeated at the top of the continuation page.
    """

    text: str
    font_role: str = "regular"
    font_size: float = BODY_FONT_SIZE
    line_spacing: float = LINE_SPACING
    continuation_title: Optional[str] = None
    link_url: Optional[str] = None
    color: Optional[object] = None  # defaults to COLOR_TEXT

    def lines(self, engine) -> List[str]:
        font_name = engine.fonts.get_font_name(self.font_role)
        return wrap_paragraphs(self.text, engine.content_width, font_name, self.font_size)

    def pieces(self, engine) -> List[Piece]:
        font_name = engine.fonts.get_font_name(self.font_role)
        line_height = self.font_size + self.line_spacing
        return [
            Piece(line_height, self._line_drawer(line, font_name))
            for line in self.lines(engine)
        ]

    def _line_drawer(self, line: str, font_name: str) -> DrawFunction:
        def draw(canvas, x, top_y):
            baseline = top_y - self.font_size
            canvas.setFillColor(self.color if self.color is not None else COLOR_TEXT)
            canvas.setFont(font_name, self.font_size)
            canvas.drawString(x, baseline, line)
            if self.link_url and line:
                width = measure_text(line, font_name, self.font_size)
                canvas.linkURL(self.link_url, (x, baseline - 2, x + width, baseline + self.font_size), relative=0)
        return draw


@dataclass
class ImageBlock(Block):
    """Fixed-size image, horizontally centred in the content area."""

    image: ImageReader
    width: float
    height: float

    def pieces(self, engine) -> List[Piece]:
        content_width = engine.content_width

        def draw(canvas, x, top_y):
            left = x + max(content_width - self.width, 0) / 2
            canvas.drawImage(self.image, left, top_y - self.height,
                             width=self.width, height=self.height, mask="auto")

        return [Piece(self.height, draw)]


@dataclass
class ChartBlock(Block):
    """Chart image fetched before layout.

    When the chart could not be obtained (image is None) a single placeholder
    line is drawn in its place instead of an image.
    """

    image: Optional[ImageReader]
    width: float
    height: float
    placeholder_text: str = CHART_PLACEHOLDER_TEXT

    @property
    def is_placeholder(self) -> bool:
        return self.image is None

    def pieces(self, engine) -> List[Piece]:
        if self.image is not None:
            return ImageBlock(self.image, self.width, self.height).pieces(engine)
        placeholder = WrappedParagraph(
            self.placeholder_text,
            font_role="light",
            color=COLOR_PLACEHOLDER,
        )
        return placeholder.pieces(engine)


@dataclass
class SignatureBlock(Block):
    """Signature trailer: a rule and two centred lines (name, position)."""

    signer: str
    position: str
    font_size: float = SIGNATURE_FONT_SIZE
    line_width: float = SIGNATURE_LINE_WIDTH

    def pieces(self, engine) -> List[Piece]:
        bold = engine.fonts.get_font_name("bold")
        regular = engine.fonts.get_font_name("regular")
        content_width = engine.content_width

        def draw(canvas, x, top_y):
            center = x + content_width / 2
            rule_y = top_y - SIGNATURE_TOP_GAP
            canvas.setStrokeColor(COLOR_TEXT)
            canvas.setLineWidth(1)
            canvas.line(center - self.line_width / 2, rule_y, center + self.line_width / 2, rule_y)

            canvas.setFillColor(COLOR_TEXT)
            first_baseline = rule_y - self.font_size - 4
            canvas.setFont(bold, self.font_size)
            canvas.drawCentredString(center, first_baseline, self.signer)
            canvas.setFont(regular, self.font_size)
            canvas.drawCentredString(center, first_baseline - self.font_size - 4, self.position)

        return [Piece(SIGNATURE_HEIGHT, draw)]


@dataclass
class Spacer(Block):
    """Vertical gap. Shrinks to the space left on the page, so it never breaks."""

    gap: float

    def pieces(self, engine) -> List[Piece]:
        height = min(self.gap, max(engine.remaining_height, 0))
        if height <= 0:
            return []
        return [Piece(height, lambda canvas, x, top_y: None)]
