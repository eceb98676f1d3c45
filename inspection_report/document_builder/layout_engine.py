"""Layout Engine Module

Owns the pagination state of one document: the ReportLab canvas, the current
page, the vertical cursor and the page geometry.

Every drawing operation goes through draw_block(), which reserves space for
each piece of a block before letting it draw. Blocks never see the canvas
without a prior space check.

State machine:
    EMPTY -> ACTIVE -> FINALIZED
The first page is opened lazily by the first space check or draw call.
finalize() serializes the document; nothing can be drawn afterwards.
"""
import io
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from reportlab.pdfgen import canvas as pdfcanvas

from ..config import (
    PAGE_WIDTH,
    PAGE_HEIGHT,
    LEFT_MARGIN,
    RIGHT_MARGIN,
    TOP_MARGIN,
    BOTTOM_MARGIN,
)
from ..exceptions import DocumentFinalizedError, LayoutError
from .blocks import Block, Piece, Spacer
from .font_manager import FontManager

logger = logging.getLogger(__name__)

# (canvas, engine) -> None
PageHook = Callable[[object, "LayoutEngine"], None]

STATE_EMPTY = "empty"
STATE_ACTIVE = "active"
STATE_FINALIZED = "finalized"


@dataclass(frozen=True)
class Margins:
    """Page margins in points."""
    top: float = TOP_MARGIN
    bottom: float = BOTTOM_MARGIN
    left: float = LEFT_MARGIN
    right: float = RIGHT_MARGIN


class LayoutEngine:
    """Lays out content blocks onto fixed-size pages.

    Attributes:
        page_width, page_height: Page size in points
        margins: Page margins
        fonts: FontManager used by blocks to resolve font roles
        current_y: Vertical cursor on the current page (points from the bottom)
        page_count: Number of pages opened so far
        state: "empty", "active" or "finalized"
    """

    def __init__(
        self,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        margins: Optional[Margins] = None,
        fonts: Optional[FontManager] = None,
        on_page_start: Optional[PageHook] = None,
        on_page_end: Optional[PageHook] = None,
        title: Optional[str] = None,
        invariant: bool = False,
    ):
        """
        Initialize an empty document.

        Args:
            page_width: Page width in points (default A4)
            page_height: Page height in points (default A4)
            margins: Page margins (default from config)
            fonts: FontManager for font roles (default built-in Helvetica family)
            on_page_start: Hook drawing the fixed page header on every new page
            on_page_end: Hook drawing the footer before a page is finished
            title: PDF document title metadata
            invariant: If True, produce byte-stable output
        """
        self.margins = margins or Margins()
        if page_height - self.margins.top <= self.margins.bottom:
            raise LayoutError(
                f"Margins leave no vertical space: page height {page_height}, "
                f"top {self.margins.top}, bottom {self.margins.bottom}"
            )
        if page_width - self.margins.left - self.margins.right <= 0:
            raise LayoutError(f"Margins leave no horizontal space: page width {page_width}")

        self.page_width = page_width
        self.page_height = page_height
        self.fonts = fonts or FontManager()
        self.on_page_start = on_page_start
        self.on_page_end = on_page_end

        self._buffer = io.BytesIO()
        self.canvas = pdfcanvas.Canvas(
            self._buffer,
            pagesize=(page_width, page_height),
            invariant=1 if invariant else 0,
        )
        if title:
            self.canvas.setTitle(title)

        self.current_y = self.top_y
        self.page_count = 0
        self.state = STATE_EMPTY
        self._page_has_content = False

    @classmethod
    def new_document(cls, page_width: float = PAGE_WIDTH, page_height: float = PAGE_HEIGHT,
                     margins: Optional[Margins] = None, **kwargs) -> "LayoutEngine":
        """Create an engine for a new, empty document."""
        return cls(page_width=page_width, page_height=page_height, margins=margins, **kwargs)

    # Geometry

    @property
    def top_y(self) -> float:
        """Cursor position at the top of a fresh page."""
        return self.page_height - self.margins.top

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def usable_height(self) -> float:
        """Vertical space between the top and bottom margins of one page."""
        return self.top_y - self.margins.bottom

    @property
    def remaining_height(self) -> float:
        """Vertical space left on the current page."""
        return self.current_y - self.margins.bottom

    @property
    def at_page_top(self) -> bool:
        return not self._page_has_content

    # Page management

    def _require_open(self):
        if self.state == STATE_FINALIZED:
            raise DocumentFinalizedError()
        if self.state == STATE_EMPTY:
            self._open_page()

    def _open_page(self):
        self.page_count += 1
        self.state = STATE_ACTIVE
        self.current_y = self.top_y
        self._page_has_content = False
        if self.on_page_start is not None:
            self.on_page_start(self.canvas, self)
        logger.debug("Opened page %d", self.page_count)

    def _close_page(self):
        if self.on_page_end is not None:
            self.on_page_end(self.canvas, self)
        self.canvas.showPage()

    def new_page(self):
        """Finish the current page and start a new one with the header redrawn."""
        self._require_open()
        self._close_page()
        self._open_page()

    def ensure_space(self, required_height: float) -> bool:
        """
        Reserve vertical space on the current page.

        If current_y - required_height falls below the bottom margin, a new page
        is started (header redrawn, cursor reset to page_height - top margin).

        Args:
            required_height: Space about to be consumed, in points

        Returns:
            True if a page break occurred, False if the space was available
        """
        self._require_open()
        if self.current_y - required_height < self.margins.bottom:
            logger.debug(
                "Page break on page %d: need %.1fpt, %.1fpt left",
                self.page_count, required_height, self.remaining_height,
            )
            self.new_page()
            return True
        return False

    def advance(self, height: float):
        """Move the cursor down after drawing height points of content."""
        self.current_y -= height
        self._page_has_content = True

    # Drawing

    def _reserve(self, height: float) -> bool:
        """
        Space check with the overflow policy applied.

        A piece taller than a whole usable page is drawn at the top of a page
        (breaking at most once) and allowed to run past the bottom margin.
        """
        if height > self.usable_height:
            logger.warning(
                "Content of %.1fpt exceeds the usable page height of %.1fpt; drawing with overflow",
                height, self.usable_height,
            )
            if self.at_page_top:
                return False
        return self.ensure_space(height)

    def _place(self, piece: Piece):
        piece.draw(self.canvas, self.margins.left, self.current_y)
        self.advance(piece.height)

    def draw_block(self, block: Block, keep_height: float = 0) -> int:
        """
        Lay out one block.

        Each piece of the block is space-checked before it draws. When a break
        happens inside a block that has a continuation title, the title is
        repeated at the top of the new page.

        Args:
            block: Block to draw
            keep_height: Extra height that must fit together with the block's
                         first piece (used to keep headings with what follows)

        Returns:
            Number of page breaks the block caused
        """
        self._require_open()
        breaks = 0
        for index, piece in enumerate(block.pieces(self)):
            needed = piece.height
            # A chain taller than a page cannot be kept together
            if index == 0 and piece.height + keep_height <= self.usable_height:
                needed += keep_height
            broke = self._reserve(needed)
            if broke:
                breaks += 1
                if index > 0:
                    for heading_piece in block.continuation_pieces(self):
                        self._reserve(heading_piece.height)
                        self._place(heading_piece)
                    self._reserve(piece.height)
            self._place(piece)
        return breaks

    def draw_blocks(self, blocks: Iterable[Block]) -> int:
        """
        Lay out blocks in order, honoring keep_with_next.

        A block flagged keep_with_next (headings) only starts on the current
        page if everything it is kept with fits right after it: consecutive
        keep_with_next blocks in full, plus the first piece of the block that
        ends the chain. Spacers inside the chain are ignored.

        Returns:
            Total number of page breaks
        """
        blocks: List[Block] = list(blocks)
        breaks = 0
        for index, block in enumerate(blocks):
            keep_height = self._keep_height(blocks, index) if block.keep_with_next else 0
            breaks += self.draw_block(block, keep_height=keep_height)
        return breaks

    def _keep_height(self, blocks: List[Block], index: int) -> float:
        """Height of what blocks[index] must stay on the same page with."""
        height = 0
        for following in blocks[index + 1:]:
            if isinstance(following, Spacer):
                continue
            pieces = following.pieces(self)
            if not following.keep_with_next:
                if pieces:
                    height += pieces[0].height
                break
            height += sum(piece.height for piece in pieces)
        return height

    def finalize(self) -> bytes:
        """
        Finish the last page and serialize the document.

        Returns:
            PDF bytes

        Raises:
            DocumentFinalizedError: If the document was already finalized
        """
        self._require_open()
        self._close_page()
        self.canvas.save()
        self.state = STATE_FINALIZED
        logger.debug("Finalized document with %d page(s)", self.page_count)
        return self._buffer.getvalue()
