"""Report Builder Module

Turns a normalized MonthlyReport into the ordered list of content blocks of the
monthly inspection report and lays them out with the LayoutEngine:

- Title and region subtitle
- Legacy identification table (schema version 1 only)
- General data table, slots table, link to the beneficiaries list
- Field and office supervision tables with their observations
- Monthly supervisions bar chart (or its placeholder)
- Project progress, general comments and supervision comments
- Signature block
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config import (
    PAGE_WIDTH,
    PAGE_HEIGHT,
    TITLE_FONT_SIZE,
    SUBTITLE_FONT_SIZE,
    SUBHEADING_FONT_SIZE,
    NOTE_FONT_SIZE,
    BLOCK_SPACING,
    BICOLOR_LINE_IMAGE,
    LOGO_IMAGE,
)
from ..render_options import RenderOptions
from ..report_content import (
    REPORT_TITLE,
    REPORT_SUBTITLE,
    HEADING_GENERAL,
    HEADING_SUPERVISIONS,
    HEADING_FIELD,
    HEADING_OFFICE,
    HEADING_CHART,
    HEADING_PROJECTS,
    HEADING_GENERAL_COMMENTS,
    HEADING_SUPERVISION_COMMENTS,
    HEADING_OBSERVATIONS,
    BENEFICIARIES_NOTE,
    NO_COMMENTS_TEXT,
)
from ..report_data import MonthlyReport, SupervisionGroup
from .blocks import (
    Block,
    Heading,
    KeyValueTable,
    WrappedParagraph,
    ChartBlock,
    SignatureBlock,
    Spacer,
)
from .font_manager import FontManager
from .image_loader import ImageLoader, image_from_bytes
from .layout_engine import LayoutEngine, Margins
from .page_decorations import PageHeader, PageFooter

logger = logging.getLogger(__name__)


@dataclass
class RenderedDocument:
    """Serialized PDF plus the layout facts callers report on."""
    pdf_bytes: bytes
    page_count: int
    chart_placeholder: bool = False


class ReportBuilder:
    """Build the monthly report PDF from a MonthlyReport.

    Fonts and header images are loaded once, when the builder is created, and
    shared by every page of the render.
    """

    def __init__(self, options: Optional[RenderOptions] = None,
                 fonts: Optional[FontManager] = None,
                 images: Optional[ImageLoader] = None):
        """
        Initialize report builder.

        Args:
            options: Render options (default RenderOptions())
            fonts: Preloaded FontManager (default: loaded from options.fonts_dir)
            images: Preloaded ImageLoader (default: loaded from options.images_dir)

        Raises:
            FontError: If a configured font cannot be loaded
            ImageLoadError: If a configured header image cannot be loaded
        """
        self.options = options or RenderOptions()
        self.fonts = fonts or FontManager(self.options.fonts_dir)
        self.images = images or ImageLoader(self.options.images_dir)
        self.header = PageHeader(
            bicolor_line=self.images.load(BICOLOR_LINE_IMAGE),
            logo=self.images.load(LOGO_IMAGE),
        )
        self.footer = PageFooter(self.fonts.light) if self.options.draw_page_numbers else None

    def build_blocks(self, report: MonthlyReport, chart_png: Optional[bytes] = None) -> List[Block]:
        """
        Build the ordered content blocks of the report.

        Args:
            report: Normalized report data
            chart_png: Chart image bytes, or None to draw the chart placeholder

        Returns:
            Blocks in document order
        """
        blocks: List[Block] = [
            Heading(REPORT_TITLE.format(month=report.month), font_size=TITLE_FONT_SIZE,
                    spacing=4, align="center"),
            Heading(REPORT_SUBTITLE.format(region=report.region), font_role="regular",
                    font_size=SUBTITLE_FONT_SIZE, align="center"),
            Spacer(BLOCK_SPACING),
        ]

        if report.identification:
            blocks.append(KeyValueTable(report.identification))
            blocks.append(Spacer(BLOCK_SPACING))

        blocks.append(Heading(HEADING_GENERAL))
        blocks.append(KeyValueTable(report.general_rows))
        if report.quota_rows:
            blocks.append(Spacer(BLOCK_SPACING / 2))
            blocks.append(KeyValueTable(report.quota_rows))
        if report.beneficiaries_url:
            blocks.append(Spacer(BLOCK_SPACING / 2))
            blocks.append(WrappedParagraph(BENEFICIARIES_NOTE, font_role="light",
                                           font_size=NOTE_FONT_SIZE,
                                           link_url=report.beneficiaries_url))

        if report.field_groups or report.office_groups:
            blocks.append(Spacer(BLOCK_SPACING))
            blocks.append(Heading(HEADING_SUPERVISIONS))
            blocks.extend(self._supervision_blocks(HEADING_FIELD, report.field_groups))
            blocks.extend(self._supervision_blocks(HEADING_OFFICE, report.office_groups))

        if self.options.include_chart:
            blocks.append(Spacer(BLOCK_SPACING))
            blocks.append(Heading(HEADING_CHART))
            chart_image = image_from_bytes(chart_png, source="chart") if chart_png else None
            blocks.append(ChartBlock(chart_image, self.options.chart_width, self.options.chart_height))

        if report.projects_progress:
            blocks.extend(self._comment_blocks(HEADING_PROJECTS, report.projects_progress))
        blocks.extend(self._comment_blocks(HEADING_GENERAL_COMMENTS, report.general_comments))
        blocks.extend(self._comment_blocks(HEADING_SUPERVISION_COMMENTS, report.supervision_comments))

        blocks.append(SignatureBlock(report.signer, report.position))
        return blocks

    def _supervision_blocks(self, heading: str, groups: List[SupervisionGroup]) -> List[Block]:
        if not groups:
            return []
        blocks: List[Block] = [Spacer(BLOCK_SPACING / 2), Heading(heading)]
        for group in groups:
            blocks.append(Heading(group.title, font_role="regular", font_size=SUBHEADING_FONT_SIZE))
            blocks.append(KeyValueTable(group.rows))
            if group.observations:
                blocks.append(Spacer(BLOCK_SPACING / 3))
                blocks.append(WrappedParagraph(
                    f"{HEADING_OBSERVATIONS}: {group.observations}",
                    continuation_title=f"{group.title} - {HEADING_OBSERVATIONS}",
                ))
            blocks.append(Spacer(BLOCK_SPACING / 2))
        return blocks

    @staticmethod
    def _comment_blocks(heading: str, text: str) -> List[Block]:
        return [
            Spacer(BLOCK_SPACING),
            Heading(heading),
            WrappedParagraph(text or NO_COMMENTS_TEXT, continuation_title=heading),
        ]

    def render(self, report: MonthlyReport, chart_png: Optional[bytes] = None) -> RenderedDocument:
        """
        Lay out and serialize the report.

        Args:
            report: Normalized report data
            chart_png: Chart image bytes, or None to draw the chart placeholder

        Returns:
            RenderedDocument with the PDF bytes and page count
        """
        engine = LayoutEngine.new_document(
            PAGE_WIDTH,
            PAGE_HEIGHT,
            Margins(),
            fonts=self.fonts,
            on_page_start=self.header,
            on_page_end=self.footer,
            title=f"{REPORT_TITLE.format(month=report.month)} - {REPORT_SUBTITLE.format(region=report.region)}",
            invariant=self.options.invariant,
        )

        blocks = self.build_blocks(report, chart_png)
        engine.draw_blocks(blocks)
        pdf_bytes = engine.finalize()

        logger.debug("Rendered report %s/%s: %d page(s), %d bytes",
                     report.region, report.month, engine.page_count, len(pdf_bytes))
        return RenderedDocument(
            pdf_bytes=pdf_bytes,
            page_count=engine.page_count,
            chart_placeholder=self.options.include_chart and not chart_png,
        )
