"""Document Builder Package

This package lays out monthly inspection reports as paginated PDF documents:

Core Classes:
- ReportBuilder: Main orchestrator class (from builder.py)
- LayoutEngine: Page state, vertical cursor and page breaks
- FontManager: gobCL font registration with Helvetica fallback
- ImageLoader: Header image loading and verification
- PageHeader / PageFooter: Fixed per-page decorations

Content Blocks:
- Heading, KeyValueTable, WrappedParagraph, ImageBlock, ChartBlock,
  SignatureBlock, Spacer

Helper Functions:
- wrap_text: Greedy word wrap by measured string width
"""

# Import core classes
from .builder import ReportBuilder, RenderedDocument
from .layout_engine import LayoutEngine, Margins
from .font_manager import FontManager
from .image_loader import ImageLoader, image_from_bytes
from .page_decorations import PageHeader, PageFooter
from .blocks import (
    Block,
    Piece,
    Heading,
    KeyValueTable,
    WrappedParagraph,
    ImageBlock,
    ChartBlock,
    SignatureBlock,
    Spacer,
)
from .text_wrap import wrap_text, wrap_paragraphs, measure_text

# Expose public API
__all__ = [
    # Main builder class
    'ReportBuilder',
    'RenderedDocument',

    # Helper functions
    'wrap_text',
    'wrap_paragraphs',
    'measure_text',
    'image_from_bytes',

    # Component classes
    'LayoutEngine',
    'Margins',
    'FontManager',
    'ImageLoader',
    'PageHeader',
    'PageFooter',

    # Content blocks
    'Block',
    'Piece',
    'Heading',
    'KeyValueTable',
    'WrappedParagraph',
    'ImageBlock',
    'ChartBlock',
    'SignatureBlock',
    'Spacer',
]
