"""Text Wrapping Module

Greedy word wrapping measured with ReportLab font metrics.
"""
from typing import List

from reportlab.pdfbase import pdfmetrics


def measure_text(text: str, font_name: str, font_size: float) -> float:
    """Rendered width of text in points."""
    return pdfmetrics.stringWidth(text, font_name, font_size)


def wrap_text(text: str, max_width: float, font_name: str, font_size: float) -> List[str]:
    """
    Break a single paragraph into lines that fit a column width.

    Words are separated by single spaces. A candidate line is accepted only
    while its width is strictly less than max_width. Words are never split: a
    word wider than the column is emitted on its own line. Newlines are not
    interpreted here; use wrap_paragraphs for multi-paragraph text.

    Args:
        text: Paragraph text without newlines
        max_width: Column width in points
        font_name: Registered ReportLab font name used for measuring
        font_size: Font size in points

    Returns:
        List of lines. Empty text yields [""].

    Example:
        >>> wrap_text("", 100, "Helvetica", 10)
        ['']
    """
    lines = []
    current = None

    for word in text.split(" "):
        candidate = word if current is None else f"{current} {word}"
        if measure_text(candidate, font_name, font_size) < max_width:
            current = candidate
        else:
            if current is not None:
                lines.append(current)
            current = word

    if current is not None:
        lines.append(current)

    return lines


def wrap_paragraphs(text: str, max_width: float, font_name: str, font_size: float) -> List[str]:
    """
    Wrap text that may contain newline-separated paragraphs.

    Each paragraph is wrapped independently with wrap_text; blank paragraphs are
    kept as empty lines so the vertical rhythm of the source text survives.
    """
    lines = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        lines.extend(wrap_text(paragraph, max_width, font_name, font_size))
    return lines
