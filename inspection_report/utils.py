"""Utilities Module

Helper functions for the report renderer.
"""
import re
import unicodedata
from typing import Any, Optional

from .config import DEFAULT_PDF_FILENAME


def remove_accents(text: str) -> str:
    """
    Strip diacritics and replace every non-alphanumeric character with '_'.

    Args:
        text: Original string (e.g., "Región de Ñuble")

    Returns:
        ASCII-safe string (e.g., "Region_de_Nuble")
    """
    decomposed = unicodedata.normalize("NFD", text)
    without_marks = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return re.sub(r"[^a-zA-Z0-9_]", "_", without_marks)


def build_pdf_filename(region: str, month: str) -> str:
    """
    Build the download filename for a report.

    Args:
        region: Region display name
        month: Month display name

    Returns:
        Filename like "Atacama_marzo.pdf"
    """
    if not region or not month:
        return DEFAULT_PDF_FILENAME
    return f"{remove_accents(region)}_{remove_accents(month)}.pdf"


def format_value(value: Any) -> str:
    """
    Format a table cell value for display.

    Booleans become "Sí"/"No", floats drop a trailing ".0", None becomes "-".
    """
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Sí" if value else "No"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.1f}"
    return str(value)


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage value (94.4 -> "94.4%", 80.0 -> "80%")."""
    if value is None:
        return "-"
    return f"{format_value(float(value))}%"
