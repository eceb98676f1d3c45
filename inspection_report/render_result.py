"""Render Result Dataclass

Result outputs from the report rendering pipeline.
"""
import os
import tempfile
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pandas as pd

from .config import DEFAULT_PDF_FILENAME
from .report_data import MonthlyReport, TableRow
from .utils import format_value

SUMMARY_COLUMNS = ["Sección", "Campo", "Valor"]


def build_summary_dataframe(report: MonthlyReport) -> pd.DataFrame:
    """
    Flatten every table of the report into one DataFrame for preview.

    Args:
        report: Normalized report data

    Returns:
        DataFrame with columns Sección, Campo, Valor (values as printed in the PDF)
    """
    records = []
    tables: List[Tuple[str, List[TableRow]]] = report.all_tables()
    for section, rows in tables:
        for row in rows:
            records.append((section, row.label, format_value(row.value)))
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


@dataclass
class RenderResult:
    """Result from the report rendering pipeline.

    Attributes:
        status: Rendering status ("completed", "invalid", "failed")
        status_message: Human-readable status message

        # Output
        pdf_bytes: Serialized PDF (None unless completed)
        page_count: Number of pages in the PDF
        filename: Download filename, "{region}_{mes}.pdf"
        output_pdf_path: Path the PDF was saved to, once save_pdf() ran

        # Preview
        summary_dataframe: Every table row of the report (Sección, Campo, Valor)
        chart_placeholder: True if the chart could not be fetched and a
            placeholder was drawn instead

        # Error Handling
        error: Error message if rendering failed or the payload was invalid
    """

    # Status
    status: str  # "completed", "invalid", "failed"
    status_message: str

    # Output
    pdf_bytes: Optional[bytes] = None
    page_count: int = 0
    filename: str = DEFAULT_PDF_FILENAME
    output_pdf_path: Optional[str] = None

    # Preview
    summary_dataframe: Optional[pd.DataFrame] = None
    chart_placeholder: bool = False

    # Error Handling
    error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True if a PDF was produced."""
        return self.status == "completed" and self.pdf_bytes is not None

    @property
    def is_invalid(self) -> bool:
        """True if the payload was rejected before any layout work."""
        return self.status == "invalid"

    @property
    def is_failed(self) -> bool:
        """True if rendering failed after the payload was accepted."""
        return self.status == "failed"

    def save_pdf(self, directory: Optional[str] = None) -> str:
        """
        Write the PDF to disk under its download filename.

        Args:
            directory: Target directory (default: a new temporary directory)

        Returns:
            Path of the written file

        Raises:
            ValueError: If there is no PDF to save
        """
        if not self.is_complete:
            raise ValueError(f"No PDF to save (status: {self.status})")

        directory = directory or tempfile.mkdtemp(prefix="inspection_report_")
        path = os.path.join(directory, self.filename)
        with open(path, "wb") as f:
            f.write(self.pdf_bytes)
        self.output_pdf_path = path
        return path

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Returns:
            Tuple of (output_file, summary_table, status)
        """
        import gradio as gr

        if not self.is_complete:
            return (
                None,  # output_file
                gr.update(value=None, visible=False),  # summary_table
                self.status_message,
            )

        output_path = self.output_pdf_path or self.save_pdf()
        table = self.summary_dataframe if self.summary_dataframe is not None else pd.DataFrame(columns=SUMMARY_COLUMNS)
        return (
            output_path,
            gr.update(value=table, visible=True),
            self.status_message,
        )
