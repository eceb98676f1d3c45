"""Report Rendering Pipeline

Main orchestration logic for the monthly report workflow.
"""
import logging
from typing import Any, Callable, Optional

from .render_options import RenderOptions
from .render_result import RenderResult, build_summary_dataframe
from .config import PROGRESS_STEPS, CHART_TITLE
from .utils import build_pdf_filename
from .validation import validate_request_body
from .report_data import MonthlyReport, normalize_payload
from .chart_client import ChartClient
from .document_builder import ReportBuilder
from .exceptions import (
    InspectionReportError,
    ValidationError,
    ChartError,
    PipelineStepError,
)

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Monthly report pipeline orchestrator.

    This class orchestrates the complete report workflow:
    1. Validation - required fields and shapes of the payload
    2. Normalization - payload (schema 1 or 2) to MonthlyReport
    3. Assets - fonts and header images, loaded once per render
    4. Chart - monthly supervisions bar chart from the chart service
    5. Layout - paginated PDF generation

    A chart service failure is not fatal: the report is rendered with a
    placeholder where the chart would be.

    Attributes:
        options: Render options
        chart_client: Chart service client
        progress_callback: Optional callback for progress updates (progress, desc)
    """

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        chart_client: Optional[ChartClient] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ):
        """Initialize pipeline with render options and optional chart client.

        Args:
            options: Render options (default RenderOptions())
            chart_client: Chart service client (default: built from options)
            progress_callback: Optional function(progress: float, desc: str) for progress updates
        """
        self.options = options or RenderOptions()
        self.chart_client = chart_client or ChartClient(
            service_url=self.options.chart_service_url,
            timeout=self.options.chart_timeout,
            width=self.options.chart_width,
            height=self.options.chart_height,
        )
        self.progress = progress_callback or (lambda p, d: None)

    def process(self, payload: Any) -> RenderResult:
        """Execute the complete report pipeline.

        Args:
            payload: Decoded JSON request body

        Returns:
            RenderResult with the PDF and status

        Raises:
            Does not raise - all errors are captured in RenderResult.error
        """
        try:
            # Step 1: Validation
            self.progress(PROGRESS_STEPS["VALIDATE"], "Validando datos...")
            parsed = validate_request_body(payload)

            # Step 2: Normalization
            self.progress(PROGRESS_STEPS["NORMALIZE"], "Normalizando datos...")
            report = normalize_payload(parsed)
            logger.info(
                "Rendering report for %s/%s (schema version %d)",
                report.region, report.month, report.schema_version,
            )

        except ValidationError as e:
            logger.warning("Rejected report payload: %s", e)
            return RenderResult(
                status="invalid",
                status_message=f"Datos inválidos: {e}",
                error=str(e),
            )
        except Exception as e:
            logger.exception("Unexpected error while reading the payload")
            return RenderResult(
                status="failed",
                status_message=f"Error al generar el PDF: {e}",
                error=str(e),
            )

        try:
            # Step 3: Fonts and header images
            self.progress(PROGRESS_STEPS["ASSETS"], "Cargando fuentes e imágenes...")
            builder = self._run_step("assets", ReportBuilder, self.options)

            # Step 4: Chart
            chart_png = self._fetch_chart(report)

            # Step 5: Layout
            self.progress(PROGRESS_STEPS["LAYOUT"], "Generando PDF...")
            document = self._run_step("layout", builder.render, report, chart_png)

            self.progress(PROGRESS_STEPS["COMPLETE"], "Listo")

        except PipelineStepError as e:
            logger.error("Report rendering failed: %s", e)
            return RenderResult(
                status="failed",
                status_message=f"Error al generar el PDF: {e.original_exception}",
                error=str(e.original_exception),
            )

        logger.info("Rendered %s (%d page(s))", build_pdf_filename(report.region, report.month), document.page_count)
        return RenderResult(
            status="completed",
            status_message=f"✅ Informe generado ({document.page_count} página(s))",
            pdf_bytes=document.pdf_bytes,
            page_count=document.page_count,
            filename=build_pdf_filename(report.region, report.month),
            summary_dataframe=build_summary_dataframe(report),
            chart_placeholder=document.chart_placeholder,
        )

    def _run_step(self, step_name: str, func: Callable, *args):
        """Run a pipeline step, wrapping any failure in PipelineStepError."""
        try:
            return func(*args)
        except InspectionReportError as e:
            raise PipelineStepError(step_name, e) from e
        except Exception as e:
            logger.exception("Unexpected error in step %r", step_name)
            raise PipelineStepError(step_name, e) from e

    def _fetch_chart(self, report: MonthlyReport) -> Optional[bytes]:
        """Fetch the monthly supervisions chart.

        Returns:
            PNG bytes, or None if the chart is disabled, has no data, or the
            chart service failed
        """
        if not self.options.include_chart or not report.monthly_totals:
            return None

        self.progress(PROGRESS_STEPS["CHART"], "Obteniendo gráfico...")
        labels = [value.month.capitalize() for value in report.monthly_totals]
        values = [value.total_supervisions for value in report.monthly_totals]
        try:
            return self.chart_client.fetch_bar_chart(CHART_TITLE, labels, values)
        except ChartError as e:
            logger.warning("Chart unavailable, drawing placeholder: %s", e)
            return None


def render_report(payload: Any, options: Optional[RenderOptions] = None) -> RenderResult:
    """
    Helper function to run the pipeline once.

    Args:
        payload: Decoded JSON request body
        options: Render options (default RenderOptions())

    Returns:
        RenderResult
    """
    return ReportPipeline(options).process(payload)
