"""Inspection Report Package

Generates the monthly regional inspection report PDF from a JSON payload.
"""
from .render_options import RenderOptions
from .render_result import RenderResult
from .pipeline import ReportPipeline, render_report
from .validation import validate_request_body
from .report_data import MonthlyReport, normalize_payload
from .chart_client import ChartClient

__all__ = [
    'RenderOptions',
    'RenderResult',
    'ReportPipeline',
    'render_report',
    'validate_request_body',
    'MonthlyReport',
    'normalize_payload',
    'ChartClient',
]
