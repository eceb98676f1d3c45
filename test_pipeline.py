"""End-to-end tests for the report pipeline."""
from unittest.mock import patch

import pytest
import requests

from inspection_report import RenderOptions, ReportPipeline, render_report
from inspection_report.config import PROGRESS_STEPS


def find_page(pages, text):
    for index, page_text in enumerate(pages):
        if text in page_text:
            return index
    return None


def test_long_comment_spans_pages(v2_payload, long_comment, working_chart_client, pdf_pages, pdf_image_count):
    v2_payload["comentariosGenerales"] = long_comment
    pipeline = ReportPipeline(RenderOptions(invariant=True), chart_client=working_chart_client)

    result = pipeline.process(v2_payload)

    assert result.is_complete, result.error
    assert result.page_count >= 2
    assert result.filename == "Atacama_marzo.pdf"

    pages = pdf_pages(result.pdf_bytes)
    assert len(pages) == result.page_count
    assert "marzo" in pages[0]
    assert "Atacama" in pages[0]

    first = find_page(pages, "comentariogeneral001")
    last = find_page(pages, "comentariogeneral300")
    assert first is not None and last is not None
    assert first < last
    assert "Comentarios generales (continuaci" in pages[last]

    working_chart_client.fetch_bar_chart.assert_called_once()
    _, labels, values = working_chart_client.fetch_bar_chart.call_args[0]
    assert labels == ["Enero", "Febrero", "Marzo"]
    assert values == [35, 38, 42]
    assert result.chart_placeholder is False
    assert pdf_image_count(result.pdf_bytes) == 1


def test_chart_failure_draws_placeholder(v2_payload, failing_chart_client, pdf_pages):
    pipeline = ReportPipeline(RenderOptions(invariant=True), chart_client=failing_chart_client)

    result = pipeline.process(v2_payload)

    assert result.is_complete
    assert result.chart_placeholder is True
    text = "\n".join(pdf_pages(result.pdf_bytes))
    assert "no disponible" in text
    assert "Supervisiones realizadas por mes" in text


def test_chart_disabled_skips_chart_service(v2_payload, failing_chart_client, pdf_pages):
    options = RenderOptions(include_chart=False, invariant=True)

    result = ReportPipeline(options, chart_client=failing_chart_client).process(v2_payload)

    assert result.is_complete
    failing_chart_client.fetch_bar_chart.assert_not_called()
    assert "Supervisiones realizadas por mes" not in "\n".join(pdf_pages(result.pdf_bytes))


def test_rendering_is_idempotent(v2_payload, long_comment, offline_options, pdf_pages):
    v2_payload["comentariosGenerales"] = long_comment

    first = render_report(v2_payload, offline_options)
    second = render_report(v2_payload, offline_options)

    assert first.page_count == second.page_count
    assert pdf_pages(first.pdf_bytes) == pdf_pages(second.pdf_bytes)
    assert first.pdf_bytes == second.pdf_bytes


def test_legacy_payload_renders(v1_payload, offline_options, pdf_pages):
    result = render_report(v1_payload, offline_options)

    assert result.is_complete, result.error
    text = "\n".join(pdf_pages(result.pdf_bytes))
    assert "1001-1050" in text
    assert "sin casco." in text
    assert "Juan P" in text


def test_every_page_has_a_page_number(v2_payload, long_comment, offline_options, pdf_pages):
    v2_payload["comentariosGenerales"] = long_comment

    pages = pdf_pages(render_report(v2_payload, offline_options).pdf_bytes)

    for number, text in enumerate(pages, start=1):
        assert f"gina {number}" in text


def test_empty_comments_render_placeholder_text(v2_payload, offline_options, pdf_pages):
    v2_payload["comentariosGenerales"] = ""

    result = render_report(v2_payload, offline_options)

    assert "Sin comentarios." in "\n".join(pdf_pages(result.pdf_bytes))


def test_invalid_payload_returns_invalid_result(v2_payload, offline_options):
    del v2_payload["datosGenerales"]["encontrados"]

    result = render_report(v2_payload, offline_options)

    assert result.is_invalid
    assert result.pdf_bytes is None
    assert "encontrados" in result.error


def test_asset_failure_returns_failed_result(v2_payload, tmp_path):
    options = RenderOptions(fonts_dir=str(tmp_path), include_chart=False)

    result = render_report(v2_payload, options)

    assert result.is_failed
    assert result.pdf_bytes is None
    assert "gobCL_Regular" in result.error


def test_progress_callback_reports_each_step(v2_payload, offline_options):
    updates = []
    pipeline = ReportPipeline(offline_options, progress_callback=lambda p, desc: updates.append(p))

    pipeline.process(v2_payload)

    assert updates[0] == PROGRESS_STEPS["VALIDATE"]
    assert updates[-1] == PROGRESS_STEPS["COMPLETE"]
    assert updates == sorted(updates)


def test_summary_dataframe_lists_table_rows(v2_payload, offline_options):
    result = render_report(v2_payload, offline_options)

    df = result.summary_dataframe
    assert list(df.columns) == ["Sección", "Campo", "Valor"]
    total = df[(df["Sección"] == "Datos generales") & (df["Campo"] == "Total supervisiones")]
    assert total["Valor"].tolist() == ["42"]


def test_save_pdf_uses_download_filename(v2_payload, offline_options, tmp_path):
    result = render_report(v2_payload, offline_options)

    path = result.save_pdf(str(tmp_path))

    assert path == str(tmp_path / "Atacama_marzo.pdf")
    assert (tmp_path / "Atacama_marzo.pdf").read_bytes() == result.pdf_bytes


def _set_region(payload):
    payload["region"] = "²"


def _set_nan_count(payload):
    payload["datosGenerales"]["encontrados"] = float("nan")


def _set_list_percentage(payload):
    payload["porcentajeCuposEjecutados"] = [94]


def _set_infinite_month(payload):
    payload["mes"] = float("inf")


@pytest.mark.parametrize("mutate, field", [
    (_set_region, "region"),
    (_set_nan_count, "datosGenerales.encontrados"),
    (_set_list_percentage, "porcentajeCuposEjecutados"),
    (_set_infinite_month, "mes"),
])
def test_malformed_values_are_rejected_not_raised(v2_payload, offline_options, mutate, field):
    mutate(v2_payload)

    result = render_report(v2_payload, offline_options)

    assert result.is_invalid
    assert result.pdf_bytes is None
    assert f"'{field}'" in result.error


def test_unreachable_chart_service_draws_placeholder(v2_payload, pdf_pages, pdf_image_count):
    options = RenderOptions(invariant=True)

    with patch("inspection_report.chart_client.requests.post",
               side_effect=requests.ConnectionError("connection refused")) as post:
        result = ReportPipeline(options).process(v2_payload)

    post.assert_called_once()
    assert result.is_complete, result.error
    assert result.chart_placeholder is True
    assert "no disponible" in "\n".join(pdf_pages(result.pdf_bytes))
    assert pdf_image_count(result.pdf_bytes) == 0
