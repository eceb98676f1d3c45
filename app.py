"""Inspection Report Generator - Main Application

Gradio application for generating the monthly regional inspection report PDF
from a JSON payload.
"""
import json
import logging
import os

import gradio as gr
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from inspection_report import ReportPipeline, RenderOptions
from inspection_report.exceptions import InvalidConfigurationError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Render options come from REPORT_FONTS_DIR, REPORT_IMAGES_DIR, CHART_SERVICE_URL, ...
try:
    render_options = RenderOptions.from_env()
except InvalidConfigurationError as e:
    logger.warning("Invalid render configuration (%s); using defaults", e)
    render_options = RenderOptions()


def load_payload(json_text: str, json_file) -> dict:
    """
    Read the report payload from the uploaded file or the text box.

    Args:
        json_text: JSON pasted in the text box
        json_file: Path of an uploaded .json file (takes precedence)

    Returns:
        Decoded payload

    Raises:
        gr.Error: If no JSON was provided or it cannot be decoded
    """
    if json_file:
        with open(json_file, "r", encoding="utf-8") as f:
            json_text = f.read()

    if not json_text or not json_text.strip():
        raise gr.Error("Ingrese o cargue un JSON con los datos del informe.")

    try:
        return json.loads(json_text)
    except json.JSONDecodeError as e:
        raise gr.Error(f"JSON inválido: {e}")


def generate_report(json_text: str, json_file, include_chart: bool, progress=gr.Progress()) -> tuple:
    """
    Generate the report PDF from the UI inputs.

    Args:
        json_text: JSON pasted in the text box
        json_file: Uploaded .json file path or None
        include_chart: If True, request the monthly supervisions chart
        progress: Gradio progress tracker

    Returns:
        Tuple of (output PDF path, summary table update, status message)
    """
    payload = load_payload(json_text, json_file)

    options = RenderOptions(
        fonts_dir=render_options.fonts_dir,
        images_dir=render_options.images_dir,
        include_chart=include_chart,
        chart_service_url=render_options.chart_service_url,
        chart_timeout=render_options.chart_timeout,
        invariant=render_options.invariant,
    )
    pipeline = ReportPipeline(
        options,
        progress_callback=lambda p, desc: progress(p, desc=desc),
    )
    result = pipeline.process(payload)

    if result.chart_placeholder and include_chart:
        gr.Warning("No fue posible obtener el gráfico; se incluyó un marcador en su lugar.")

    return result.to_gradio_outputs()


with gr.Blocks(title="Informe técnico mensual") as app:
    gr.Markdown("# 📄 Informe técnico mensual")

    gr.Markdown("""
    Genera el informe mensual de supervisiones de una región en PDF a partir de sus datos en JSON.
    """)

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Datos del informe")

            json_input = gr.Code(
                label="JSON del informe",
                language="json",
                lines=20,
            )

            json_file = gr.File(
                label="O cargue un archivo .json",
                file_types=[".json"],
                type="filepath",
            )

            gr.Markdown("---")
            gr.Markdown("### ⚙️ Opciones")

            include_chart = gr.Checkbox(
                label="Incluir gráfico de supervisiones por mes",
                value=render_options.include_chart,
                info="Requiere acceso al servicio de gráficos. Si falla, se incluye un marcador.",
            )

        with gr.Column():
            gr.Markdown("## Resultado")

            generate_btn = gr.Button(
                "📝 Generar PDF",
                variant="primary",
                size="lg",
            )

            main_status = gr.Textbox(
                label="Estado",
                interactive=False,
                visible=True,
            )

            output_file = gr.File(
                label="📥 Descargar PDF",
                type="filepath",
                visible=False,
            )

            summary_table = gr.DataFrame(
                headers=["Sección", "Campo", "Valor"],
                interactive=False,
                wrap=True,
                label="Vista previa de las tablas",
                visible=False,
            )

    generate_btn.click(
        fn=generate_report,
        inputs=[json_input, json_file, include_chart],
        outputs=[output_file, summary_table, main_status],
    ).then(
        fn=lambda final: gr.update(visible=final is not None),
        inputs=[output_file],
        outputs=[output_file],
    )


if __name__ == "__main__":
    app.launch(ssr_mode=False)  # Disable SSR to fix DataFrame rendering issues
