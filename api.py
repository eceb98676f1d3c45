"""Inspection Report Generator - HTTP API

FastAPI service exposing the report pipeline at POST /api/create-pdf, with the
Gradio UI mounted at /ui.

Run with:
    uvicorn api:api --host 0.0.0.0 --port 3000
"""
import json
import logging
import os

import gradio as gr
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

# Load environment variables
load_dotenv()

from inspection_report import ReportPipeline, RenderOptions
from inspection_report.exceptions import InvalidConfigurationError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

api = FastAPI(title="Inspection Report API", version="1.0.0")

api.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def get_render_options() -> RenderOptions:
    """Render options from the environment, falling back to defaults when invalid."""
    try:
        return RenderOptions.from_env()
    except InvalidConfigurationError as e:
        logger.warning("Invalid render configuration (%s); using defaults", e)
        return RenderOptions()


def create_pipeline() -> ReportPipeline:
    """Pipeline factory, one per request."""
    return ReportPipeline(get_render_options())


@api.get("/")
async def root():
    return RedirectResponse(url="/ui")


@api.post("/api/create-pdf")
async def create_pdf(request: Request):
    """
    Render the monthly report for the JSON body.

    Returns:
        application/pdf attachment on success; JSON {"error": ...} with status
        400 for an invalid payload or 500 when rendering failed
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Rejected request with malformed JSON: %s", e)
        return JSONResponse(status_code=400, content={"error": f"JSON inválido: {e}"})

    # The pipeline blocks on the chart request and on layout
    result = await run_in_threadpool(create_pipeline().process, payload)

    if result.is_invalid:
        return JSONResponse(status_code=400, content={"error": result.error})
    if not result.is_complete:
        logger.error("Error al generar el PDF: %s", result.error)
        return JSONResponse(status_code=500, content={"error": "Error al generar el PDF"})

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Page-Count": str(result.page_count),
        },
    )


def mount_ui(app: FastAPI) -> FastAPI:
    """Mount the Gradio UI defined in app.py at /ui."""
    from app import app as report_ui
    return gr.mount_gradio_app(app, report_ui, path="/ui")


if os.getenv("MOUNT_GRADIO_UI", "true").strip().lower() in ("1", "true", "yes", "on"):
    api = mount_ui(api)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(api, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
