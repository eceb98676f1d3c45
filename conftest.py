# Tests configuration for the inspection report renderer
import io
import os
import sys
from unittest.mock import MagicMock

import pytest
from PIL import Image
from pypdf import PdfReader

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from inspection_report import ChartClient, RenderOptions
from inspection_report.exceptions import ChartFetchError


def make_words(count: int, stem: str = "comentariogeneral") -> str:
    """Space-separated numbered words, long enough that 300 of them fill more than a page."""
    return " ".join(f"{stem}{i:03d}" for i in range(1, count + 1))


@pytest.fixture
def v2_payload():
    """Nested (schema version 2) payload with every section filled in."""
    return {
        "mes": 3,
        "region": 3,
        "datosGenerales": {
            "encontrados": 120,
            "ausentes": 4,
            "renuncias": 2,
            "desvinculados": 1,
            "fallecidos": 0,
            "totalCuposEjecutados": 118,
            "totalSupervisionesTerreno": 30,
            "totalSupervisionesOficina": 12,
            "totalSupervisiones": 42,
        },
        "cuposDisponibles": 125,
        "porcentajeCuposEjecutados": 94.4,
        "listadoBeneficiarios": "https://example.org/listado.xlsx",
        "supervisionTerreno": {
            "soportePapelTerreno": 5,
            "asistencia": {
                "libroAsistencia": 30,
                "firmaLibro": 29,
                "presencia": 28,
                "horariosFirma": 27,
                "funcionContrato": 30,
                "observaciones": "Dos trabajadores sin firma del día anterior.",
            },
            "condicionesTrabajo": {
                "recibeEpp": 30,
                "eppAdecuados": 30,
                "utilizaEpp": 26,
                "insumosAdecuados": 30,
                "condicionesLaboralesAdecuadas": True,
                "charla": False,
            },
            "supervisionEjecutora": {"supervisionEjecutora": 12},
        },
        "supervisionOficina": {
            "requisitos": {
                "cedulaIdentidad": 12,
                "declaracionCesantia": 12,
                "rsh": 11,
                "certificadoCotizaciones": 12,
            },
            "revisionContrato": {
                "debidamenteFirmado": 12,
                "horarios": 12,
                "direccionLugarTrabajo": 12,
                "funcionTrabajo": 12,
            },
            "obligacionesLaborales": {
                "actaEpp": 12,
                "actaInsumos": 12,
                "liquidacionesSueldos": 12,
                "comprobantePagosPrevisionales": 11,
                "registroSupervisiones": 12,
                "registroAsistencia": 12,
            },
        },
        "avanceProyectos": "Los proyectos avanzan según lo planificado.",
        "comentariosGenerales": "Sin novedades relevantes en el periodo.",
        "comentariosSupervision": "Se reforzó el uso de EPP en terreno.",
        "otrosMeses": [
            {"mes": 1, "totalSupervisiones": 35},
            {"mes": "febrero", "totalSupervisiones": 38},
        ],
        "firmante": "María González",
        "cargo": "Supervisora Regional",
    }


@pytest.fixture
def v1_payload():
    """Legacy flat (schema version 1) payload."""
    return {
        "mes": "Marzo",
        "region": "Atacama",
        "ejecutora": "Municipalidad de Copiapó",
        "folios": "1001-1050",
        "decreto": "Decreto 123",
        "encontradas": 45,
        "ausentes": 3,
        "renuncias": 1,
        "fallecidos": 0,
        "fiscalizados": 40,
        "total": 49,
        "epp": "si",
        "eppObserva": "",
        "usoEpp": "no",
        "usoEppObserva": "Tres trabajadores sin casco.",
        "libroAsistencia": True,
        "libroAsistenciaObserva": "",
        "listado": "https://example.org/listado.xlsx",
        "comentariosGenerales": "Periodo sin incidentes.",
        "comentariosFiscalizacion": "",
        "firmante": "Juan Pérez",
        "cargo": "Fiscalizador",
    }


@pytest.fixture
def long_comment():
    """300-word general comment."""
    return make_words(300)


@pytest.fixture
def offline_options():
    """Render options that never reach the network and produce byte-stable PDFs."""
    return RenderOptions(include_chart=False, invariant=True)


@pytest.fixture
def chart_png():
    """Small valid PNG standing in for a chart image."""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), color=(15, 105, 180)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def working_chart_client(chart_png):
    """Chart client double that always returns chart_png."""
    client = MagicMock(spec=ChartClient)
    client.fetch_bar_chart.return_value = chart_png
    return client


@pytest.fixture
def failing_chart_client():
    """Chart client double whose requests always fail."""
    client = MagicMock(spec=ChartClient)
    client.fetch_bar_chart.side_effect = ChartFetchError(
        "https://quickchart.io/chart", "timed out after 10.0 seconds"
    )
    return client


@pytest.fixture
def pdf_pages():
    """Return a function extracting the text of each page of a PDF."""
    def extract(pdf_bytes: bytes):
        reader = PdfReader(io.BytesIO(pdf_bytes))
        return [page.extract_text() or "" for page in reader.pages]
    return extract


@pytest.fixture
def pdf_image_count():
    """Return a function counting the distinct image XObjects used by the pages of a PDF."""
    def count(pdf_bytes: bytes) -> int:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        images = set()
        for page in reader.pages:
            resources = page.get("/Resources")
            if resources is None:
                continue
            xobjects = resources.get_object().get("/XObject")
            if xobjects is None:
                continue
            for name, ref in xobjects.get_object().items():
                if ref.get_object().get("/Subtype") == "/Image":
                    images.add(getattr(ref, "idnum", name))
        return len(images)
    return count
