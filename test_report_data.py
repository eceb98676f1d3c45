"""Tests for payload normalization into MonthlyReport."""
import pytest

from inspection_report.exceptions import InvalidFieldError
from inspection_report.report_data import MonthlyValue, normalize_payload
from inspection_report.schema import MonthTotal, ReportPayloadV1
from inspection_report.validation import detect_schema_version


@pytest.mark.parametrize("value, expected", [
    (3, "marzo"),
    ("3", "marzo"),
    ("03", "marzo"),
    ("Marzo", "marzo"),
    ("SEPTIEMBRE", "septiembre"),
    (12.0, "diciembre"),
])
def test_month_accepts_numbers_and_names(v1_payload, value, expected):
    v1_payload["mes"] = value

    assert normalize_payload(v1_payload).month == expected


@pytest.mark.parametrize("value, expected", [
    (3, "Atacama"),
    ("16", "Ñuble"),
    (16.0, "Ñuble"),
    ("Región de Prueba", "Región de Prueba"),
    ("  Atacama ", "Atacama"),
])
def test_region_accepts_codes_and_names(v1_payload, value, expected):
    v1_payload["region"] = value

    assert normalize_payload(v1_payload).region == expected


def test_detect_schema_version():
    assert detect_schema_version({"datosGenerales": {}}) == 2
    assert detect_schema_version({"encontradas": 1}) == 1
    assert detect_schema_version({"schemaVersion": "1", "datosGenerales": {}}) == 1


def test_counts_are_coerced(v1_payload):
    v1_payload.update({"encontradas": "42", "ausentes": 7.0, "renuncias": None, "fallecidos": ""})

    payload = ReportPayloadV1.model_validate(v1_payload)

    assert payload.encontradas == 42
    assert payload.ausentes == 7
    assert payload.renuncias is None
    assert payload.fallecidos is None


@pytest.mark.parametrize("value", ["muchos", True, 7.5])
def test_counts_reject_non_integers(v1_payload, value):
    v1_payload["encontradas"] = value

    with pytest.raises(InvalidFieldError) as exc_info:
        normalize_payload(v1_payload)

    assert exc_info.value.field == "encontradas"


@pytest.mark.parametrize("value, expected", [
    ("si", True),
    ("Sí", True),
    ("no", False),
    ("No cumple", False),
    (True, True),
    (0, False),
    (None, None),
])
def test_flags_are_coerced(v1_payload, value, expected):
    v1_payload["epp"] = value

    assert ReportPayloadV1.model_validate(v1_payload).epp is expected


def test_flags_reject_unknown_values(v1_payload):
    v1_payload["epp"] = "tal vez"

    with pytest.raises(InvalidFieldError) as exc_info:
        normalize_payload(v1_payload)

    assert exc_info.value.field == "epp"
    assert "sí/no" in str(exc_info.value)


def test_month_total_accepts_total_alias():
    entry = MonthTotal.model_validate({"mes": "Enero", "total": 35})

    assert entry.mes == 1
    assert entry.totalSupervisiones == 35


def test_percentage_accepts_percent_suffix(v2_payload):
    v2_payload["porcentajeCuposEjecutados"] = "80%"

    quotas = {row.label: row.value for row in normalize_payload(v2_payload).quota_rows}

    assert quotas["Porcentaje de cupos ejecutados"] == "80%"


def test_normalize_v2(v2_payload):
    report = normalize_payload(v2_payload)

    assert report.schema_version == 2
    assert report.month == "marzo"
    assert report.region == "Atacama"
    assert report.signer == "María González"
    assert report.position == "Supervisora Regional"

    general = {row.label: row.value for row in report.general_rows}
    assert general["Beneficiarias/os activas/os"] == 120
    assert general["Total supervisiones"] == 42
    assert len(report.general_rows) == 9

    quotas = {row.label: row.value for row in report.quota_rows}
    assert quotas == {"Cupos disponibles": 125, "Porcentaje de cupos ejecutados": "94.4%"}

    assert [group.key for group in report.field_groups] == [
        "asistencia", "condicionesTrabajo", "supervisionEjecutora",
    ]
    assert [group.key for group in report.office_groups] == [
        "requisitos", "revisionContrato", "obligacionesLaborales",
    ]

    attendance = report.field_groups[0]
    assert attendance.rows[0].label == "Supervisiones con soporte en papel"
    assert attendance.rows[0].value == 5
    assert attendance.observations == "Dos trabajadores sin firma del día anterior."

    conditions = {row.label: row.value for row in report.field_groups[1].rows}
    assert conditions["Condiciones laborales adecuadas"] is True
    assert conditions["Recibió charla de seguridad"] is False

    assert report.beneficiaries_url == "https://example.org/listado.xlsx"
    assert report.supervision_comments == "Se reforzó el uso de EPP en terreno."
    assert report.monthly_totals == [
        MonthlyValue("enero", 35),
        MonthlyValue("febrero", 38),
        MonthlyValue("marzo", 42),
    ]


def test_normalize_v2_missing_items_render_as_empty(v2_payload):
    v2_payload["supervisionOficina"] = {}

    report = normalize_payload(v2_payload)

    assert len(report.office_groups) == 3
    assert all(row.value is None for group in report.office_groups for row in group.rows)


def test_normalize_v2_rejects_non_numeric_counts(v2_payload):
    v2_payload["datosGenerales"]["ausentes"] = "varios"

    with pytest.raises(InvalidFieldError) as exc_info:
        normalize_payload(v2_payload)

    assert exc_info.value.field == "datosGenerales.ausentes"


def test_normalize_v1(v1_payload):
    report = normalize_payload(v1_payload)

    assert report.schema_version == 1
    assert report.month == "marzo"
    assert report.region == "Atacama"

    identification = {row.label: row.value for row in report.identification}
    assert identification["Folios"] == "1001-1050"
    assert identification["Decreto/s"] == "Decreto 123"

    general = {row.label: row.value for row in report.general_rows}
    assert general["Beneficiarias/os activas/os"] == 45
    assert general["Total beneficiarias/os"] == 49

    assert len(report.field_groups) == 1
    checklist = report.field_groups[0]
    assert [row.value for row in checklist.rows] == [True, False, True]
    assert checklist.observations == (
        "Uso de elementos de protección personal: Tres trabajadores sin casco."
    )

    assert report.beneficiaries_url == "https://example.org/listado.xlsx"
    assert report.office_groups == []
    assert report.monthly_totals == [MonthlyValue("marzo", 40)]


def test_all_tables_in_document_order(v1_payload):
    report = normalize_payload(v1_payload)

    titles = [title for title, _ in report.all_tables()]

    assert titles == ["Identificación", "Datos generales", "Fiscalización"]
