"""Tests for request payload validation."""
import pytest

from inspection_report.exceptions import (
    InvalidFieldError,
    MissingFieldError,
    ValidationError,
)
from inspection_report.schema import ReportPayloadV1, ReportPayloadV2
from inspection_report.validation import validate_request_body


def test_valid_payloads_return_parsed_models(v2_payload, v1_payload):
    assert isinstance(validate_request_body(v2_payload), ReportPayloadV2)
    assert isinstance(validate_request_body(v1_payload), ReportPayloadV1)


def test_body_must_be_an_object():
    with pytest.raises(ValidationError):
        validate_request_body(["mes", "region"])


def test_missing_top_level_fields_are_listed(v2_payload):
    del v2_payload["firmante"]
    del v2_payload["otrosMeses"]

    with pytest.raises(MissingFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert set(exc_info.value.fields) == {"otrosMeses", "firmante"}
    assert exc_info.value.parent is None
    assert "firmante" in str(exc_info.value)


def test_missing_general_data_fields(v2_payload):
    del v2_payload["datosGenerales"]["totalSupervisiones"]

    with pytest.raises(MissingFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.parent == "datosGenerales"
    assert exc_info.value.fields == ["totalSupervisiones"]


def test_supervision_sections_must_be_objects(v2_payload):
    v2_payload["supervisionOficina"] = "no aplica"

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "supervisionOficina"


def test_other_months_must_be_a_list(v2_payload):
    v2_payload["otrosMeses"] = {"mes": 1}

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "otrosMeses"
    assert "arreglo" in str(exc_info.value)


@pytest.mark.parametrize("month", [0, 13, "treceavo", 2.5, True, None])
def test_invalid_month(v1_payload, month):
    v1_payload["mes"] = month

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v1_payload)

    assert exc_info.value.field == "mes"


@pytest.mark.parametrize("region", [0, 17, "", None])
def test_invalid_region(v1_payload, region):
    v1_payload["region"] = region

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v1_payload)

    assert exc_info.value.field == "region"


def test_unsupported_schema_version(v2_payload):
    v2_payload["schemaVersion"] = 3

    with pytest.raises(ValidationError, match="no soportada"):
        validate_request_body(v2_payload)


def test_explicit_schema_version_overrides_inference(v1_payload):
    v1_payload["schemaVersion"] = 2

    with pytest.raises(MissingFieldError):
        validate_request_body(v1_payload)


def test_other_months_entries_are_located(v2_payload):
    v2_payload["otrosMeses"][1]["totalSupervisiones"] = "treinta"

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "otrosMeses[1].totalSupervisiones"
    assert "numérico" in str(exc_info.value)


@pytest.mark.parametrize("region", ["²", "١٧", "--", 3.5, float("nan"), ["Atacama"]])
def test_region_rejects_non_region_values(v1_payload, region):
    v1_payload["region"] = region

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v1_payload)

    assert exc_info.value.field == "region"


@pytest.mark.parametrize("month", [float("inf"), float("nan"), "²", [3]])
def test_month_rejects_non_finite_and_odd_values(v2_payload, month):
    v2_payload["mes"] = month

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "mes"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), 12.5, [120], {"n": 1}])
def test_general_data_counts_must_be_integers(v2_payload, value):
    v2_payload["datosGenerales"]["encontrados"] = value

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "datosGenerales.encontrados"


@pytest.mark.parametrize("value", [[94], {"valor": 94}, float("nan"), "mucho"])
def test_percentage_must_be_a_finite_number(v2_payload, value):
    v2_payload["porcentajeCuposEjecutados"] = value

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "porcentajeCuposEjecutados"


def test_supervision_items_accept_counts_and_booleans(v2_payload):
    v2_payload["supervisionTerreno"]["asistencia"]["presencia"] = "no sabe"

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "supervisionTerreno.asistencia.presencia"


def test_signer_must_not_be_blank(v2_payload):
    v2_payload["firmante"] = "   "

    with pytest.raises(InvalidFieldError) as exc_info:
        validate_request_body(v2_payload)

    assert exc_info.value.field == "firmante"
    assert "requerido" in str(exc_info.value)
