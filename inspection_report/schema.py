"""Payload Schema Module

Pydantic models for the two accepted report payload shapes:
- ReportPayloadV1: legacy flat payload (encontradas, epp/eppObserva, ... at the top level)
- ReportPayloadV2: nested payload (datosGenerales, supervisionTerreno, supervisionOficina)

The supervision group and legacy checklist models are generated from the
field tables in report_content, so adding an item there is enough for it to
be accepted and coerced here.
"""
import unicodedata
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Type, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    FiniteFloat,
    StrictBool,
    create_model,
    field_validator,
)

from .config import MONTH_NAMES, REGION_NAMES
from .report_content import (
    FIELD_PAPER_SUPPORT,
    OFFICE_PAPER_SUPPORT,
    FIELD_SUPERVISION_GROUPS,
    OFFICE_SUPERVISION_GROUPS,
    LEGACY_IDENTIFICATION_FIELDS,
    LEGACY_GENERAL_DATA_FIELDS,
    LEGACY_CHECKLIST_FIELDS,
)

SUPPORTED_SCHEMA_VERSIONS = (1, 2)


def fold(text: str) -> str:
    """Lower-case and strip accents, for lenient name matching."""
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _count_input(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("debe ser numérico, no sí/no")
    return _blank_to_none(value)


def _flag_input(value: Any) -> Any:
    value = _blank_to_none(value)
    if isinstance(value, str):
        folded = fold(value)
        if folded in ("si", "cumple"):
            return True
        if folded == "no cumple":
            return False
    return value


def _text_input(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _percentage_input(value: Any) -> Any:
    value = _blank_to_none(value)
    if isinstance(value, str):
        return value.strip().rstrip("%").strip()
    return value


# Numeric count; "" and null mean "not reported" and render as "-"
Count = Annotated[Optional[int], BeforeValidator(_count_input)]
# Legacy compliance flag: si/sí/no, true/false, 1/0, cumple/no cumple
Flag = Annotated[Optional[bool], BeforeValidator(_flag_input)]
# Supervision items are counts, except a few that arrive as booleans
SupervisionValue = Annotated[Optional[Union[StrictBool, int]], BeforeValidator(_blank_to_none)]
Text = Annotated[Optional[str], BeforeValidator(_text_input)]
Percentage = Annotated[Optional[FiniteFloat], BeforeValidator(_percentage_input)]
MonthNumber = Annotated[int, Field(ge=1, le=12)]


def parse_month(value: Any) -> Any:
    """
    Resolve a month name to its number; numbers are left to the int field.

    Args:
        value: 3, "3", "03", "Marzo" or "marzo"

    Returns:
        Month number, or the value unchanged for pydantic to coerce

    Raises:
        ValueError: If the value is a boolean, empty or an unknown month name
    """
    if value is None or isinstance(value, bool):
        raise ValueError("debe ser un número entre 1 y 12 o el nombre de un mes")
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdecimal():
            return int(stripped)
        folded = fold(stripped)
        for number, name in MONTH_NAMES.items():
            if folded == fold(name):
                return number
        raise ValueError("debe ser un número entre 1 y 12 o el nombre de un mes")
    return value


class PayloadModel(BaseModel):
    """Base for payload models: unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")


class SchemaTag(PayloadModel):
    schemaVersion: Optional[int] = None


class MonthTotal(PayloadModel):
    """One entry of "otrosMeses"; "total" is accepted as an alias."""
    mes: MonthNumber
    totalSupervisiones: Count = Field(
        default=None,
        validation_alias=AliasChoices("totalSupervisiones", "total"),
    )

    @field_validator("mes", mode="before")
    @classmethod
    def validate_month(cls, v):
        return parse_month(v)


class ReportPayloadBase(PayloadModel):
    """Fields shared by every schema version."""
    schema_version: ClassVar[int] = 0

    mes: MonthNumber
    region: str
    firmante: str
    cargo: str

    @field_validator("mes", mode="before")
    @classmethod
    def validate_month(cls, v):
        return parse_month(v)

    @field_validator("region", mode="before")
    @classmethod
    def validate_region(cls, v):
        """Resolve a region code (1-16) to its display name; free-text names pass through."""
        if v is None or isinstance(v, bool):
            raise ValueError("es requerido")
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        if isinstance(v, str) and v.strip().isdecimal():
            v = int(v.strip())
        if isinstance(v, int):
            if v not in REGION_NAMES:
                raise ValueError(f"tiene un código desconocido: {v}")
            return REGION_NAMES[v]
        if isinstance(v, str):
            name = v.strip()
            if not name:
                raise ValueError("es requerido")
            if not any(ch.isalpha() for ch in name):
                raise ValueError("debe ser un código de región (1-16) o un nombre")
            return name
        raise ValueError("debe ser un código de región (1-16) o un nombre")

    @field_validator("firmante", "cargo", mode="before")
    @classmethod
    def validate_signature(cls, v):
        v = _text_input(v)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("es requerido")
        return v


def _group_model(name: str, items) -> Type[BaseModel]:
    fields: Dict[str, Any] = {item_key: (SupervisionValue, None) for item_key, _ in items}
    fields["observaciones"] = (Text, None)
    return create_model(name, __base__=PayloadModel, **fields)


def _section_model(name: str, paper_support, group_definitions) -> Type[BaseModel]:
    paper_support_key, _ = paper_support
    fields: Dict[str, Any] = {paper_support_key: (Count, None)}
    for key, _title, items in group_definitions:
        group = _group_model(f"{name}_{key}", items)
        fields[key] = (Optional[group], None)
    return create_model(name, __base__=PayloadModel, **fields)


FieldSupervision = _section_model("FieldSupervision", FIELD_PAPER_SUPPORT, FIELD_SUPERVISION_GROUPS)
OfficeSupervision = _section_model("OfficeSupervision", OFFICE_PAPER_SUPPORT, OFFICE_SUPERVISION_GROUPS)


class GeneralData(PayloadModel):
    """datosGenerales: the first five counts must be present (null allowed)."""
    encontrados: Count
    ausentes: Count
    renuncias: Count
    fallecidos: Count
    totalSupervisiones: Count
    desvinculados: Count = None
    totalCuposEjecutados: Count = None
    totalSupervisionesTerreno: Count = None
    totalSupervisionesOficina: Count = None


class ReportPayloadV2(ReportPayloadBase):
    schema_version: ClassVar[int] = 2

    datosGenerales: GeneralData
    supervisionTerreno: FieldSupervision
    supervisionOficina: OfficeSupervision
    comentariosGenerales: Text
    otrosMeses: List[MonthTotal]
    cuposDisponibles: Count = None
    porcentajeCuposEjecutados: Percentage = None
    listadoBeneficiarios: Text = None
    avanceProyectos: Text = None
    comentariosSupervision: Text = None
    comentariosFiscalizacion: Text = None


def _legacy_model() -> Type[ReportPayloadBase]:
    fields: Dict[str, Any] = {
        "listado": (Text, None),
        "comentariosGenerales": (Text, None),
        "comentariosFiscalizacion": (Text, None),
        "otrosMeses": (List[MonthTotal], Field(default_factory=list)),
    }
    fields.update({key: (Text, None) for key, _ in LEGACY_IDENTIFICATION_FIELDS})
    fields.update({key: (Count, None) for key, _ in LEGACY_GENERAL_DATA_FIELDS})
    for flag_key, observation_key, _ in LEGACY_CHECKLIST_FIELDS:
        fields[flag_key] = (Flag, None)
        fields[observation_key] = (Text, None)
    return create_model("LegacyPayload", __base__=ReportPayloadBase, **fields)


class ReportPayloadV1(_legacy_model()):
    schema_version: ClassVar[int] = 1


ReportPayload = Union[ReportPayloadV1, ReportPayloadV2]

PAYLOAD_MODELS: Dict[int, Type[ReportPayloadBase]] = {
    1: ReportPayloadV1,
    2: ReportPayloadV2,
}
