"""Report Data Module

Normalizes the report payload into one stable internal representation.

Two payload shapes are accepted, tagged by "schemaVersion" (see schema.py):
- 1: legacy flat payload (encontradas, epp/eppObserva, ... at the top level)
- 2: nested payload (datosGenerales, supervisionTerreno, supervisionOficina)

When the tag is absent the version is inferred from the presence of
"datosGenerales". Everything downstream (report builder, layout engine) only
sees MonthlyReport.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from .config import MONTH_NAMES
from .utils import format_percentage
from .schema import MonthTotal, ReportPayload, ReportPayloadBase, ReportPayloadV1, ReportPayloadV2
from .validation import validate_request_body
from .report_content import (
    GENERAL_DATA_FIELDS,
    QUOTA_FIELDS,
    FIELD_PAPER_SUPPORT,
    OFFICE_PAPER_SUPPORT,
    FIELD_SUPERVISION_GROUPS,
    OFFICE_SUPERVISION_GROUPS,
    LEGACY_IDENTIFICATION_FIELDS,
    LEGACY_GENERAL_DATA_FIELDS,
    LEGACY_CHECKLIST_FIELDS,
    LEGACY_CHECKLIST_TITLE,
)


@dataclass
class TableRow:
    """One label/value row of a key/value table."""
    label: str
    value: Any


@dataclass
class SupervisionGroup:
    """A titled group of supervision items plus its free-text observations."""
    key: str
    title: str
    rows: List[TableRow] = field(default_factory=list)
    observations: str = ""


@dataclass
class MonthlyValue:
    """Total supervisions for one month, used as a bar of the chart."""
    month: str
    total_supervisions: int


@dataclass
class MonthlyReport:
    """Normalized monthly inspection report.

    Attributes:
        schema_version: Payload version the report was built from (1 or 2)
        month: Lower-case Spanish month name (e.g., "marzo")
        region: Region display name (e.g., "Atacama")
        signer: Name printed in the signature block
        position: Job title printed in the signature block
        identification: Legacy header rows (folios, ejecutora, decreto)
        general_rows: Rows of the "Datos generales del mes" table
        quota_rows: Rows for available/executed slots
        field_groups: Field (terreno) supervision tables
        office_groups: Office (oficina) supervision tables
        beneficiaries_url: Link to the detailed beneficiaries list
        projects_progress: Free text about project progress
        general_comments: Free text, may contain newlines
        supervision_comments: Free text, may contain newlines
        monthly_totals: Chart series, previous months followed by this month
    """

    schema_version: int
    month: str
    region: str
    signer: str = ""
    position: str = ""
    identification: List[TableRow] = field(default_factory=list)
    general_rows: List[TableRow] = field(default_factory=list)
    quota_rows: List[TableRow] = field(default_factory=list)
    field_groups: List[SupervisionGroup] = field(default_factory=list)
    office_groups: List[SupervisionGroup] = field(default_factory=list)
    beneficiaries_url: str = ""
    projects_progress: str = ""
    general_comments: str = ""
    supervision_comments: str = ""
    monthly_totals: List[MonthlyValue] = field(default_factory=list)

    def all_tables(self) -> List[Tuple[str, List[TableRow]]]:
        """Return every (section title, rows) pair in document order."""
        tables = []
        if self.identification:
            tables.append(("Identificación", self.identification))
        tables.append(("Datos generales", self.general_rows))
        if self.quota_rows:
            tables.append(("Cupos", self.quota_rows))
        for group in self.field_groups + self.office_groups:
            tables.append((group.title, group.rows))
        return tables


def _text(value: Optional[str]) -> str:
    return (value or "").strip()


def _build_groups(section: BaseModel, group_definitions) -> List[SupervisionGroup]:
    groups = []
    for key, title, items in group_definitions:
        group = getattr(section, key)
        rows = [
            TableRow(label, getattr(group, item_key) if group is not None else None)
            for item_key, label in items
        ]
        groups.append(SupervisionGroup(
            key=key,
            title=title,
            rows=rows,
            observations=_text(group.observaciones) if group is not None else "",
        ))
    return groups


def _paper_support_row(section: BaseModel, definition) -> List[TableRow]:
    key, label = definition
    if key not in section.model_fields_set:
        return []
    return [TableRow(label, getattr(section, key))]


def _monthly_totals(other_months: List[MonthTotal], month: str, current_total: Optional[int]) -> List[MonthlyValue]:
    totals = [
        MonthlyValue(MONTH_NAMES[entry.mes], entry.totalSupervisiones or 0)
        for entry in other_months
    ]
    totals.append(MonthlyValue(month, current_total or 0))
    return totals


def _normalize_v2(payload: ReportPayloadV2) -> MonthlyReport:
    month = MONTH_NAMES[payload.mes]
    general = payload.datosGenerales
    general_rows = [TableRow(label, getattr(general, key)) for key, label in GENERAL_DATA_FIELDS]

    quota_rows = []
    (slots_key, slots_label), (percentage_key, percentage_label) = QUOTA_FIELDS
    if getattr(payload, slots_key) is not None:
        quota_rows.append(TableRow(slots_label, getattr(payload, slots_key)))
    if getattr(payload, percentage_key) is not None:
        quota_rows.append(TableRow(percentage_label, format_percentage(getattr(payload, percentage_key))))

    field_section = payload.supervisionTerreno
    office_section = payload.supervisionOficina

    field_groups = _build_groups(field_section, FIELD_SUPERVISION_GROUPS)
    office_groups = _build_groups(office_section, OFFICE_SUPERVISION_GROUPS)

    field_support = _paper_support_row(field_section, FIELD_PAPER_SUPPORT)
    if field_support and field_groups:
        field_groups[0].rows = field_support + field_groups[0].rows
    office_support = _paper_support_row(office_section, OFFICE_PAPER_SUPPORT)
    if office_support and office_groups:
        office_groups[0].rows = office_support + office_groups[0].rows

    supervision_comments = payload.comentariosSupervision
    if supervision_comments is None:
        supervision_comments = payload.comentariosFiscalizacion

    return MonthlyReport(
        schema_version=ReportPayloadV2.schema_version,
        month=month,
        region=payload.region,
        signer=payload.firmante,
        position=payload.cargo,
        general_rows=general_rows,
        quota_rows=quota_rows,
        field_groups=field_groups,
        office_groups=office_groups,
        beneficiaries_url=_text(payload.listadoBeneficiarios),
        projects_progress=_text(payload.avanceProyectos),
        general_comments=_text(payload.comentariosGenerales),
        supervision_comments=_text(supervision_comments),
        monthly_totals=_monthly_totals(payload.otrosMeses, month, general.totalSupervisiones),
    )


def _normalize_v1(payload: ReportPayloadV1) -> MonthlyReport:
    month = MONTH_NAMES[payload.mes]
    present = payload.model_fields_set
    identification = [
        TableRow(label, _text(getattr(payload, key)) or None)
        for key, label in LEGACY_IDENTIFICATION_FIELDS
        if key in present
    ]
    general_rows = [TableRow(label, getattr(payload, key)) for key, label in LEGACY_GENERAL_DATA_FIELDS]

    checklist_rows = []
    observations = []
    for flag_key, observation_key, label in LEGACY_CHECKLIST_FIELDS:
        if flag_key not in present and observation_key not in present:
            continue
        checklist_rows.append(TableRow(label, getattr(payload, flag_key)))
        observation = _text(getattr(payload, observation_key))
        if observation:
            observations.append(f"{label}: {observation}")

    field_groups = []
    if checklist_rows:
        field_groups.append(SupervisionGroup(
            key="fiscalizacion",
            title=LEGACY_CHECKLIST_TITLE,
            rows=checklist_rows,
            observations="\n".join(observations),
        ))

    return MonthlyReport(
        schema_version=ReportPayloadV1.schema_version,
        month=month,
        region=payload.region,
        signer=payload.firmante,
        position=payload.cargo,
        identification=identification,
        general_rows=general_rows,
        field_groups=field_groups,
        beneficiaries_url=_text(payload.listado),
        general_comments=_text(payload.comentariosGenerales),
        supervision_comments=_text(payload.comentariosFiscalizacion),
        monthly_totals=_monthly_totals(payload.otrosMeses, month, payload.fiscalizados),
    )


def normalize_payload(payload: Union[ReportPayload, Dict[str, Any]]) -> MonthlyReport:
    """
    Convert a payload into a MonthlyReport.

    Args:
        payload: Parsed payload model, or a decoded JSON body that is
            validated first

    Returns:
        MonthlyReport independent of the payload schema version

    Raises:
        ValidationError: If a raw body does not validate
    """
    if not isinstance(payload, ReportPayloadBase):
        payload = validate_request_body(payload)

    if isinstance(payload, ReportPayloadV2):
        return _normalize_v2(payload)
    return _normalize_v1(payload)
