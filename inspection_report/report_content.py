"""Report Content Tables

Field-to-label mappings and fixed wording of the monthly report. The report
builder walks these tables instead of hard-coding one draw call per field, so
a schema change only touches data here.
"""

REPORT_TITLE = "Informe técnico {month}"
REPORT_SUBTITLE = "Región de {region}"

HEADING_GENERAL = "Datos generales del mes"
HEADING_SUPERVISIONS = "Detalles sobre las supervisiones realizadas"
HEADING_FIELD = "Supervisión en terreno"
HEADING_OFFICE = "Supervisión en oficina"
HEADING_CHART = "Supervisiones realizadas por mes"
HEADING_PROJECTS = "Avance de proyectos"
HEADING_GENERAL_COMMENTS = "Comentarios generales"
HEADING_SUPERVISION_COMMENTS = "Comentarios sobre las supervisiones"
HEADING_OBSERVATIONS = "Observaciones"
CONTINUATION_SUFFIX = " (continuación)"

BENEFICIARIES_NOTE = (
    "Listado detallado de trabajadoras/es y fiscalizaciones disponible en este link. "
    "(Sólo disponible en versión digital de este archivo)."
)
NO_COMMENTS_TEXT = "Sin comentarios."

# Schema version 2: datosGenerales
GENERAL_DATA_FIELDS = [
    ("encontrados", "Beneficiarias/os activas/os"),
    ("ausentes", "Beneficiarias/os no activas/os"),
    ("renuncias", "Beneficiarias/os que renunciaron"),
    ("desvinculados", "Beneficiarias/os desvinculadas/os"),
    ("fallecidos", "Beneficiarias/os fallecidas/os"),
    ("totalCuposEjecutados", "Total cupos ejecutados"),
    ("totalSupervisionesTerreno", "Total supervisiones en terreno"),
    ("totalSupervisionesOficina", "Total supervisiones en oficina"),
    ("totalSupervisiones", "Total supervisiones"),
]

QUOTA_FIELDS = [
    ("cuposDisponibles", "Cupos disponibles"),
    ("porcentajeCuposEjecutados", "Porcentaje de cupos ejecutados"),
]

# Schema version 2: supervisionTerreno / supervisionOficina groups.
# Each entry: (payload key, table title, [(item key, label), ...])
FIELD_PAPER_SUPPORT = ("soportePapelTerreno", "Supervisiones con soporte en papel")
OFFICE_PAPER_SUPPORT = ("soportePapelOficina", "Supervisiones con soporte en papel")

FIELD_SUPERVISION_GROUPS = [
    ("asistencia", "Asistencia", [
        ("libroAsistencia", "Cuenta con libro de asistencia"),
        ("firmaLibro", "Firma el libro de asistencia"),
        ("presencia", "Se encuentra presente en el lugar de trabajo"),
        ("horariosFirma", "Horarios de firma coinciden con la jornada"),
        ("funcionContrato", "Realiza la función indicada en el contrato"),
    ]),
    ("condicionesTrabajo", "Condiciones de trabajo", [
        ("recibeEpp", "Recibe elementos de protección personal"),
        ("eppAdecuados", "Elementos de protección adecuados"),
        ("utilizaEpp", "Utiliza elementos de protección personal"),
        ("insumosAdecuados", "Cuenta con insumos adecuados"),
        ("condicionesLaboralesAdecuadas", "Condiciones laborales adecuadas"),
        ("charla", "Recibió charla de seguridad"),
    ]),
    ("supervisionEjecutora", "Supervisión de la entidad ejecutora", [
        ("supervisionEjecutora", "Entidad ejecutora realiza supervisiones"),
    ]),
]

OFFICE_SUPERVISION_GROUPS = [
    ("requisitos", "Requisitos de ingreso", [
        ("cedulaIdentidad", "Cédula de identidad"),
        ("declaracionCesantia", "Declaración jurada de cesantía"),
        ("rsh", "Registro Social de Hogares"),
        ("certificadoCotizaciones", "Certificado de cotizaciones"),
    ]),
    ("revisionContrato", "Revisión de contrato", [
        ("debidamenteFirmado", "Contrato debidamente firmado"),
        ("horarios", "Horarios establecidos"),
        ("direccionLugarTrabajo", "Dirección del lugar de trabajo"),
        ("funcionTrabajo", "Función del trabajo"),
    ]),
    ("obligacionesLaborales", "Obligaciones laborales", [
        ("actaEpp", "Acta de entrega de EPP"),
        ("actaInsumos", "Acta de entrega de insumos"),
        ("liquidacionesSueldos", "Liquidaciones de sueldo"),
        ("comprobantePagosPrevisionales", "Comprobante de pagos previsionales"),
        ("registroSupervisiones", "Registro de supervisiones"),
        ("registroAsistencia", "Registro de asistencia"),
    ]),
]

# Schema version 1 (legacy flat payload)
LEGACY_IDENTIFICATION_FIELDS = [
    ("folios", "Folios"),
    ("ejecutora", "Nombre ejecutora/s final/es"),
    ("decreto", "Decreto/s"),
]

LEGACY_GENERAL_DATA_FIELDS = [
    ("encontradas", "Beneficiarias/os activas/os"),
    ("ausentes", "Beneficiarias/os no activas/os"),
    ("renuncias", "Beneficiarias/os que renunciaron"),
    ("fallecidos", "Beneficiarias/os fallecidas/os"),
    ("fiscalizados", "Beneficiarias/os fiscalizadas/os"),
    ("total", "Total beneficiarias/os"),
]

# (flag key, observation key, label)
LEGACY_CHECKLIST_FIELDS = [
    ("epp", "eppObserva", "Entrega de elementos de protección personal"),
    ("usoEpp", "usoEppObserva", "Uso de elementos de protección personal"),
    ("libroAsistencia", "libroAsistenciaObserva", "Libro de asistencia"),
    ("jornadaCorrecta", "jornadaCorrectaObserva", "Jornada laboral correcta"),
    ("condicionesOptimas", "condicionesOptimasObserva", "Condiciones de trabajo óptimas"),
    ("laboresContrato", "laboresContratoObserva", "Labores acordes al contrato"),
    ("capacitacion", "capacitacionObserva", "Capacitación"),
    ("remuneracion", "remuneracionObserva", "Remuneración"),
]
LEGACY_CHECKLIST_TITLE = "Fiscalización"
