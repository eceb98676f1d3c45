"""Configuration Constants

Constants for the monthly inspection report renderer.
"""
from reportlab.lib.colors import HexColor

# Page Geometry (points, A4)
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
LEFT_MARGIN = 50
RIGHT_MARGIN = 50
TOP_MARGIN = 100  # Leaves room for the bicolor line and the logo
BOTTOM_MARGIN = 40

# Header (bicolor line + logo), drawn on every page
HEADER_LINE_WIDTH = 104
HEADER_LINE_HEIGHT = 7
HEADER_LOGO_WIDTH = 105
HEADER_LOGO_HEIGHT = 47
HEADER_LOGO_TOP_OFFSET = 90  # Distance from page top to the logo's bottom edge

# Footer
FOOTER_Y = 20
FOOTER_FONT_SIZE = 8

# Typography
BASE_FONT_SIZE = 12
TITLE_FONT_SIZE = BASE_FONT_SIZE + 4
SUBTITLE_FONT_SIZE = BASE_FONT_SIZE + 2
HEADING_FONT_SIZE = BASE_FONT_SIZE + 1
SUBHEADING_FONT_SIZE = BASE_FONT_SIZE
BODY_FONT_SIZE = 10
NOTE_FONT_SIZE = BASE_FONT_SIZE - 3
HEADING_SPACING = 10  # Added below a heading's font size
LINE_SPACING = 4  # Added below each wrapped paragraph line
BLOCK_SPACING = 12  # Gap inserted between sections

# Key/value tables
TABLE_ROW_HEIGHT = 20
TABLE_COLUMN_WIDTHS = (395, 100)
TABLE_CELL_PADDING = 5
TABLE_BORDER_WIDTH = 1
TABLE_FONT_SIZE = 10

# Signature trailer
SIGNATURE_LINE_WIDTH = 200
SIGNATURE_HEIGHT = 70
SIGNATURE_TOP_GAP = 30  # Blank space above the signature rule
SIGNATURE_FONT_SIZE = 11

# Colors (gob.cl bicolor line)
COLOR_TEXT = HexColor("#000000")
COLOR_BICOLOR_BLUE = HexColor("#0F69B4")
COLOR_BICOLOR_RED = HexColor("#EB3C46")
COLOR_TABLE_BORDER = HexColor("#000000")
COLOR_PLACEHOLDER = HexColor("#8A8A8A")

# Fonts (gob.cl typeface files, looked up in the configured fonts directory)
FONT_FILES = {
    "regular": "gobCL_Regular",
    "bold": "gobCL_Bold",
    "light": "gobCL_Light",
}
FONT_EXTENSIONS = (".ttf", ".otf")

# Built-in fallbacks used when no fonts directory is configured
STANDARD_FONTS = {
    "regular": "Helvetica",
    "bold": "Helvetica-Bold",
    "light": "Helvetica",
}

# Header images (looked up in the configured images directory)
BICOLOR_LINE_IMAGE = "bicolor_line.png"
LOGO_IMAGE = "logo_pic.png"

# Chart service (QuickChart-compatible POST /chart endpoint)
DEFAULT_CHART_SERVICE_URL = "https://quickchart.io/chart"
DEFAULT_CHART_TIMEOUT_SECONDS = 10.0
DEFAULT_CHART_WIDTH = 495  # Points on the page; also requested pixel width
DEFAULT_CHART_HEIGHT = 250
CHART_BAR_COLOR = "#0F69B4"
CHART_TITLE = "Total de supervisiones"
CHART_PLACEHOLDER_TEXT = "[Gráfico no disponible: no fue posible obtener la imagen del servicio de gráficos]"

# Output
DEFAULT_PDF_FILENAME = "reporte.pdf"

# Progress Steps (for UI progress tracking)
PROGRESS_STEPS = {
    "VALIDATE": 0.05,
    "NORMALIZE": 0.10,
    "ASSETS": 0.20,
    "CHART": 0.40,
    "LAYOUT": 0.70,
    "COMPLETE": 1.0,
}

# Spanish month names, indexed 1-12
MONTH_NAMES = {
    1: "enero",
    2: "febrero",
    3: "marzo",
    4: "abril",
    5: "mayo",
    6: "junio",
    7: "julio",
    8: "agosto",
    9: "septiembre",
    10: "octubre",
    11: "noviembre",
    12: "diciembre",
}

# Region codes to official names
REGION_NAMES = {
    1: "Tarapacá",
    2: "Antofagasta",
    3: "Atacama",
    4: "Coquimbo",
    5: "Valparaíso",
    6: "Libertador General Bernardo O'Higgins",
    7: "Maule",
    8: "Biobío",
    9: "La Araucanía",
    10: "Los Lagos",
    11: "Aysén del General Carlos Ibáñez del Campo",
    12: "Magallanes y de la Antártica Chilena",
    13: "Metropolitana de Santiago",
    14: "Los Ríos",
    15: "Arica y Parinacota",
    16: "Ñuble",
}
