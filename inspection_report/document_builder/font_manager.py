"""Font Manager Module

Handles font registration for the report: the gobCL family when a fonts
directory is configured, the built-in Helvetica family otherwise.
"""
import logging
import os
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..config import FONT_FILES, FONT_EXTENSIONS, STANDARD_FONTS
from ..exceptions import FontError

logger = logging.getLogger(__name__)


class FontManager:
    """Registers report fonts with ReportLab and resolves them by role.

    Roles are "regular", "bold" and "light". Every role must resolve: a
    configured fonts directory with a missing or unreadable file is a fatal
    asset error, since all text measurement depends on the fonts.

    Attributes:
        fonts_dir: Directory the fonts were loaded from, or None for built-ins
        font_names: Mapping of role to registered ReportLab font name
    """

    def __init__(self, fonts_dir: Optional[str] = None):
        """
        Initialize FontManager and register the report fonts.

        Args:
            fonts_dir: Directory holding gobCL_Regular/Bold/Light (.ttf or .otf).
                       If None, the standard Helvetica fonts are used.

        Raises:
            FontError: If a font file is missing or cannot be registered
        """
        self.fonts_dir = fonts_dir
        self.font_names: Dict[str, str] = dict(STANDARD_FONTS)
        if fonts_dir:
            self._setup_fonts()
        else:
            logger.debug("No fonts directory configured, using built-in Helvetica family")

    def _setup_fonts(self):
        """
        Register one TrueType font per role from the fonts directory.

        Registration is idempotent: ReportLab keeps fonts in a process-wide
        registry, so a font already registered under the same name is reused.
        """
        for role, base_name in FONT_FILES.items():
            font_path = self._find_font_file(base_name)
            if font_path is None:
                raise FontError(
                    os.path.join(self.fonts_dir, base_name),
                    f"file not found (tried {', '.join(FONT_EXTENSIONS)})",
                )

            if base_name not in pdfmetrics.getRegisteredFontNames():
                try:
                    pdfmetrics.registerFont(TTFont(base_name, font_path))
                except Exception as e:
                    raise FontError(font_path, str(e)) from e
                logger.debug("Registered font %s from %s", base_name, font_path)

            self.font_names[role] = base_name

    def _find_font_file(self, base_name: str) -> Optional[str]:
        for extension in FONT_EXTENSIONS:
            candidate = os.path.join(self.fonts_dir, base_name + extension)
            if os.path.exists(candidate):
                return candidate
        return None

    def get_font_name(self, role: str = "regular") -> str:
        """
        Get the registered font name for a role.

        Args:
            role: "regular", "bold" or "light"

        Returns:
            Font name string suitable for use with ReportLab (e.g., 'gobCL_Bold')
        """
        try:
            return self.font_names[role]
        except KeyError:
            raise ValueError(f"Unknown font role: {role!r}") from None

    @property
    def regular(self) -> str:
        return self.font_names["regular"]

    @property
    def bold(self) -> str:
        return self.font_names["bold"]

    @property
    def light(self) -> str:
        return self.font_names["light"]
