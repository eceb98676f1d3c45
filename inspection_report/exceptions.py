"""Custom Exception Hierarchy

Exception hierarchy for the inspection report renderer. Each branch maps to one
failure class of a render request: bad input, missing assets, an unreachable
chart service, or a layout problem.
"""


class InspectionReportError(Exception):
    """Base exception for all inspection report errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions raised while rendering a report.
    """
    pass


# Validation Errors
class ValidationError(InspectionReportError):
    """Raised when the request payload fails validation."""
    pass


class MissingFieldError(ValidationError):
    """Raised when one or more required fields are absent."""

    def __init__(self, fields: list, parent: str = None):
        self.fields = fields
        self.parent = parent
        if parent:
            message = f"Faltan campos en {parent}: {', '.join(fields)}"
        else:
            message = f"Faltan campos requeridos: {', '.join(fields)}"
        super().__init__(message)


class InvalidFieldError(ValidationError):
    """Raised when a field is present but has the wrong shape or value."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"El campo '{field}' {reason}")


class InvalidConfigurationError(ValidationError):
    """Raised when render options are invalid."""
    pass


# Asset Errors
class AssetError(InspectionReportError):
    """Base class for font and image loading errors. Fatal to the render."""
    pass


class FontError(AssetError):
    """Raised when a required font cannot be found or registered."""

    def __init__(self, font_path: str, reason: str):
        self.font_path = font_path
        super().__init__(f"Error loading font '{font_path}': {reason}")


class ImageLoadError(AssetError):
    """Raised when a required local image is missing or corrupt."""

    def __init__(self, image_path: str, reason: str):
        self.image_path = image_path
        super().__init__(f"Error loading image '{image_path}': {reason}")


# Chart Service Errors
class ChartError(InspectionReportError):
    """Base class for remote chart errors. Recoverable: the chart degrades to a placeholder."""
    pass


class ChartFetchError(ChartError):
    """Raised when the chart image cannot be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Chart request to {url} failed: {reason}")


# Rendering Errors
class RenderingError(InspectionReportError):
    """Base class for PDF rendering errors."""
    pass


class LayoutError(RenderingError):
    """Raised when the layout engine is used incorrectly."""
    pass


class DocumentFinalizedError(LayoutError):
    """Raised when drawing is attempted after the document was serialized."""

    def __init__(self):
        super().__init__("Document already finalized; no further blocks can be drawn")


# Pipeline Errors
class PipelineError(InspectionReportError):
    """Base class for pipeline orchestration errors."""
    pass


class PipelineStepError(PipelineError):
    """Raised when a specific pipeline step fails.

    This wraps the underlying exception while preserving the pipeline context.
    """

    def __init__(self, step_name: str, original_exception: Exception):
        self.step_name = step_name
        self.original_exception = original_exception
        super().__init__(
            f"Pipeline step '{step_name}' failed: {str(original_exception)}"
        )
