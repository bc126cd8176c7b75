"""
Custom exceptions for widget business logic.

Services raise these; the app-level error handlers translate them into
JSON error responses with the matching HTTP status code.
"""


class SampleAppError(Exception):
    """Base exception for all widget business logic errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "SAMPLE_APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(SampleAppError):
    """Resource not found."""

    status_code = 404

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with ID {identifier} not found"
        super().__init__(message, "NOT_FOUND")


class WidgetNotFoundError(NotFoundError):
    """Widget not found."""

    def __init__(self, identifier=None):
        super().__init__("Widget", identifier)


class WidgetTypeNotFoundError(NotFoundError):
    """Widget type not found."""

    def __init__(self, identifier=None):
        super().__init__("Widget type", identifier)


class ValidationError(SampleAppError):
    """Invalid input data."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message, "VALIDATION_ERROR")


class DuplicateError(SampleAppError):
    """Resource already exists."""

    status_code = 409

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} already exists"
        if identifier:
            message = f"{resource} with {identifier} already exists"
        super().__init__(message, "DUPLICATE_ENTRY")
