"""
Utility modules for the Widget sample app.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    bad_request,
    not_found,
    internal_error
)
from .exceptions import (
    SampleAppError,
    NotFoundError,
    WidgetNotFoundError,
    WidgetTypeNotFoundError,
    ValidationError,
    DuplicateError
)
