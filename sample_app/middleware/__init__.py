"""
Middleware package for the Widget sample app.
"""
from .request_logging import init_request_logging, REQUEST_ID_HEADER
