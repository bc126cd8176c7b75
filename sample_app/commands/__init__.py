"""
CLI Commands for the Widget sample app.

Usage:
    flask data seed [--force]   # Insert sample widget types and widgets
    flask data reset            # Delete all rows
    flask data stats            # Show table counts
"""
from .data import init_app as init_data_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_data_commands(app)
