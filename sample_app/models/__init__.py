"""
Database models for the Widget sample app.
"""
from .widget_type import WidgetType
from .widget import Widget

__all__ = [
    'WidgetType',
    'Widget',
]
