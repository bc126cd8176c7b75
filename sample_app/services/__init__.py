"""
Business logic services for the Widget sample app.
"""
from .widget_type_service import WidgetTypeService, widget_type_service, widget_type_cache
from .widget_service import WidgetService, widget_service, widget_cache
