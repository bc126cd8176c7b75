"""
Sample data seeding and database start-up.

seed_sample_data() inserts a fixed set of widget types and widgets.
init_database() creates the tables and seeds them when both are empty.
"""
import logging
from typing import Dict

from ..extensions import db
from ..models import Widget, WidgetType
from .widget_service import widget_cache
from .widget_type_service import widget_type_cache

logger = logging.getLogger(__name__)


SAMPLE_WIDGET_TYPES = [
    {
        'code': 'BUTTON',
        'name': 'Button Widget',
        'description': 'Interactive button component for user interfaces',
        'is_active': True,
    },
    {
        'code': 'TEXT_INPUT',
        'name': 'Text Input Widget',
        'description': 'Text input field for forms and data entry',
        'is_active': True,
    },
    {
        'code': 'CHART',
        'name': 'Chart Widget',
        'description': 'Data visualization chart component',
        'is_active': True,
    },
    {
        'code': 'TABLE',
        'name': 'Table Widget',
        'description': 'Tabular data display component',
        'is_active': True,
    },
    {
        'code': 'LEGACY_WIDGET',
        'name': 'Legacy Widget',
        'description': 'Deprecated widget type maintained for compatibility',
        'is_active': False,
    },
]

# (type code, widget fields)
SAMPLE_WIDGETS = [
    ('BUTTON', {
        'name': 'Primary Action Button',
        'description': 'Main call-to-action button for the homepage',
        'is_active': True,
        'data': {'text': 'Get Started', 'color': 'primary', 'size': 'large', 'icon': 'arrow-right'},
    }),
    ('BUTTON', {
        'name': 'Secondary Button',
        'description': 'Secondary action button for forms',
        'is_active': True,
        'data': {'text': 'Cancel', 'color': 'secondary', 'size': 'medium', 'icon': None},
    }),
    ('TEXT_INPUT', {
        'name': 'Email Input Field',
        'description': 'Email address input for registration form',
        'is_active': True,
        'data': {'placeholder': 'Enter your email address', 'validation': 'email', 'required': True, 'maxLength': 255},
    }),
    ('TEXT_INPUT', {
        'name': 'Search Box',
        'description': 'Global search input field',
        'is_active': True,
        'data': {'placeholder': 'Search...', 'validation': None, 'required': False, 'debounceMs': 300},
    }),
    ('CHART', {
        'name': 'Sales Dashboard Chart',
        'description': 'Monthly sales performance chart',
        'is_active': True,
        'data': {
            'chartType': 'line',
            'dataSource': 'sales_api',
            'refreshInterval': 300000,
            'colors': ['#3b82f6', '#10b981', '#f59e0b'],
        },
    }),
    ('CHART', {
        'name': 'User Analytics Pie Chart',
        'description': 'User demographics breakdown',
        'is_active': True,
        'data': {'chartType': 'pie', 'dataSource': 'analytics_api', 'refreshInterval': 600000, 'showLegend': True},
    }),
    ('TABLE', {
        'name': 'User Management Table',
        'description': 'Admin table for managing system users',
        'is_active': True,
        'data': {
            'columns': ['name', 'email', 'role', 'lastLogin', 'actions'],
            'sortable': True,
            'filterable': True,
            'pagination': {'pageSize': 20, 'showSizeSelector': True},
        },
    }),
    ('TABLE', {
        'name': 'Orders List',
        'description': 'Table displaying recent orders',
        'is_active': True,
        'data': {
            'columns': ['orderId', 'customer', 'amount', 'status', 'date'],
            'sortable': True,
            'filterable': False,
            'pagination': {'pageSize': 50, 'showSizeSelector': False},
        },
    }),
    ('BUTTON', {
        'name': 'Disabled Test Button',
        'description': 'Button used for testing disabled states',
        'is_active': False,
        'data': {'text': 'Disabled', 'color': 'gray', 'size': 'small', 'disabled': True},
    }),
    ('BUTTON', {
        'name': 'Simple Button',
        'description': None,
        'is_active': True,
        'data': {'text': 'Click Me', 'color': 'default', 'size': 'medium'},
    }),
    ('TEXT_INPUT', {
        'name': 'Basic Input',
        'description': None,
        'is_active': True,
        'data': None,
    }),
]


def table_counts() -> Dict[str, Dict[str, int]]:
    """Total and active row counts for both tables."""
    return {
        'widgetTypes': {
            'total': WidgetType.query.count(),
            'active': WidgetType.query.filter_by(is_active=True).count(),
        },
        'widgets': {
            'total': Widget.query.count(),
            'active': Widget.query.filter_by(is_active=True).count(),
        },
    }


def is_empty() -> bool:
    return WidgetType.query.count() == 0 and Widget.query.count() == 0


def seed_sample_data() -> Dict[str, Dict[str, int]]:
    """
    Insert the sample widget types and widgets.

    Rows are inserted directly (not through the services) so the inactive
    LEGACY_WIDGET type can be created as-is.

    Returns:
        Table counts after seeding
    """
    logger.info('Creating widget types... count=%d', len(SAMPLE_WIDGET_TYPES))
    types_by_code = {}
    for fields in SAMPLE_WIDGET_TYPES:
        widget_type = WidgetType(**fields)
        db.session.add(widget_type)
        types_by_code[widget_type.code] = widget_type
    db.session.flush()

    logger.info('Creating widgets... count=%d', len(SAMPLE_WIDGETS))
    for code, fields in SAMPLE_WIDGETS:
        db.session.add(Widget(widget_type_id=types_by_code[code].id, **fields))

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Failed to seed sample data')
        raise

    widget_cache.invalidate_queries()
    widget_type_cache.invalidate_queries()

    counts = table_counts()
    logger.info('Sample data seeding completed: %s', counts)
    return counts


def reset_data() -> None:
    """Delete every widget and widget type, and clear both caches."""
    deleted_widgets = Widget.query.delete()
    deleted_types = WidgetType.query.delete()
    db.session.commit()

    widget_cache.clear()
    widget_type_cache.clear()
    logger.info('Deleted %d widgets and %d widget types', deleted_widgets, deleted_types)


def init_database(app) -> None:
    """
    Create tables and seed sample data when both tables are empty.

    Controlled by AUTO_INIT_DB and SEED_ON_EMPTY.
    """
    if not app.config.get('AUTO_INIT_DB'):
        return

    with app.app_context():
        db.create_all()
        logger.info('Database tables created')

        if not app.config.get('SEED_ON_EMPTY'):
            return

        if is_empty():
            seed_sample_data()
        else:
            logger.info('Skipping data seeding - tables already contain data')
