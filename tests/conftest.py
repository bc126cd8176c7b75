"""
Shared pytest fixtures for the widget API tests.

Each test gets a fresh app with an in-memory SQLite database and its own
in-process cache. Service calls need an app context:

    with app.app_context():
        widget_type_service.create({...})
"""
import pytest

from sample_app import create_app
from sample_app.extensions import db


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client for API requests."""
    return app.test_client()


@pytest.fixture
def json_headers():
    return {'Content-Type': 'application/json'}


@pytest.fixture
def sample_widget_type(app):
    """An active widget type (serialized dict)."""
    from sample_app.services.widget_type_service import widget_type_service

    with app.app_context():
        return widget_type_service.create({
            'code': 'TEST_BUTTON',
            'name': 'Test Button Widget',
            'description': 'A test button widget type',
        })


@pytest.fixture
def inactive_widget_type(app):
    """An inactive widget type (serialized dict)."""
    from sample_app.services.widget_type_service import widget_type_service

    with app.app_context():
        return widget_type_service.create({
            'code': 'TEST_RETIRED',
            'name': 'Retired Widget Type',
            'isActive': False,
        })


@pytest.fixture
def sample_widget(app, sample_widget_type):
    """An active widget of sample_widget_type (serialized dict)."""
    from sample_app.services.widget_service import widget_service

    with app.app_context():
        return widget_service.create({
            'widgetTypeId': sample_widget_type['id'],
            'name': 'Test Widget',
            'description': 'A test widget',
            'data': {'text': 'Click Me', 'color': 'primary'},
        })


@pytest.fixture
def seeded_app(app):
    """App whose database holds the sample data set."""
    from sample_app.services.seed import seed_sample_data

    with app.app_context():
        seed_sample_data()
    return app
