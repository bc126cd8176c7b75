"""
Service status endpoints: index, health, status and dashboard.
"""
import logging
import os
from datetime import datetime

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

from ..extensions import db
from ..models import Widget
from ..services.seed import table_counts
from ..utils.cache import backend_name

logger = logging.getLogger(__name__)

status_bp = Blueprint('status', __name__)

RECENT_WIDGETS_LIMIT = 5

API_ENDPOINTS = {
    'health': '/api/health',
    'status': '/api/status',
    'dashboard': '/api/dashboard',
    'widgetTypes': '/api/widget-types',
    'widgets': '/api/widgets',
    'cache': '/api/cache/info',
}


def _timestamp() -> str:
    return datetime.utcnow().isoformat() + 'Z'


@status_bp.route('/', methods=['GET'])
def index():
    """Service index."""
    return jsonify({
        'message': current_app.config['APP_NAME'],
        'version': current_app.config['APP_VERSION'],
        'timestamp': _timestamp(),
        'endpoints': API_ENDPOINTS,
    })


@status_bp.route('/api', methods=['GET'])
def api_info():
    """API description."""
    return jsonify({
        'name': current_app.config['APP_NAME'],
        'version': current_app.config['APP_VERSION'],
        'description': 'REST API for Widget Management System',
        'baseUrl': '/api',
        'endpoints': API_ENDPOINTS,
    })


@status_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness probe; does not touch the database."""
    return {'status': 'healthy', 'service': 'widget-sample-app'}


@status_bp.route('/api/health', methods=['GET'])
def api_health():
    """
    GET /api/health - Database connectivity check

    Returns 200 when a trivial query succeeds, 503 otherwise.
    """
    try:
        db.session.execute(text('SELECT 1'))
        database = {'status': 'healthy'}
        status_code = 200
    except Exception as e:
        logger.error('Database health check failed: %s', e)
        db.session.rollback()
        database = {'status': 'unhealthy', 'details': str(e)}
        status_code = 503

    return jsonify({
        'status': database['status'],
        'database': database,
        'timestamp': _timestamp(),
    }), status_code


@status_bp.route('/api/status', methods=['GET'])
def api_status():
    """GET /api/status - Service version, environment and cache backend."""
    return jsonify({
        'service': current_app.config['APP_NAME'],
        'version': current_app.config['APP_VERSION'],
        'environment': os.getenv('FLASK_ENV', 'development'),
        'cache': {
            'backend': backend_name(),
            'itemTtl': current_app.config['CACHE_ITEM_TTL'],
            'queryTtl': current_app.config['CACHE_QUERY_TTL'],
            'facetTtl': current_app.config['CACHE_FACET_TTL'],
        },
        'timestamp': _timestamp(),
    })


@status_bp.route('/api/dashboard', methods=['GET'])
def api_dashboard():
    """
    GET /api/dashboard - Totals and the most recently created widgets
    """
    counts = table_counts()
    counts['widgets']['inactive'] = counts['widgets']['total'] - counts['widgets']['active']

    recent = (
        Widget.query.order_by(Widget.created_at.desc())
        .limit(RECENT_WIDGETS_LIMIT)
        .all()
    )

    return jsonify({
        'success': True,
        'data': {
            'widgetTypes': counts['widgetTypes'],
            'widgets': counts['widgets'],
            'recentWidgets': [w.to_dict() for w in recent],
        },
    })
