"""
Two Layer Cache demonstration endpoints.

Each route runs one query pattern so cache behaviour can be observed in the
server logs (CACHE_DEBUG_LOGGING) and in the counters returned by /info:

Selective (facet) queries - short TTL:
    GET /api/cache/widgets/active
    GET /api/cache/widgets/by-type/{widget_type_id}
    GET /api/cache/widgets/recent

Complete queries - longer TTL:
    GET /api/cache/widgets/all
    GET /api/cache/widget-types/all

Exploration:
    GET  /api/cache/info
    GET  /api/cache/guide
    POST /api/cache/clear
"""
import logging

from flask import Blueprint, jsonify, current_app

from ..services.widget_service import widget_service, widget_cache
from ..services.widget_type_service import widget_type_service, widget_type_cache
from ..utils.cache import backend_name

logger = logging.getLogger(__name__)

cache_demo_bp = Blueprint('cache_demo', __name__)

RECENT_DAYS = 7


def _facet_meta(description: str, total: int, filtered: int, **extra) -> dict:
    meta = {
        'queryType': 'selective',
        'cacheLayer': 'facet',
        'ttl': f"{current_app.config['CACHE_FACET_TTL']} seconds",
        'description': description,
        'totalCount': total,
        'filteredCount': filtered,
    }
    meta.update(extra)
    return meta


def _complete_meta(description: str, total: int) -> dict:
    return {
        'queryType': 'complete',
        'cacheLayer': 'query',
        'ttl': f"{current_app.config['CACHE_QUERY_TTL']} seconds",
        'description': description,
        'totalCount': total,
    }


# ==================== Selective Queries ====================

@cache_demo_bp.route('/widgets/active', methods=['GET'])
def active_widgets():
    """Active widgets only - cached with the facet TTL."""
    logger.info('Selective query: active widgets requested')
    total = len(widget_service.all())
    widgets = widget_service.find('active')

    return jsonify({
        'success': True,
        'data': widgets,
        'meta': _facet_meta('Active widgets only - uses the shorter facet TTL', total, len(widgets)),
    })


@cache_demo_bp.route('/widgets/by-type/<widget_type_id>', methods=['GET'])
def widgets_by_type(widget_type_id):
    """Widgets of one type - cached with the facet TTL."""
    logger.info('Selective query: widgets by type %s requested', widget_type_id)
    total = len(widget_service.all())
    widgets = widget_service.find('byType', {'widgetTypeId': widget_type_id})

    return jsonify({
        'success': True,
        'data': widgets,
        'meta': _facet_meta(
            f'Widgets filtered by type {widget_type_id} - uses the shorter facet TTL',
            total,
            len(widgets),
            widgetTypeId=widget_type_id,
        ),
    })


@cache_demo_bp.route('/widgets/recent', methods=['GET'])
def recent_widgets():
    """Widgets created in the last 7 days - cached with the facet TTL."""
    logger.info('Selective query: recent widgets requested')
    total = len(widget_service.all())
    widgets = widget_service.recent(days=RECENT_DAYS)

    return jsonify({
        'success': True,
        'data': widgets,
        'meta': _facet_meta(
            f'Widgets created in last {RECENT_DAYS} days - uses the shorter facet TTL',
            total,
            len(widgets),
            filterCriteria=f'createdAt > {RECENT_DAYS} days ago',
        ),
    })


# ==================== Complete Queries ====================

@cache_demo_bp.route('/widgets/all', methods=['GET'])
def all_widgets():
    """All widgets - cached with the query TTL."""
    logger.info('Complete query: all widgets requested')
    widgets = widget_service.all()

    return jsonify({
        'success': True,
        'data': widgets,
        'meta': _complete_meta('All widgets without filtering - uses the longer query TTL', len(widgets)),
    })


@cache_demo_bp.route('/widget-types/all', methods=['GET'])
def all_widget_types():
    """All widget types - cached with the query TTL."""
    logger.info('Complete query: all widget types requested')
    widget_types = widget_type_service.all()

    return jsonify({
        'success': True,
        'data': widget_types,
        'meta': _complete_meta('All widget types without filtering - uses the longer query TTL', len(widget_types)),
    })


# ==================== Exploration ====================

@cache_demo_bp.route('/info', methods=['GET'])
def cache_info():
    """Cache configuration, per-cache counters and the demo endpoints."""
    config = current_app.config
    info = {
        'twoLayerEnabled': True,
        'backend': backend_name(),
        'itemLayer': {
            'ttl': config['CACHE_ITEM_TTL'],
            'description': 'Stores individual items with longer TTL',
        },
        'queryLayer': {
            'complete': {
                'ttl': config['CACHE_QUERY_TTL'],
                'description': 'Complete query results with medium TTL',
            },
            'facet': {
                'ttl': config['CACHE_FACET_TTL'],
                'description': 'Partial/filtered query results with short TTL',
            },
        },
        'debugLogging': bool(config.get('CACHE_DEBUG_LOGGING')),
        'caches': {
            'widget': widget_cache.describe(),
            'widgetType': widget_type_cache.describe(),
        },
        'endpoints': {
            'selective': [
                '/api/cache/widgets/active',
                '/api/cache/widgets/by-type/<widgetTypeId>',
                '/api/cache/widgets/recent',
            ],
            'complete': [
                '/api/cache/widgets/all',
                '/api/cache/widget-types/all',
            ],
        },
    }

    return jsonify({
        'success': True,
        'data': info,
        'meta': {'description': 'Two Layer Cache configuration and available test endpoints'},
    })


@cache_demo_bp.route('/guide', methods=['GET'])
def cache_guide():
    """Step by step instructions for observing the cache."""
    config = current_app.config
    item_ttl = config['CACHE_ITEM_TTL']
    query_ttl = config['CACHE_QUERY_TTL']
    facet_ttl = config['CACHE_FACET_TTL']

    guide = {
        'title': 'Two Layer Cache Testing Guide',
        'description': 'Use these endpoints to test and understand Two Layer Cache behavior',
        'layers': {
            'itemLayer': {
                'description': 'Stores individual widgets and widget types',
                'ttl': f'{item_ttl} seconds',
                'storage': backend_name(),
            },
            'queryLayer': {
                'description': 'Stores query results (lists of ids) with different TTLs based on completeness',
                'complete': {
                    'ttl': f'{query_ttl} seconds',
                    'description': 'For queries that return all items without filtering',
                },
                'facet': {
                    'ttl': f'{facet_ttl} seconds',
                    'description': 'For queries that filter or select subsets of items',
                },
            },
        },
        'testingSteps': [
            {
                'step': 1,
                'action': 'Make a complete query',
                'endpoint': 'GET /api/cache/widgets/all',
                'expected': f'Result cached for {query_ttl} seconds in query layer',
            },
            {
                'step': 2,
                'action': 'Make a selective query',
                'endpoint': 'GET /api/cache/widgets/active',
                'expected': f'Result cached for {facet_ttl} seconds in facet layer',
            },
            {
                'step': 3,
                'action': 'Repeat the same queries within TTL',
                'endpoint': 'GET /api/cache/info',
                'expected': 'query_hits counters increase, no database round-trip',
            },
            {
                'step': 4,
                'action': f'Wait for facet TTL to expire ({facet_ttl} seconds)',
                'expected': 'Selective queries will refresh, complete queries still cached',
            },
            {
                'step': 5,
                'action': 'Create/update a widget',
                'endpoint': 'POST/PUT /api/widgets',
                'expected': 'Query cache is invalidated, forcing fresh queries',
            },
        ],
        'serverLogs': {
            'instructions': 'Enable CACHE_DEBUG_LOGGING and watch the server log',
            'lookFor': [
                'query hit / query miss messages',
                'item hit / item miss messages',
                'query layer invalidated messages',
            ],
        },
    }

    return jsonify({
        'success': True,
        'data': guide,
    })


@cache_demo_bp.route('/clear', methods=['POST'])
def clear_cache():
    """Drop both layers of both caches."""
    widget_cache.clear()
    widget_type_cache.clear()
    logger.info('Widget and widget type caches cleared')

    return jsonify({
        'success': True,
        'message': 'Caches cleared',
    })
