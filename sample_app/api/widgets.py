"""
Widget API Endpoints

CRUD operations for widgets, a summary endpoint, and finders via the query string:
    GET /api/widgets?finder=active
    GET /api/widgets?finder=byType&finderParams={"widgetTypeId":"..."}
    GET /api/widgets?finder=byTypeCode&finderParams={"code":"BUTTON"}
"""

from flask import Blueprint, jsonify
from ..services.widget_service import widget_service
from ..utils.request_helpers import get_json_body, get_finder_args

widgets_bp = Blueprint('widgets', __name__)


@widgets_bp.route('', methods=['GET'])
def list_widgets():
    """
    GET /api/widgets - List widgets

    Query params:
        finder: Optional finder name (active, byType, byTypeCode)
        finderParams: JSON object of finder parameters
    """
    finder, params = get_finder_args()
    if finder:
        return jsonify(widget_service.find(finder, params))
    return jsonify(widget_service.all())


@widgets_bp.route('/summary', methods=['GET'])
def widgets_summary():
    """
    GET /api/widgets/summary - Summary statistics

    Returns total, active and inactive counts plus a count per widget type id.
    """
    return jsonify({
        'success': True,
        'data': widget_service.summary(),
    })


@widgets_bp.route('/<widget_id>', methods=['GET'])
def get_widget(widget_id):
    """GET /api/widgets/{id} - Get one widget"""
    return jsonify(widget_service.get(widget_id))


@widgets_bp.route('', methods=['POST'])
def create_widget():
    """
    POST /api/widgets - Create a widget

    Request Body:
        {
            "widgetTypeId": "...",  (must reference an active widget type)
            "name": "Primary Action Button",
            "description": "...",   (optional)
            "isActive": true,       (optional, default true)
            "data": {...}           (optional, any JSON)
        }
    """
    data = get_json_body()
    return jsonify(widget_service.create(data)), 201


@widgets_bp.route('/<widget_id>', methods=['PUT'])
def update_widget(widget_id):
    """PUT /api/widgets/{id} - Update the fields present in the body"""
    data = get_json_body()
    return jsonify(widget_service.update(widget_id, data))


@widgets_bp.route('/<widget_id>', methods=['DELETE'])
def delete_widget(widget_id):
    """DELETE /api/widgets/{id} - Hard delete a widget"""
    widget_service.remove(widget_id)
    return jsonify({
        'success': True,
        'message': 'Widget deleted successfully',
    })
