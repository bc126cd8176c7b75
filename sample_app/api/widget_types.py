"""
Widget Type API Endpoints

CRUD operations for widget types, plus finders via the query string:
    GET /api/widget-types?finder=active
    GET /api/widget-types?finder=byCode&finderParams={"code":"BUTTON"}
"""

from flask import Blueprint, jsonify
from ..services.widget_type_service import widget_type_service
from ..utils.request_helpers import get_json_body, get_finder_args

widget_types_bp = Blueprint('widget_types', __name__)


@widget_types_bp.route('', methods=['GET'])
def list_widget_types():
    """
    GET /api/widget-types - List widget types

    Query params:
        finder: Optional finder name (active, byCode)
        finderParams: JSON object of finder parameters
    """
    finder, params = get_finder_args()
    if finder:
        return jsonify(widget_type_service.find(finder, params))
    return jsonify(widget_type_service.all())


@widget_types_bp.route('/<widget_type_id>', methods=['GET'])
def get_widget_type(widget_type_id):
    """GET /api/widget-types/{id} - Get one widget type"""
    return jsonify(widget_type_service.get(widget_type_id))


@widget_types_bp.route('', methods=['POST'])
def create_widget_type():
    """
    POST /api/widget-types - Create a widget type

    Request Body:
        {
            "code": "BUTTON",
            "name": "Button Widget",
            "description": "...",   (optional)
            "isActive": true        (optional, default true)
        }
    """
    data = get_json_body()
    return jsonify(widget_type_service.create(data)), 201


@widget_types_bp.route('/<widget_type_id>', methods=['PUT'])
def update_widget_type(widget_type_id):
    """PUT /api/widget-types/{id} - Update the fields present in the body"""
    data = get_json_body()
    return jsonify(widget_type_service.update(widget_type_id, data))


@widget_types_bp.route('/<widget_type_id>', methods=['DELETE'])
def delete_widget_type(widget_type_id):
    """
    DELETE /api/widget-types/{id} - Hard delete a widget type

    Widgets of this type are not deleted.
    """
    widget_type_service.remove(widget_type_id)
    return jsonify({
        'success': True,
        'message': f'Widget type {widget_type_id} deleted successfully',
    })
