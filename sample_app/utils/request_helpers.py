"""
Request parsing helpers shared by the API blueprints.
"""
import json
from typing import Optional, Dict, Any, Tuple

from flask import request

from .exceptions import ValidationError


def get_json_body() -> Dict[str, Any]:
    """
    Return the request body as a JSON object.

    Raises:
        ValidationError: If the body is missing, not JSON, or not an object
    """
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError('Request body cannot be empty')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def get_finder_args() -> Tuple[Optional[str], Dict[str, Any]]:
    """
    Read ?finder=<name>&finderParams=<json> from the query string.

    Returns:
        (finder name or None, params dict)
    """
    finder = request.args.get('finder')
    if not finder:
        return None, {}

    raw_params = request.args.get('finderParams')
    if not raw_params:
        return finder, {}

    try:
        params = json.loads(raw_params)
    except ValueError:
        raise ValidationError('finderParams must be valid JSON', field='finderParams')

    if not isinstance(params, dict):
        raise ValidationError('finderParams must be a JSON object', field='finderParams')
    return finder, params
