"""
Widget Service.

Validation, normalization, CRUD and finders for widgets. A widget can only
be created against an existing, active widget type.
"""
import json
import logging
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, List

from ..extensions import db
from ..models import Widget, WidgetType
from ..utils.cache import TwoLayerCache
from ..utils.exceptions import ValidationError, WidgetNotFoundError

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 255

widget_cache = TwoLayerCache('widget')


def validate_widget_type_ref(widget_type_id) -> List[str]:
    """Check that a widget type id is present and points at an active type."""
    if not isinstance(widget_type_id, str) or not widget_type_id.strip():
        return ['Widget type ID is required']

    widget_type_id = widget_type_id.strip()
    widget_type = db.session.get(WidgetType, widget_type_id)
    if not widget_type:
        return [f'Widget type with ID {widget_type_id} does not exist']
    if not widget_type.is_active:
        return [f'Widget type with ID {widget_type_id} is not active']
    return []


def validate_name(name) -> List[str]:
    if not isinstance(name, str) or not name.strip():
        return ['Widget name is required']
    if len(name.strip()) > NAME_MAX_LENGTH:
        return [f'Widget name must be {NAME_MAX_LENGTH} characters or less']
    return []


def validate_data(data) -> List[str]:
    """Widget data may be any JSON value, or null."""
    if data is None:
        return []
    try:
        json.dumps(data)
    except (TypeError, ValueError) as e:
        return [f'Widget data must be JSON serializable: {e}']
    return []


class WidgetService:
    """CRUD operations, finders and summaries for widgets."""

    FINDERS = ('active', 'byType', 'byTypeCode')

    # ==================== Reads ====================

    def all(self) -> List[Dict[str, Any]]:
        """All widgets, newest first."""
        cached = widget_cache.get_query('all')
        if cached is not None:
            return cached

        items = [w.to_dict() for w in Widget.query.order_by(Widget.created_at.desc()).all()]
        widget_cache.set_query('all', None, items, complete=True)
        return items

    def get(self, widget_id: str) -> Dict[str, Any]:
        """Get one widget by id."""
        cached = widget_cache.get_item(widget_id)
        if cached is not None:
            return cached

        item = self._load(widget_id).to_dict()
        widget_cache.set_item(item)
        return item

    def find(self, finder: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Run a named finder.

        Finders:
            active                    Active widgets
            byType {widgetTypeId}     Widgets of one widget type
            byTypeCode {code}         Widgets whose type has the given code
        """
        params = params or {}
        if finder not in self.FINDERS:
            raise ValidationError(
                f"Unknown widget finder '{finder}'. Must be one of: {', '.join(self.FINDERS)}",
                field='finder'
            )

        cached = widget_cache.get_query(finder, params)
        if cached is not None:
            return cached

        logger.info('Finding widgets with finder %s params=%s', finder, params)
        if finder == 'active':
            results = Widget.get_active()
        elif finder == 'byType':
            widget_type_id = params.get('widgetTypeId')
            if not widget_type_id:
                raise ValidationError('Finder byType requires a widgetTypeId parameter', field='widgetTypeId')
            results = Widget.get_by_type(str(widget_type_id))
        else:
            code = params.get('code')
            if not isinstance(code, str) or not code.strip():
                raise ValidationError('Finder byTypeCode requires a code parameter', field='code')
            results = Widget.get_by_type_code(code.strip().upper())

        items = [w.to_dict() for w in results]
        widget_cache.set_query(finder, params, items, complete=False)
        return items

    def recent(self, days: int = 7) -> List[Dict[str, Any]]:
        """Widgets created in the last `days` days (facet query)."""
        params = {'days': days}
        cached = widget_cache.get_query('recent', params)
        if cached is not None:
            return cached

        since = datetime.utcnow() - timedelta(days=days)
        items = [w.to_dict() for w in Widget.get_recent(since)]
        widget_cache.set_query('recent', params, items, complete=False)
        return items

    def summary(self) -> Dict[str, Any]:
        """Totals for all widgets, with a per-type count."""
        widgets = self.all()

        total = len(widgets)
        active = sum(1 for w in widgets if w['isActive'])

        by_type = {}
        for widget in widgets:
            type_id = widget['widgetTypeId']
            by_type[type_id] = by_type.get(type_id, 0) + 1

        return {
            'total': total,
            'active': active,
            'inactive': total - active,
            'byType': by_type,
        }

    # ==================== Writes ====================

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a widget.

        Args:
            payload: {widgetTypeId, name, description?, isActive?, data?}

        Raises:
            ValidationError: On invalid fields or a missing/inactive widget type
        """
        logger.info('Creating widget name=%s type=%s', payload.get('name'), payload.get('widgetTypeId'))

        errors = validate_widget_type_ref(payload.get('widgetTypeId'))
        errors += validate_name(payload.get('name'))
        errors += self._validate_optional(payload)
        if errors:
            raise ValidationError('; '.join(errors))

        widget = Widget(
            widget_type_id=payload['widgetTypeId'].strip(),
            name=payload['name'].strip(),
            description=payload.get('description'),
            is_active=payload.get('isActive', True),
            data=payload.get('data'),
        )
        db.session.add(widget)
        db.session.commit()

        item = widget.to_dict()
        widget_cache.set_item(item)
        widget_cache.invalidate_queries()
        logger.info('Created widget %s', widget.id)
        return item

    def update(self, widget_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update fields present in `updates`.

        The name is trimmed here as on create. Moving a widget to another
        type requires that type to exist and be active.
        """
        logger.info('Updating widget %s fields=%s', widget_id, sorted(updates))
        widget = self._load(widget_id)

        errors = []
        if 'widgetTypeId' in updates and updates['widgetTypeId'] != widget.widget_type_id:
            errors += validate_widget_type_ref(updates['widgetTypeId'])
        if 'name' in updates:
            errors += validate_name(updates['name'])
        errors += self._validate_optional(updates)
        if errors:
            raise ValidationError('; '.join(errors))

        if 'widgetTypeId' in updates:
            widget.widget_type_id = updates['widgetTypeId'].strip()
        if 'name' in updates:
            widget.name = updates['name'].strip()
        if 'description' in updates:
            widget.description = updates['description']
        if 'isActive' in updates:
            widget.is_active = updates['isActive']
        if 'data' in updates:
            widget.data = updates['data']

        db.session.commit()

        item = widget.to_dict()
        widget_cache.set_item(item)
        widget_cache.invalidate_queries()
        return item

    def remove(self, widget_id: str) -> bool:
        """Hard delete a widget."""
        widget = self._load(widget_id)
        logger.info('Removing widget %s', widget.id)

        db.session.delete(widget)
        db.session.commit()

        widget_cache.delete_item(widget_id)
        widget_cache.invalidate_queries()
        return True

    # ==================== Helpers ====================

    def _load(self, widget_id: str) -> Widget:
        widget = db.session.get(Widget, widget_id)
        if not widget:
            raise WidgetNotFoundError(widget_id)
        return widget

    def _validate_optional(self, payload: Dict[str, Any]) -> List[str]:
        errors = []
        if 'isActive' in payload and not isinstance(payload['isActive'], bool):
            errors.append('Widget isActive must be a boolean')
        description = payload.get('description')
        if description is not None and not isinstance(description, str):
            errors.append('Widget description must be a string')
        errors += validate_data(payload.get('data'))
        return errors


# Singleton instance
widget_service = WidgetService()
