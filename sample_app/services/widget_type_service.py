"""
Widget Type Service.

Validation, normalization, CRUD and finders for widget types.
Reads go through the two layer cache; writes refresh the item layer and
invalidate cached queries.
"""
import logging
import re
from typing import Optional, Dict, Any, List

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import WidgetType
from ..utils.cache import TwoLayerCache
from ..utils.exceptions import (
    ValidationError,
    DuplicateError,
    WidgetTypeNotFoundError,
)
from .widget_service import widget_cache

logger = logging.getLogger(__name__)

CODE_MAX_LENGTH = 50
NAME_MAX_LENGTH = 255

CODE_PATTERN = re.compile(r'^[A-Za-z_]+$')
CODE_FORMAT_MESSAGE = 'Widget type code must contain only uppercase letters and underscores'

widget_type_cache = TwoLayerCache('widgetType')


def validate_code(code) -> List[str]:
    """Validate a raw (not yet normalized) widget type code."""
    if not isinstance(code, str) or not code.strip():
        return ['Widget type code is required']

    code = code.strip()
    errors = []
    if len(code) > CODE_MAX_LENGTH:
        errors.append(f'Widget type code must be {CODE_MAX_LENGTH} characters or less')

    if not CODE_PATTERN.match(code):
        errors.append(CODE_FORMAT_MESSAGE)
    elif re.search(r'[A-Z]', code) and re.search(r'[a-z]', code):
        # Mixed case is ambiguous; all-lowercase is upper-cased instead
        errors.append(CODE_FORMAT_MESSAGE)

    return errors


def validate_name(name) -> List[str]:
    """Validate a widget type name."""
    if not isinstance(name, str) or not name.strip():
        return ['Widget type name is required']
    if len(name.strip()) > NAME_MAX_LENGTH:
        return [f'Widget type name must be {NAME_MAX_LENGTH} characters or less']
    return []


def normalize_code(code: str) -> str:
    return code.strip().upper()


class WidgetTypeService:
    """CRUD operations and finders for widget types."""

    FINDERS = ('active', 'byCode')

    # ==================== Reads ====================

    def all(self) -> List[Dict[str, Any]]:
        """All widget types, newest first."""
        cached = widget_type_cache.get_query('all')
        if cached is not None:
            return cached

        items = [wt.to_dict() for wt in WidgetType.query.order_by(WidgetType.created_at.desc()).all()]
        widget_type_cache.set_query('all', None, items, complete=True)
        return items

    def get(self, widget_type_id: str) -> Dict[str, Any]:
        """Get one widget type by id."""
        cached = widget_type_cache.get_item(widget_type_id)
        if cached is not None:
            return cached

        widget_type = self._load(widget_type_id)
        item = widget_type.to_dict()
        widget_type_cache.set_item(item)
        return item

    def find(self, finder: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Run a named finder.

        Finders:
            active            Active widget types
            byCode {code}     Widget types with the given code (case-insensitive input)
        """
        params = params or {}
        if finder not in self.FINDERS:
            raise ValidationError(
                f"Unknown widget type finder '{finder}'. Must be one of: {', '.join(self.FINDERS)}",
                field='finder'
            )

        cached = widget_type_cache.get_query(finder, params)
        if cached is not None:
            return cached

        if finder == 'active':
            logger.info('Finding active widget types')
            results = WidgetType.get_active()
        else:
            code = params.get('code')
            if not isinstance(code, str) or not code.strip():
                raise ValidationError('Finder byCode requires a code parameter', field='code')
            logger.info('Finding widget type by code %s', code)
            results = (
                WidgetType.query.filter_by(code=normalize_code(code))
                .order_by(WidgetType.created_at.desc())
                .all()
            )

        items = [wt.to_dict() for wt in results]
        widget_type_cache.set_query(finder, params, items, complete=False)
        return items

    # ==================== Writes ====================

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a widget type.

        Args:
            payload: {code, name, description?, isActive?}

        Raises:
            ValidationError: On any invalid field (all errors joined with '; ')
            DuplicateError: If the normalized code is already taken
        """
        logger.info('Creating widget type code=%s name=%s', payload.get('code'), payload.get('name'))

        errors = validate_code(payload.get('code')) + validate_name(payload.get('name'))
        errors += self._validate_optional(payload)
        if errors:
            raise ValidationError('; '.join(errors))

        code = normalize_code(payload['code'])
        if WidgetType.get_by_code(code):
            raise DuplicateError('Widget type', f'code {code}')

        widget_type = WidgetType(
            code=code,
            name=payload['name'].strip(),
            description=payload.get('description'),
            is_active=payload.get('isActive', True),
        )
        db.session.add(widget_type)
        self._commit(code)

        item = widget_type.to_dict()
        widget_type_cache.set_item(item)
        widget_type_cache.invalidate_queries()
        logger.info('Created widget type %s (%s)', widget_type.id, code)
        return item

    def update(self, widget_type_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update fields present in `updates`; the same rules as create apply to each.

        Raises:
            WidgetTypeNotFoundError, ValidationError, DuplicateError
        """
        logger.info('Updating widget type %s fields=%s', widget_type_id, sorted(updates))
        widget_type = self._load(widget_type_id)

        errors = []
        if 'code' in updates:
            errors += validate_code(updates['code'])
        if 'name' in updates:
            errors += validate_name(updates['name'])
        errors += self._validate_optional(updates)
        if errors:
            raise ValidationError('; '.join(errors))

        code_changed = False
        if 'code' in updates:
            code = normalize_code(updates['code'])
            existing = WidgetType.get_by_code(code)
            if existing and existing.id != widget_type.id:
                raise DuplicateError('Widget type', f'code {code}')
            code_changed = code != widget_type.code
            widget_type.code = code
        if 'name' in updates:
            widget_type.name = updates['name'].strip()
        if 'description' in updates:
            widget_type.description = updates['description']
        if 'isActive' in updates:
            widget_type.is_active = updates['isActive']

        self._commit(widget_type.code)

        item = widget_type.to_dict()
        widget_type_cache.set_item(item)
        widget_type_cache.invalidate_queries()
        if code_changed:
            # byTypeCode widget queries are keyed by the old code
            widget_cache.invalidate_queries()
        return item

    def remove(self, widget_type_id: str) -> bool:
        """Hard delete a widget type. Its widgets are left in place."""
        widget_type = self._load(widget_type_id)
        logger.info('Removing widget type %s (%s)', widget_type.id, widget_type.code)

        db.session.delete(widget_type)
        db.session.commit()

        widget_type_cache.delete_item(widget_type_id)
        widget_type_cache.invalidate_queries()
        widget_cache.invalidate_queries()
        return True

    # ==================== Helpers ====================

    def _load(self, widget_type_id: str) -> WidgetType:
        widget_type = db.session.get(WidgetType, widget_type_id)
        if not widget_type:
            raise WidgetTypeNotFoundError(widget_type_id)
        return widget_type

    def _validate_optional(self, payload: Dict[str, Any]) -> List[str]:
        errors = []
        if 'isActive' in payload and not isinstance(payload['isActive'], bool):
            errors.append('Widget type isActive must be a boolean')
        description = payload.get('description')
        if description is not None and not isinstance(description, str):
            errors.append('Widget type description must be a string')
        return errors

    def _commit(self, code: str):
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same code
            db.session.rollback()
            raise DuplicateError('Widget type', f'code {code}')


# Singleton instance
widget_type_service = WidgetTypeService()
