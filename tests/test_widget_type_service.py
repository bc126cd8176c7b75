"""
Tests for WidgetTypeService.

Tests cover:
- Code and name normalization on create and update
- Code format rules (letters and underscores, no mixed case)
- Required fields and length limits
- Duplicate codes
- Finders (active, byCode)
- Hard delete without cascading to widgets
"""
import pytest

from sample_app.services.widget_type_service import widget_type_service
from sample_app.utils.exceptions import (
    ValidationError,
    DuplicateError,
    WidgetTypeNotFoundError,
)


class TestWidgetTypeCreate:
    """Tests for widget type creation."""

    def test_create_valid_widget_type(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({
                'code': 'TEST_BUTTON',
                'name': 'Test Button Widget',
                'description': 'A test button widget type',
            })

            assert widget_type['id']
            assert widget_type['code'] == 'TEST_BUTTON'
            assert widget_type['name'] == 'Test Button Widget'
            assert widget_type['description'] == 'A test button widget type'
            assert widget_type['isActive'] is True
            assert widget_type['createdAt'] is not None

    def test_lowercase_code_is_uppercased(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({'code': 'button', 'name': 'Button'})
            assert widget_type['code'] == 'BUTTON'

    def test_lowercase_code_with_underscores_is_uppercased(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({'code': 'test_lowercase', 'name': 'Lower'})
            assert widget_type['code'] == 'TEST_LOWERCASE'

    def test_code_and_name_are_trimmed(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({
                'code': '  TEST_TRIM  ',
                'name': '  Test Trim Widget  ',
            })
            assert widget_type['code'] == 'TEST_TRIM'
            assert widget_type['name'] == 'Test Trim Widget'

    def test_explicit_inactive_is_preserved(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({
                'code': 'INACTIVE_TYPE',
                'name': 'Inactive',
                'isActive': False,
            })
            assert widget_type['isActive'] is False

    @pytest.mark.parametrize('code', [
        'Mixed_Case',
        'INVALID-DASH',
        'INVALID SPACE',
        'INVALID@SYMBOL',
        'INVALID123',
        'INVALID.DOT',
    ])
    def test_invalid_code_format_rejected(self, app, code):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.create({'code': code, 'name': 'Bad Code'})
            assert 'uppercase letters and underscores' in exc_info.value.message

    @pytest.mark.parametrize('code', [
        'A',
        'TEST_TABLE',
        'A_B_C_D_E_F_G_H_I_J',
        'TEST_WIDGET_TYPE_WITH_MANY_UNDERSCORES',
    ])
    def test_valid_code_formats_accepted(self, app, code):
        with app.app_context():
            widget_type = widget_type_service.create({'code': code, 'name': f'{code} Widget Type'})
            assert widget_type['code'] == code

    @pytest.mark.parametrize('code', [None, '', '   '])
    def test_code_required(self, app, code):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.create({'code': code, 'name': 'No Code'})
            assert 'Widget type code is required' in exc_info.value.message

    def test_code_length_limit(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({'code': 'A' * 50, 'name': 'Max Code'})
            assert widget_type['code'] == 'A' * 50

            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.create({'code': 'B' * 51, 'name': 'Too Long'})
            assert '50 characters or less' in exc_info.value.message

    @pytest.mark.parametrize('name', [None, '', '   '])
    def test_name_required(self, app, name):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.create({'code': 'NO_NAME', 'name': name})
            assert 'Widget type name is required' in exc_info.value.message

    def test_name_length_limit(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({'code': 'MAX_NAME', 'name': 'N' * 255})
            assert len(widget_type['name']) == 255

            with pytest.raises(ValidationError):
                widget_type_service.create({'code': 'LONG_NAME', 'name': 'N' * 256})

    def test_multiple_errors_are_joined(self, app):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.create({'code': '', 'name': ''})
            assert exc_info.value.message == 'Widget type code is required; Widget type name is required'

    def test_non_boolean_is_active_rejected(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                widget_type_service.create({'code': 'FLAG', 'name': 'Flag', 'isActive': 'yes'})

    def test_duplicate_code_rejected(self, app, sample_widget_type):
        with app.app_context():
            with pytest.raises(DuplicateError) as exc_info:
                widget_type_service.create({'code': 'test_button', 'name': 'Another'})
            assert 'TEST_BUTTON' in exc_info.value.message

    def test_unicode_name_and_description(self, app):
        with app.app_context():
            widget_type = widget_type_service.create({
                'code': 'UNICODE',
                'name': '测试小部件类型 🎯',
                'description': 'Ñoño descripción with émojis 🚀',
            })
            assert widget_type['name'] == '测试小部件类型 🎯'
            assert widget_type['description'] == 'Ñoño descripción with émojis 🚀'


class TestWidgetTypeUpdate:
    """Tests for widget type updates."""

    def test_update_name(self, app, sample_widget_type):
        with app.app_context():
            updated = widget_type_service.update(sample_widget_type['id'], {'name': 'Updated Widget Type Name'})
            assert updated['name'] == 'Updated Widget Type Name'
            assert updated['id'] == sample_widget_type['id']

    def test_update_normalizes_code(self, app, sample_widget_type):
        with app.app_context():
            updated = widget_type_service.update(sample_widget_type['id'], {'code': '  updated_lowercase_code  '})
            assert updated['code'] == 'UPDATED_LOWERCASE_CODE'

    def test_update_trims_name(self, app, sample_widget_type):
        with app.app_context():
            updated = widget_type_service.update(sample_widget_type['id'], {'name': '  Updated Name  '})
            assert updated['name'] == 'Updated Name'

    def test_update_description_and_active(self, app, sample_widget_type):
        with app.app_context():
            updated = widget_type_service.update(sample_widget_type['id'], {
                'description': 'Updated description',
                'isActive': False,
            })
            assert updated['description'] == 'Updated description'
            assert updated['isActive'] is False
            assert updated['code'] == 'TEST_BUTTON'

    def test_update_rejects_mixed_case_code(self, app, sample_widget_type):
        with app.app_context():
            with pytest.raises(ValidationError):
                widget_type_service.update(sample_widget_type['id'], {'code': 'Mixed_Case'})

            assert widget_type_service.get(sample_widget_type['id'])['code'] == 'TEST_BUTTON'

    def test_update_rejects_empty_name(self, app, sample_widget_type):
        with app.app_context():
            with pytest.raises(ValidationError):
                widget_type_service.update(sample_widget_type['id'], {'name': '  '})

    def test_update_to_existing_code_rejected(self, app, sample_widget_type):
        with app.app_context():
            other = widget_type_service.create({'code': 'OTHER', 'name': 'Other'})
            with pytest.raises(DuplicateError):
                widget_type_service.update(other['id'], {'code': 'TEST_BUTTON'})

    def test_update_keeping_own_code_allowed(self, app, sample_widget_type):
        with app.app_context():
            updated = widget_type_service.update(sample_widget_type['id'], {'code': 'TEST_BUTTON', 'name': 'Same'})
            assert updated['code'] == 'TEST_BUTTON'

    def test_update_missing_widget_type(self, app):
        with app.app_context():
            with pytest.raises(WidgetTypeNotFoundError):
                widget_type_service.update('does-not-exist', {'name': 'Nope'})


class TestWidgetTypeReadAndRemove:
    """Tests for get, all and remove."""

    def test_get_by_id(self, app, sample_widget_type):
        with app.app_context():
            widget_type = widget_type_service.get(sample_widget_type['id'])
            assert widget_type['code'] == 'TEST_BUTTON'

    def test_get_missing(self, app):
        with app.app_context():
            with pytest.raises(WidgetTypeNotFoundError) as exc_info:
                widget_type_service.get('missing-id')
            assert 'missing-id' in exc_info.value.message

    def test_all_lists_every_type(self, app, sample_widget_type, inactive_widget_type):
        with app.app_context():
            codes = {wt['code'] for wt in widget_type_service.all()}
            assert codes == {'TEST_BUTTON', 'TEST_RETIRED'}

    def test_remove(self, app, sample_widget_type):
        with app.app_context():
            assert widget_type_service.remove(sample_widget_type['id']) is True
            with pytest.raises(WidgetTypeNotFoundError):
                widget_type_service.get(sample_widget_type['id'])

    def test_remove_missing(self, app):
        with app.app_context():
            with pytest.raises(WidgetTypeNotFoundError):
                widget_type_service.remove('missing-id')

    def test_remove_does_not_cascade_to_widgets(self, app, sample_widget_type, sample_widget):
        from sample_app.models import Widget
        from sample_app.extensions import db

        with app.app_context():
            widget_type_service.remove(sample_widget_type['id'])

        with app.app_context():
            widget = db.session.get(Widget, sample_widget['id'])
            assert widget is not None
            assert widget.widget_type_id == sample_widget_type['id']


class TestWidgetTypeFinders:
    """Tests for widget type finders."""

    def test_active_finder(self, app, sample_widget_type, inactive_widget_type):
        with app.app_context():
            results = widget_type_service.find('active')
            assert [wt['code'] for wt in results] == ['TEST_BUTTON']

    def test_by_code_finder_is_case_insensitive(self, app, sample_widget_type):
        with app.app_context():
            results = widget_type_service.find('byCode', {'code': 'test_button'})
            assert len(results) == 1
            assert results[0]['id'] == sample_widget_type['id']

    def test_by_code_finder_no_match(self, app, sample_widget_type):
        with app.app_context():
            assert widget_type_service.find('byCode', {'code': 'NOPE'}) == []

    def test_by_code_requires_code(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                widget_type_service.find('byCode', {})

    def test_unknown_finder(self, app):
        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                widget_type_service.find('byColor', {'color': 'red'})
            assert 'Unknown widget type finder' in exc_info.value.message
