"""
Tests for the Widgets API endpoints.

Tests cover:
- CRUD at /api/widgets
- Finders (active, byType, byTypeCode)
- Summary statistics
- Validation errors for missing or inactive widget types
"""
import json


class TestWidgetsList:
    """Tests for GET /api/widgets."""

    def test_list_empty(self, client):
        response = client.get('/api/widgets')
        assert response.status_code == 200
        assert response.get_json() == []

    def test_list_with_widget(self, client, sample_widget):
        response = client.get('/api/widgets')
        assert response.status_code == 200
        data = response.get_json()
        assert len(data) == 1
        assert data[0]['name'] == 'Test Widget'
        assert data[0]['data'] == {'text': 'Click Me', 'color': 'primary'}

    def test_active_finder(self, client, json_headers, sample_widget, sample_widget_type):
        client.post('/api/widgets', headers=json_headers, data=json.dumps({
            'widgetTypeId': sample_widget_type['id'],
            'name': 'Hidden',
            'isActive': False,
        }))

        response = client.get('/api/widgets?finder=active')
        assert response.status_code == 200
        assert [w['name'] for w in response.get_json()] == ['Test Widget']

    def test_by_type_finder(self, client, sample_widget, sample_widget_type):
        params = json.dumps({'widgetTypeId': sample_widget_type['id']})
        response = client.get('/api/widgets', query_string={'finder': 'byType', 'finderParams': params})
        assert response.status_code == 200
        assert [w['id'] for w in response.get_json()] == [sample_widget['id']]

    def test_by_type_code_finder(self, client, sample_widget):
        params = json.dumps({'code': 'TEST_BUTTON'})
        response = client.get('/api/widgets', query_string={'finder': 'byTypeCode', 'finderParams': params})
        assert response.status_code == 200
        assert len(response.get_json()) == 1

    def test_finder_params_must_be_object(self, client):
        response = client.get('/api/widgets', query_string={'finder': 'byType', 'finderParams': '[1, 2]'})
        assert response.status_code == 400


class TestWidgetSummary:
    """Tests for GET /api/widgets/summary."""

    def test_summary_empty(self, client):
        response = client.get('/api/widgets/summary')
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['data'] == {'total': 0, 'active': 0, 'inactive': 0, 'byType': {}}

    def test_summary_counts(self, client, sample_widget, sample_widget_type):
        response = client.get('/api/widgets/summary')
        data = response.get_json()['data']
        assert data['total'] == 1
        assert data['active'] == 1
        assert data['byType'] == {sample_widget_type['id']: 1}


class TestWidgetGet:
    """Tests for GET /api/widgets/{id}."""

    def test_get_by_id(self, client, sample_widget):
        response = client.get(f"/api/widgets/{sample_widget['id']}")
        assert response.status_code == 200
        assert response.get_json()['id'] == sample_widget['id']

    def test_get_not_found(self, client):
        response = client.get('/api/widgets/99999')
        assert response.status_code == 404
        assert response.get_json()['error']['message'] == 'Widget with ID 99999 not found'


class TestWidgetCreate:
    """Tests for POST /api/widgets."""

    def test_create(self, client, json_headers, sample_widget_type):
        response = client.post('/api/widgets', headers=json_headers, data=json.dumps({
            'widgetTypeId': sample_widget_type['id'],
            'name': '  Primary Action Button  ',
            'data': {'text': 'Get Started', 'size': 'large'},
        }))
        assert response.status_code == 201
        data = response.get_json()
        assert data['name'] == 'Primary Action Button'
        assert data['isActive'] is True
        assert data['data'] == {'text': 'Get Started', 'size': 'large'}

    def test_create_with_missing_widget_type(self, client, json_headers):
        response = client.post('/api/widgets', headers=json_headers, data=json.dumps({
            'widgetTypeId': 'non-existent-widget-type-id',
            'name': 'Orphan',
        }))
        assert response.status_code == 400
        error = response.get_json()['error']
        assert error['code'] == 'VALIDATION_ERROR'
        assert error['message'] == 'Widget type with ID non-existent-widget-type-id does not exist'

    def test_create_with_inactive_widget_type(self, client, json_headers, inactive_widget_type):
        response = client.post('/api/widgets', headers=json_headers, data=json.dumps({
            'widgetTypeId': inactive_widget_type['id'],
            'name': 'Too Late',
        }))
        assert response.status_code == 400
        assert 'is not active' in response.get_json()['error']['message']

    def test_create_empty_body(self, client, json_headers):
        response = client.post('/api/widgets', headers=json_headers, data=json.dumps({}))
        assert response.status_code == 400
        assert response.get_json()['error']['message'] == 'Request body cannot be empty'

    def test_create_invalidates_cached_list(self, client, json_headers, sample_widget, sample_widget_type):
        assert len(client.get('/api/widgets').get_json()) == 1

        client.post('/api/widgets', headers=json_headers, data=json.dumps({
            'widgetTypeId': sample_widget_type['id'],
            'name': 'Second',
        }))

        assert len(client.get('/api/widgets').get_json()) == 2


class TestWidgetUpdate:
    """Tests for PUT /api/widgets/{id}."""

    def test_update(self, client, json_headers, sample_widget):
        response = client.put(
            f"/api/widgets/{sample_widget['id']}",
            headers=json_headers,
            data=json.dumps({'name': '  Renamed  ', 'isActive': False})
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'Renamed'
        assert data['isActive'] is False

    def test_update_refreshes_finders(self, client, json_headers, sample_widget):
        assert len(client.get('/api/widgets?finder=active').get_json()) == 1

        client.put(
            f"/api/widgets/{sample_widget['id']}",
            headers=json_headers,
            data=json.dumps({'isActive': False})
        )

        assert client.get('/api/widgets?finder=active').get_json() == []

    def test_update_invalid_is_active(self, client, json_headers, sample_widget):
        response = client.put(
            f"/api/widgets/{sample_widget['id']}",
            headers=json_headers,
            data=json.dumps({'isActive': 'no'})
        )
        assert response.status_code == 400

    def test_update_not_found(self, client, json_headers):
        response = client.put('/api/widgets/nope', headers=json_headers, data=json.dumps({'name': 'X'}))
        assert response.status_code == 404


class TestWidgetDelete:
    """Tests for DELETE /api/widgets/{id}."""

    def test_delete(self, client, sample_widget):
        url = f"/api/widgets/{sample_widget['id']}"
        response = client.delete(url)
        assert response.status_code == 200
        assert response.get_json() == {'success': True, 'message': 'Widget deleted successfully'}

        assert client.get(url).status_code == 404
        assert client.get('/api/widgets').get_json() == []

    def test_delete_not_found(self, client):
        assert client.delete('/api/widgets/nope').status_code == 404
