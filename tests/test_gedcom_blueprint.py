"""
Tests for the GEDCOM API blueprint
"""

import io
from unittest.mock import patch

from shajara.services.exceptions import ServiceError


class TestImportEndpoint:
    """Test POST /api/gedcom/import"""

    def upload(self, client, content, filename='family.ged', tree_id='tree-1'):
        data = {'file': (io.BytesIO(content.encode('utf-8')), filename)}
        if tree_id is not None:
            data['tree_id'] = tree_id
        return client.post('/api/gedcom/import', data=data, content_type='multipart/form-data')

    def test_import_success(self, client, family_gedcom_data):
        response = self.upload(client, family_gedcom_data)

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['persons_found'] == 3
        assert data['families_found'] == 1
        assert len(data['persons']) == 3
        assert len(data['relationships']) == 3
        assert data['errors'] == []
        assert data['stats']['relationships_created'] == 3

    def test_import_reports_malformed_lines(self, client):
        response = self.upload(client, "0 @I1@ INDI\nnot gedcom\n1 NAME Sami\n")

        assert response.status_code == 200
        assert response.get_json()['errors'] == ["Line 2: Invalid GEDCOM format: not gedcom"]

    def test_import_without_file(self, client):
        response = client.post('/api/gedcom/import', data={'tree_id': 'tree-1'},
                               content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'error': 'No file provided'}

    def test_import_without_tree_id(self, client, sample_gedcom_data):
        response = self.upload(client, sample_gedcom_data, tree_id=None)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'tree_id is required'

    def test_import_wrong_extension(self, client, sample_gedcom_data):
        response = self.upload(client, sample_gedcom_data, filename='family.txt')
        assert response.status_code == 400
        assert 'Invalid file type' in response.get_json()['error']

    def test_import_too_large(self, app, client, sample_gedcom_data):
        app.config['GEDCOM_MAX_UPLOAD_BYTES'] = 10
        response = self.upload(client, sample_gedcom_data)
        assert response.status_code == 400
        assert 'File too large' in response.get_json()['error']

    def test_import_get_not_allowed(self, client):
        response = client.get('/api/gedcom/import')
        assert response.status_code == 405


class TestExportEndpoint:
    """Test POST /api/gedcom/export"""

    def payload(self):
        return {
            'tree': {'id': 'tree-1', 'name': 'شجرة'},
            'persons': [
                {'id': 'p1', 'given_name': 'أحمد', 'family_name': 'الحداد', 'kunya': 'أبو محمد'},
                {'id': 'p2', 'given_name': 'عمر', 'family_name': 'الحداد'},
            ],
            'relationships': [
                {'id': 'r1', 'person1_id': 'p1', 'person2_id': 'p2', 'relationship_type': 'parent'},
            ],
            'options': {'include_hijri_dates': True},
        }

    def test_export_success(self, client):
        response = client.post('/api/gedcom/export', json=self.payload())

        assert response.status_code == 200
        assert response.mimetype == 'application/x-gedcom'
        assert 'attachment' in response.headers['Content-Disposition']
        assert response.headers['X-Persons-Exported'] == '2'
        assert response.headers['X-Families-Exported'] == '1'

        content = response.get_data(as_text=True)
        assert content.startswith('0 HEAD')
        assert '2 _KUNYA أبو محمد' in content
        assert '1 NAME Test Submitter' in content

    def test_export_missing_persons(self, client):
        response = client.post('/api/gedcom/export', json={'tree': {'name': 'x'}})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required fields: persons'

    def test_export_not_json(self, client):
        response = client.post('/api/gedcom/export', data='plain text', content_type='text/plain')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No data provided'

    def test_export_invalid_person(self, client):
        response = client.post('/api/gedcom/export', json={'persons': [{'given_name': 'x'}]})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    @patch('shajara.blueprints.gedcom.GedcomService.export_tree')
    def test_export_service_failure(self, mock_export, client):
        mock_export.side_effect = ServiceError('disk on fire')
        response = client.post('/api/gedcom/export', json=self.payload())
        assert response.status_code == 500
        assert response.get_json() == {'success': False, 'error': 'disk on fire'}


class TestErrorHandlers:
    """Test JSON error responses"""

    def test_unknown_route(self, client):
        response = client.get('/api/gedcom/nothing-here')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Resource not found'}

    @patch('shajara.blueprints.gedcom.GedcomService.export_tree')
    def test_unexpected_exception(self, mock_export, client):
        mock_export.side_effect = RuntimeError('unexpected')
        response = client.post('/api/gedcom/export', json={'persons': []})
        assert response.status_code == 500
        assert response.get_json()['error'] == 'An unexpected error occurred'
