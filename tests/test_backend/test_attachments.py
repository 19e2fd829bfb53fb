"""Tests for removing stored attachments when records drop them."""
import logging
import pytest
from unittest.mock import Mock, patch
from libcloud.storage.types import ObjectDoesNotExistError

BUCKET = 'https://test-bucket.s3.us-east-1.amazonaws.com/'


@pytest.fixture
def driver():
    """Libcloud driver behind the proxy storage."""
    with patch('eshs_api.services.cloud_storage.get_driver') as mock_get_driver:
        mock_driver = Mock()
        mock_get_driver.return_value.return_value = mock_driver
        yield mock_driver


def create_requirement(client, law_file):
    response = client.post('/api/risks/legal-requirements', json={
        'number': 'LR-010',
        'documentTitle': 'Water Act',
        'effectiveDate': '2024-01-15T00:00:00.000Z',
        'description': 'Water resources law',
        'status': 'ACTIVE',
        'lawFile': law_file,
    })
    assert response.status_code == 201
    return response.get_json()


def deleted_keys(driver):
    return [call.args[1] for call in driver.get_object.call_args_list]


class TestLegalRequirementFiles:

    def test_delete_removes_law_file(self, client, driver):
        created = create_requirement(client, BUCKET + 'documents/1700000000000-water-act.pdf')

        response = client.delete(f"/api/risks/legal-requirements/{created['id']}")
        assert response.status_code == 200

        assert deleted_keys(driver) == ['documents/1700000000000-water-act.pdf']
        driver.delete_object.assert_called_once_with(driver.get_object.return_value)

    def test_replacing_law_file_removes_previous(self, client, driver):
        created = create_requirement(client, BUCKET + 'documents/1-old.pdf')

        response = client.put(f"/api/risks/legal-requirements/{created['id']}", json={
            'lawFile': BUCKET + 'documents/2-new.pdf'
        })
        assert response.status_code == 200
        assert response.get_json()['law_file'] == BUCKET + 'documents/2-new.pdf'
        assert deleted_keys(driver) == ['documents/1-old.pdf']

    def test_unrelated_update_keeps_law_file(self, client, driver):
        created = create_requirement(client, BUCKET + 'documents/1-old.pdf')

        client.put(f"/api/risks/legal-requirements/{created['id']}", json={'observation': 'Reviewed'})
        client.put(f"/api/risks/legal-requirements/{created['id']}", json={'lawFile': BUCKET + 'documents/1-old.pdf'})

        driver.get_object.assert_not_called()

    def test_foreign_law_file_is_left_alone(self, client, driver):
        created = create_requirement(client, 'https://files.example.com/laws/lr-010.pdf')

        assert client.delete(f"/api/risks/legal-requirements/{created['id']}").status_code == 200
        driver.get_object.assert_not_called()

    def test_storage_failure_does_not_block_delete(self, client, driver, caplog):
        driver.delete_object.side_effect = ConnectionError('bucket unreachable')
        created = create_requirement(client, BUCKET + 'documents/1-old.pdf')

        with caplog.at_level(logging.WARNING):
            response = client.delete(f"/api/risks/legal-requirements/{created['id']}")

        assert response.status_code == 200
        assert response.get_json() == {'success': True}
        assert client.get(f"/api/risks/legal-requirements/{created['id']}").status_code == 404
        assert any('Could not remove attachment' in r.getMessage() for r in caplog.records)

    def test_already_missing_object_is_fine(self, client, driver):
        driver.get_object.side_effect = ObjectDoesNotExistError(None, driver, 'documents/1-old.pdf')
        created = create_requirement(client, BUCKET + 'documents/1-old.pdf')

        assert client.delete(f"/api/risks/legal-requirements/{created['id']}").status_code == 200
        driver.delete_object.assert_not_called()


class TestDocumentFiles:

    def create_document(self, client, path):
        type_id = client.post('/api/document-types', json={'description': 'Permit'}).get_json()['id']
        response = client.post('/api/documents', json={
            'code': 'PRM-001',
            'document_name': 'Water Use Licence',
            'document_type': {'id': type_id},
            'document_state': 'Approved',
            'disposal_method': 'Archive',
            'creation_date': '2024-03-01T10:00:00.000Z',
            'document_path': path,
        })
        assert response.status_code == 201
        return response.get_json()

    def test_delete_removes_document_file(self, client, driver):
        document = self.create_document(client, BUCKET + 'documents/5-licence.pdf')

        assert client.delete(f"/api/documents/{document['id']}").status_code == 200
        assert deleted_keys(driver) == ['documents/5-licence.pdf']

    def test_replacing_document_file_removes_previous(self, client, driver):
        document = self.create_document(client, BUCKET + 'documents/5-licence.pdf')

        response = client.put(f"/api/documents/{document['id']}", json={
            'document_path': BUCKET + 'documents/6-licence-rev1.pdf'
        })
        assert response.status_code == 200
        assert deleted_keys(driver) == ['documents/5-licence.pdf']
