"""Tests for the attachment storage service."""

import pytest
from unittest.mock import Mock, patch
from libcloud.storage.types import Provider, ContainerDoesNotExistError, ObjectDoesNotExistError
from eshs_api.services.cloud_storage import (
    AttachmentStorage, ProxyUploadStorage, PresignedUploadStorage, StorageConfigurationError
)


@pytest.fixture
def storage_config():
    return {
        'STORAGE_PROVIDER': 's3',
        'STORAGE_ACCESS_KEY': 'test_key',
        'STORAGE_SECRET_KEY': 'test_secret',
        'STORAGE_BUCKET': 'test-bucket',
        'STORAGE_REGION': 'eu-west-1',
        'STORAGE_KEY_PREFIX': 'documents',
    }


def test_object_key_is_prefixed_timestamped_and_sanitized(storage_config):
    storage = AttachmentStorage(storage_config)
    with patch('eshs_api.services.cloud_storage.time.time', return_value=1700000000.5):
        key = storage.object_key('../../etc/Risk Register.xlsx')
    assert key == 'documents/1700000000500-etc_Risk_Register.xlsx'


def test_object_key_for_unusable_name(storage_config):
    storage = AttachmentStorage(storage_config)
    assert storage.object_key('///').endswith('-file')


def test_file_url_defaults_to_bucket_host(storage_config):
    storage = AttachmentStorage(storage_config)
    assert storage.file_url('documents/1-a.pdf') == 'https://test-bucket.s3.eu-west-1.amazonaws.com/documents/1-a.pdf'


def test_file_url_uses_public_url_when_configured(storage_config):
    storage_config['STORAGE_PUBLIC_URL'] = 'https://cdn.example.com/eshs/'
    storage = AttachmentStorage(storage_config)
    assert storage.file_url('documents/1-a.pdf') == 'https://cdn.example.com/eshs/documents/1-a.pdf'


@patch('eshs_api.services.cloud_storage.get_driver')
def test_driver_created_lazily_once(mock_get_driver, storage_config):
    storage = ProxyUploadStorage(storage_config)
    mock_get_driver.assert_not_called()

    assert storage.client is storage.client
    mock_get_driver.assert_called_once_with(Provider.S3)
    mock_get_driver.return_value.assert_called_once_with(key='test_key', secret='test_secret', region='eu-west-1')


@patch('eshs_api.services.cloud_storage.get_driver')
def test_minio_endpoint_is_passed_to_driver(mock_get_driver, storage_config):
    storage_config.update({'STORAGE_PROVIDER': 'minio', 'STORAGE_ENDPOINT_URL': 'http://localhost:9000'})
    ProxyUploadStorage(storage_config).client

    mock_get_driver.return_value.assert_called_once_with(
        key='test_key', secret='test_secret', region='eu-west-1', host='localhost', secure=False, port=9000
    )


def test_unsupported_provider(storage_config):
    storage_config['STORAGE_PROVIDER'] = 'ftp'
    with pytest.raises(StorageConfigurationError, match='Unsupported provider'):
        ProxyUploadStorage(storage_config).client


def test_incomplete_configuration_fails_on_first_use(storage_config):
    del storage_config['STORAGE_SECRET_KEY']
    storage = ProxyUploadStorage(storage_config)
    with pytest.raises(StorageConfigurationError, match='STORAGE_SECRET_KEY'):
        storage.ingest('a.pdf', 'application/pdf', b'data')


@patch('eshs_api.services.cloud_storage.get_driver')
def test_missing_container_is_created(mock_get_driver, storage_config):
    driver = Mock()
    driver.get_container.side_effect = ContainerDoesNotExistError(None, driver, 'test-bucket')
    mock_get_driver.return_value.return_value = driver

    result = ProxyUploadStorage(storage_config).ingest('a.pdf', None, b'data')

    driver.create_container.assert_called_once_with(container_name='test-bucket')
    kwargs = driver.upload_object_via_stream.call_args.kwargs
    assert kwargs['container'] is driver.create_container.return_value
    assert kwargs['extra'] == {'content_type': 'application/octet-stream'}
    assert result['fileUrl'].endswith('-a.pdf')


@patch('eshs_api.services.cloud_storage.get_driver')
def test_large_payload_is_streamed_in_chunks(mock_get_driver, storage_config):
    driver = Mock()
    mock_get_driver.return_value.return_value = driver
    payload = b'a' * (ProxyUploadStorage.chunk_size * 2 + 10)

    ProxyUploadStorage(storage_config).ingest('big.bin', 'application/octet-stream', payload)

    chunks = list(driver.upload_object_via_stream.call_args.kwargs['iterator'])
    assert [len(c) for c in chunks] == [ProxyUploadStorage.chunk_size, ProxyUploadStorage.chunk_size, 10]


@patch('eshs_api.services.cloud_storage.boto3.client')
def test_presigned_client_configuration(mock_boto_client, storage_config):
    storage_config['PRESIGNED_URL_EXPIRY'] = 600
    storage = PresignedUploadStorage(storage_config)
    mock_boto_client.return_value.generate_presigned_url.return_value = 'https://signed'

    result = storage.ingest('plan.pdf', 'application/pdf')

    args, kwargs = mock_boto_client.call_args
    assert args == ('s3',)
    assert kwargs['region_name'] == 'eu-west-1'
    assert kwargs['aws_access_key_id'] == 'test_key'
    assert kwargs['config'].signature_version == 's3v4'
    assert mock_boto_client.return_value.generate_presigned_url.call_args.kwargs['ExpiresIn'] == 600
    assert result['url'] == 'https://signed'
    assert result['fileUrl'] == f"https://test-bucket.s3.eu-west-1.amazonaws.com/{result['key']}"


def test_presigned_requires_bucket(storage_config):
    del storage_config['STORAGE_BUCKET']
    with pytest.raises(StorageConfigurationError, match='STORAGE_BUCKET'):
        PresignedUploadStorage(storage_config).ingest('plan.pdf', 'application/pdf')


def test_file_url_uses_custom_endpoint_path_style(storage_config):
    storage_config.update({'STORAGE_PROVIDER': 'minio', 'STORAGE_ENDPOINT_URL': 'http://localhost:9000/'})
    storage = AttachmentStorage(storage_config)
    assert storage.file_url('documents/1-a.pdf') == 'http://localhost:9000/test-bucket/documents/1-a.pdf'


def test_public_url_wins_over_endpoint(storage_config):
    storage_config.update({
        'STORAGE_ENDPOINT_URL': 'http://localhost:9000',
        'STORAGE_PUBLIC_URL': 'https://files.example.com',
    })
    storage = AttachmentStorage(storage_config)
    assert storage.file_url('documents/1-a.pdf') == 'https://files.example.com/documents/1-a.pdf'


def test_key_from_url(storage_config):
    storage = AttachmentStorage(storage_config)
    url = storage.file_url('documents/1-a.pdf')

    assert storage.key_from_url(url) == 'documents/1-a.pdf'
    assert storage.key_from_url('https://elsewhere.example.com/documents/1-a.pdf') is None
    assert storage.key_from_url('https://test-bucket.s3.eu-west-1.amazonaws.com/') is None
    assert storage.key_from_url('') is None
    assert storage.key_from_url(None) is None


@patch('eshs_api.services.cloud_storage.get_driver')
def test_delete_removes_object(mock_get_driver, storage_config):
    driver = Mock()
    mock_get_driver.return_value.return_value = driver

    assert ProxyUploadStorage(storage_config).delete('documents/1-a.pdf') is True

    driver.get_object.assert_called_once_with('test-bucket', 'documents/1-a.pdf')
    driver.delete_object.assert_called_once_with(driver.get_object.return_value)


@patch('eshs_api.services.cloud_storage.get_driver')
def test_delete_of_absent_object(mock_get_driver, storage_config):
    driver = Mock()
    driver.get_object.side_effect = ObjectDoesNotExistError(None, driver, 'documents/1-a.pdf')
    mock_get_driver.return_value.return_value = driver

    assert ProxyUploadStorage(storage_config).delete('documents/1-a.pdf') is False
    driver.delete_object.assert_not_called()


@patch('eshs_api.services.cloud_storage.get_driver')
def test_discard_ignores_foreign_urls(mock_get_driver, storage_config):
    driver = Mock()
    mock_get_driver.return_value.return_value = driver
    storage = ProxyUploadStorage(storage_config)

    assert storage.discard('https://intranet.example.com/law.pdf') is False
    driver.get_object.assert_not_called()

    assert storage.discard(storage.file_url('documents/2-b.pdf')) is True
    driver.get_object.assert_called_once_with('test-bucket', 'documents/2-b.pdf')
