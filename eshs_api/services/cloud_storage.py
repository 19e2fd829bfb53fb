"""Attachment storage: proxied uploads via Apache Libcloud, direct uploads via S3 pre-signed URLs."""

import logging
import time
from threading import Lock
from urllib.parse import urlparse
from werkzeug.utils import secure_filename
from libcloud.storage.types import Provider, ContainerDoesNotExistError, ObjectDoesNotExistError
from libcloud.storage.providers import get_driver
import boto3
from botocore.config import Config as BotoConfig


logger = logging.getLogger(__name__)


class StorageConfigurationError(RuntimeError):
    """Raised on first use when required storage settings are missing."""


class AttachmentStorage:
    """Shared configuration, object naming and public URL rules for attachments.

    Settings are read from the Flask config mapping at construction time but
    only checked when the first attachment is ingested, so an application
    without storage credentials still starts and serves every other endpoint.
    """

    required_settings = ('STORAGE_BUCKET',)

    def __init__(self, config):
        self.provider_name = config.get('STORAGE_PROVIDER', 's3')
        self.access_key = config.get('STORAGE_ACCESS_KEY')
        self.secret_key = config.get('STORAGE_SECRET_KEY')
        self.bucket_name = config.get('STORAGE_BUCKET')
        self.region = config.get('STORAGE_REGION', 'us-east-1')
        self.endpoint_url = config.get('STORAGE_ENDPOINT_URL')
        self.public_url = config.get('STORAGE_PUBLIC_URL')
        self.key_prefix = config.get('STORAGE_KEY_PREFIX', 'documents')
        self._settings = {name: config.get(name) for name in self.required_settings}
        self._client = None
        self._client_lock = Lock()

    def check_configuration(self):
        missing = [name for name, value in self._settings.items() if not value]
        if missing:
            raise StorageConfigurationError(
                f"Cloud storage configuration incomplete, missing: {', '.join(missing)}"
            )

    @property
    def client(self):
        """Storage client, created on first use (thread-safe)."""
        if self._client is None:
            with self._client_lock:
                # Double-check pattern for thread safety
                if self._client is None:
                    self.check_configuration()
                    self._client = self._create_client()
                    logger.info(f"{type(self).__name__} initialized with provider: {self.provider_name}")
        return self._client

    def _create_client(self):
        raise NotImplementedError

    def object_key(self, file_name):
        """``<prefix>/<epoch millis>-<sanitized file name>``."""
        safe_name = secure_filename(file_name or '') or 'file'
        return f"{self.key_prefix}/{int(time.time() * 1000)}-{safe_name}"

    def base_url(self):
        """URL prefix every stored object is published under.

        A configured public URL wins. A custom endpoint such as MinIO is
        addressed path-style, and plain AWS uses the virtual-hosted bucket host.
        """
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/"

    def file_url(self, key):
        """Public URL of a stored object."""
        return self.base_url() + key

    def key_from_url(self, url):
        """Object key behind a URL produced by ``file_url``, or None for foreign URLs."""
        base = self.base_url()
        if not url or not url.startswith(base) or len(url) == len(base):
            return None
        return url[len(base):]


class ProxyUploadStorage(AttachmentStorage):
    """Receives the bytes and streams them to the container through a Libcloud driver."""

    required_settings = ('STORAGE_ACCESS_KEY', 'STORAGE_SECRET_KEY', 'STORAGE_BUCKET')
    chunk_size = 8192

    def _create_client(self):
        """Get the appropriate libcloud driver based on provider."""
        provider_map = {
            's3': Provider.S3,
            'gcs': Provider.GOOGLE_STORAGE,
            'azure': Provider.AZURE_BLOBS,
            'minio': Provider.S3,  # MinIO uses S3 driver
        }

        if self.provider_name not in provider_map:
            raise StorageConfigurationError(f"Unsupported provider: {self.provider_name}")

        kwargs = {
            'key': self.access_key,
            'secret': self.secret_key,
        }

        if self.provider_name in ('s3', 'minio'):
            kwargs['region'] = self.region

        if self.endpoint_url:
            endpoint = urlparse(self.endpoint_url)
            kwargs['host'] = endpoint.hostname
            kwargs['secure'] = endpoint.scheme == 'https'
            if endpoint.port:
                kwargs['port'] = endpoint.port

        return get_driver(provider_map[self.provider_name])(**kwargs)

    def _get_container(self):
        """Get or create the storage container/bucket."""
        try:
            return self.client.get_container(container_name=self.bucket_name)
        except ContainerDoesNotExistError:
            logger.info(f"Creating container: {self.bucket_name}")
            return self.client.create_container(container_name=self.bucket_name)

    def ingest(self, file_name, content_type, payload):
        """
        Store an uploaded file.

        Args:
            file_name: Client-side file name, sanitized into the object key
            content_type: MIME type recorded on the object
            payload: File contents

        Returns:
            dict: {'fileUrl': str}
        """
        key = self.object_key(file_name)
        container = self._get_container()

        def chunks():
            for start in range(0, len(payload), self.chunk_size):
                yield payload[start:start + self.chunk_size]

        logger.info(f"Uploading {len(payload)} bytes to {key} (streaming)")
        self.client.upload_object_via_stream(
            iterator=chunks(),
            container=container,
            object_name=key,
            extra={'content_type': content_type or 'application/octet-stream'},
        )
        return {'fileUrl': self.file_url(key)}

    def delete(self, key):
        """Remove a stored object. Returns False when it was already gone."""
        try:
            obj = self.client.get_object(self.bucket_name, key)
        except ObjectDoesNotExistError:
            logger.info(f"Object {key} already absent from {self.bucket_name}")
            return False
        self.client.delete_object(obj)
        logger.info(f"Deleted object {key}")
        return True

    def discard(self, url):
        """Remove the object behind an attachment URL; URLs outside this bucket are left alone."""
        key = self.key_from_url(url)
        if key is None:
            logger.debug(f"Not an attachment of this bucket, keeping: {url}")
            return False
        return self.delete(key)


class PresignedUploadStorage(AttachmentStorage):
    """Issues short-lived PUT URLs so the browser uploads straight to the bucket."""

    def __init__(self, config):
        super().__init__(config)
        self.expiry = int(config.get('PRESIGNED_URL_EXPIRY', 3600))

    def _create_client(self):
        return boto3.client(
            's3',
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            region_name=self.region,
            config=BotoConfig(
                signature_version='s3v4',
                s3={'addressing_style': 'path' if self.endpoint_url else 'virtual'},
            ),
        )

    def ingest(self, file_name, content_type):
        """
        Create an upload credential for a file the client will PUT itself.

        Args:
            file_name: Client-side file name, sanitized into the object key
            content_type: MIME type the client must send with the PUT

        Returns:
            dict: {'url': str, 'key': str, 'fileUrl': str}
        """
        key = self.object_key(file_name)
        url = self.client.generate_presigned_url(
            'put_object',
            Params={'Bucket': self.bucket_name, 'Key': key, 'ContentType': content_type},
            ExpiresIn=self.expiry,
        )
        logger.info(f"Issued presigned upload URL for {key} (expires in {self.expiry}s)")
        return {'url': url, 'key': key, 'fileUrl': self.file_url(key)}
