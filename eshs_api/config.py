"""Environment-driven configuration defaults for the API."""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Deployment settings read from environment variables (no prefix)."""

    model_config = SettingsConfigDict(case_sensitive=False, extra='ignore')

    database_url: str = 'sqlite:///eshs_dashboard.db'

    # Object storage
    storage_provider: str = 's3'  # s3, minio, gcs or azure
    storage_access_key: Optional[str] = None
    storage_secret_key: Optional[str] = None
    storage_bucket: Optional[str] = None
    storage_region: str = 'us-east-1'
    storage_endpoint_url: Optional[str] = None  # MinIO / S3-compatible endpoint
    storage_public_url: Optional[str] = None
    storage_key_prefix: str = 'documents'
    presigned_url_expiry: int = 3600  # seconds


def load_config():
    """Build the default Flask configuration mapping from the environment.

    Values from ``instance/config.py`` or a test config passed to
    ``create_app`` take precedence over these.
    """
    settings = Settings()
    return {
        'SQLALCHEMY_DATABASE_URI': settings.database_url,
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'STORAGE_PROVIDER': settings.storage_provider,
        'STORAGE_ACCESS_KEY': settings.storage_access_key,
        'STORAGE_SECRET_KEY': settings.storage_secret_key,
        'STORAGE_BUCKET': settings.storage_bucket,
        'STORAGE_REGION': settings.storage_region,
        'STORAGE_ENDPOINT_URL': settings.storage_endpoint_url,
        'STORAGE_PUBLIC_URL': settings.storage_public_url,
        'STORAGE_KEY_PREFIX': settings.storage_key_prefix,
        'PRESIGNED_URL_EXPIRY': settings.presigned_url_expiry,
        'MAX_UPLOAD_BYTES': MAX_UPLOAD_BYTES,
    }
