"""Pytest configuration and fixtures for ESHS dashboard tests."""
import pytest
import tempfile
import os
from eshs_api.app import create_app
from eshs_api.models import db


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Create and configure a test app instance."""
    monkeypatch.setenv('LOG_DIR', str(tmp_path / 'logs'))

    # Create temporary database for testing
    db_fd, db_path = tempfile.mkstemp()

    test_config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_path}',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'STORAGE_PROVIDER': 's3',
        'STORAGE_ACCESS_KEY': 'test_key',
        'STORAGE_SECRET_KEY': 'test_secret',
        'STORAGE_BUCKET': 'test-bucket',
        'STORAGE_REGION': 'us-east-1',
        'STORAGE_ENDPOINT_URL': None,
        'STORAGE_PUBLIC_URL': None,
        'STORAGE_KEY_PREFIX': 'documents',
        'PRESIGNED_URL_EXPIRY': 3600,
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()

    yield app

    # Cleanup
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def gateway(app):
    """The persistence gateway wired into the app's blueprints."""
    return app.extensions['eshs_gateway']


@pytest.fixture
def document_type(client):
    """A stored document type, as returned by the API."""
    response = client.post('/api/document-types', json={'description': 'Procedure'})
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def subproject(client):
    """A stored subproject, as returned by the API."""
    response = client.post('/api/subprojects', json={
        'name': 'Access Road Rehabilitation',
        'location': 'Km 12 - Km 30',
        'type': 'Road',
        'approximateArea': '18 ha',
    })
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def strategic_objective(client):
    """A stored strategic objective, as returned by the API."""
    response = client.post('/api/strategic-objectives', json={
        'description': 'Zero lost-time injuries',
        'goals': 'LTIFR below 0.5',
        'strategies_for_achievement': 'Weekly toolbox talks and site inspections',
    })
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def training_plan_data():
    """A complete training plan payload."""
    return {
        'updated_by': 'HSE Officer',
        'date': '2024-02-01T00:00:00.000Z',
        'year': 2024,
        'training_area': 'Health and Safety',
        'training_title': 'Working at Height',
        'training_objective': 'Safe use of harnesses and scaffolds',
        'training_type': 'External',
        'training_entity': 'SafeWork Ltd',
        'duration': '8 hours',
        'number_of_trainees': 12,
        'training_recipients': 'Scaffolders and riggers',
        'training_month': 'March',
        'training_status': 'Planned',
    }
