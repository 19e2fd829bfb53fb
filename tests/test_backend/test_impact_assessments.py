"""Tests for impact assessments and the reference data they point at."""
import pytest


@pytest.fixture
def risk(client):
    response = client.post('/api/risks-and-impacts', json={'description': 'Soil contamination'})
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def factor(client):
    response = client.post('/api/environmental-factors', json={'description': 'Soil'})
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def department(client):
    response = client.post('/api/departments', json={'name': 'Environment', 'description': 'Site environment'})
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def requirement(client):
    response = client.post('/api/risks/legal-requirements', json={
        'number': 'LR-100',
        'documentTitle': 'Waste Regulation',
        'effectiveDate': '2023-05-01T00:00:00.000Z',
        'description': 'Hazardous waste handling',
        'status': 'ACTIVE',
    })
    assert response.status_code == 201
    return response.get_json()


def assessment_payload(risk, factor, **overrides):
    payload = {
        'activity': 'Refuelling of heavy equipment',
        'risks_and_impact': {'id': risk['id']},
        'environmental_factor': {'id': factor['id']},
        'life_cycle': 'CONSTRUCAO',
        'statute': 'NEGATIVO',
        'extension': 'LOCAL',
        'duration': 'CURTO_PRAZO',
        'intensity': 'MEDIA',
        'probability': 'PROVAVEL',
        'significance': 'Moderate',
        'description_of_measures': 'Drip trays and spill kits at every refuelling point',
        'deadline': '2024-09-30T00:00:00.000Z',
        'responsible': 'Site HSE Officer',
    }
    payload.update(overrides)
    return payload


def create_assessment(client, risk, factor, **overrides):
    response = client.post('/api/risks/impact-assessments', json=assessment_payload(risk, factor, **overrides))
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestReferenceData:

    def test_described_records_use_camel_case(self, risk):
        assert set(risk) == {'id', 'description', 'createdAt', 'updatedAt'}

    def test_sorted_by_description(self, client):
        for description in ('Water', 'Air', 'Noise'):
            client.post('/api/environmental-factors', json={'description': description})

        data = client.get('/api/environmental-factors').get_json()
        assert [f['description'] for f in data] == ['Air', 'Noise', 'Water']

    def test_description_is_required(self, client):
        response = client.post('/api/risks-and-impacts', json={'description': '  '})
        assert response.status_code == 400
        assert response.get_json() == {'error': 'description is required'}


class TestImpactAssessments:

    def test_create_nests_references(self, client, risk, factor, department, subproject, requirement):
        data = create_assessment(
            client, risk, factor,
            departament={'id': department['id']},
            subproject={'id': subproject['id']},
            legal_requirements=[{'id': requirement['id']}, {'id': requirement['id']}],
        )

        assert data['departament'] == {'id': department['id'], 'name': 'Environment'}
        assert data['subproject']['id'] == subproject['id']
        assert data['risks_and_impact'] == {'id': risk['id'], 'description': 'Soil contamination'}
        assert data['environmental_factor'] == {'id': factor['id'], 'description': 'Soil'}
        assert data['legal_requirements'] == [
            {'id': requirement['id'], 'number': 'LR-100', 'document_title': 'Waste Regulation'}
        ]
        assert data['life_cycle'] == 'CONSTRUCAO'
        assert data['deadline'] == '2024-09-30T00:00:00.000Z'
        assert 'department' not in data
        assert 'department_id' not in data

    def test_department_key_is_accepted_too(self, client, risk, factor, department):
        data = create_assessment(client, risk, factor, department={'id': department['id']})
        assert data['departament']['id'] == department['id']

    def test_department_and_subproject_are_optional(self, client, risk, factor):
        data = create_assessment(client, risk, factor)
        assert data['departament'] is None
        assert data['subproject'] is None
        assert data['legal_requirements'] == []

    def test_unknown_enum_value(self, client, risk, factor):
        response = client.post('/api/risks/impact-assessments',
                               json=assessment_payload(risk, factor, intensity='EXTREME'))
        assert response.status_code == 400
        assert 'intensity' in response.get_json()['error']

    def test_required_fields(self, client):
        response = client.post('/api/risks/impact-assessments', json={'activity': 'Blasting'})
        assert response.status_code == 400
        error = response.get_json()['error']
        assert 'risks_and_impact is required' in error
        assert 'deadline is required' in error

    def test_unknown_legal_requirement(self, client, risk, factor):
        response = client.post('/api/risks/impact-assessments',
                               json=assessment_payload(risk, factor, legal_requirements=[{'id': 999}]))
        assert response.status_code == 400
        assert response.get_json() == {'error': 'legal_requirements references unknown id 999'}
        assert client.get('/api/risks/impact-assessments').get_json() == []

    def test_filter_by_department_and_subproject(self, client, risk, factor, department, subproject):
        in_department = create_assessment(client, risk, factor, departament={'id': department['id']})
        both = create_assessment(client, risk, factor, departament={'id': department['id']},
                                 subproject={'id': subproject['id']})
        create_assessment(client, risk, factor)

        data = client.get(f"/api/risks/impact-assessments?departmentId={department['id']}").get_json()
        assert {a['id'] for a in data} == {in_department['id'], both['id']}

        data = client.get(
            f"/api/risks/impact-assessments?departmentId={department['id']}&subprojectId={subproject['id']}"
        ).get_json()
        assert [a['id'] for a in data] == [both['id']]

        assert len(client.get('/api/risks/impact-assessments').get_json()) == 3

    def test_invalid_filter(self, client):
        response = client.get('/api/risks/impact-assessments?departmentId=abc')
        assert response.status_code == 400

    def test_item_routes_outside_risks_prefix(self, client, risk, factor, requirement):
        created = create_assessment(client, risk, factor, legal_requirements=[{'id': requirement['id']}])

        assert client.get(f"/api/impact-assessments/{created['id']}").get_json() == created

        response = client.put(f"/api/impact-assessments/{created['id']}", json={
            'legal_requirements': None, 'observations': 'Reviewed after audit'
        })
        assert response.status_code == 200
        assert response.get_json()['legal_requirements'] == []
        assert response.get_json()['observations'] == 'Reviewed after audit'

        assert client.delete(f"/api/impact-assessments/{created['id']}").status_code == 200
        assert client.get(f"/api/risks/impact-assessments/{created['id']}").status_code == 404
        assert client.get(f"/api/risks/legal-requirements/{requirement['id']}").status_code == 200

    def test_update_cannot_clear_required_reference(self, client, risk, factor):
        created = create_assessment(client, risk, factor)
        response = client.put(f"/api/impact-assessments/{created['id']}", json={'risks_and_impact': None})
        assert response.status_code == 400
        assert response.get_json() == {'error': 'risks_and_impact is required'}


class TestDeleteGuards:

    def test_department_in_use(self, client, risk, factor, department):
        assessment = create_assessment(client, risk, factor, departament={'id': department['id']})

        response = client.delete(f"/api/departments/{department['id']}")
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Cannot delete department that is in use by impact assessments'}

        client.delete(f"/api/impact-assessments/{assessment['id']}")
        assert client.delete(f"/api/departments/{department['id']}").status_code == 200

    def test_subproject_in_use(self, client, risk, factor, subproject):
        create_assessment(client, risk, factor, subproject={'id': subproject['id']})

        response = client.delete(f"/api/subprojects/{subproject['id']}")
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Cannot delete subproject that is in use by impact assessments'}

    @pytest.mark.parametrize('path, message', [
        ('risks-and-impacts', 'Cannot delete risk and impact that is in use by impact assessments'),
        ('environmental-factors', 'Cannot delete environmental factor that is in use by impact assessments'),
    ])
    def test_reference_data_in_use(self, client, risk, factor, path, message):
        create_assessment(client, risk, factor)
        target = risk if path == 'risks-and-impacts' else factor

        response = client.delete(f"/api/{path}/{target['id']}")
        assert response.status_code == 400
        assert response.get_json() == {'error': message}

    def test_legal_requirement_in_use(self, client, risk, factor, requirement):
        create_assessment(client, risk, factor, legal_requirements=[{'id': requirement['id']}])

        response = client.delete(f"/api/risks/legal-requirements/{requirement['id']}")
        assert response.status_code == 400
        assert response.get_json() == {
            'error': 'Cannot delete legal requirement that is in use by impact assessments'
        }

    def test_unused_reference_data_can_be_deleted(self, client, risk):
        assert client.delete(f"/api/risks-and-impacts/{risk['id']}").status_code == 200
        assert client.get('/api/risks-and-impacts').get_json() == []
