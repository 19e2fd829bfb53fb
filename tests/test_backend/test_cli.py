"""Tests for the Flask CLI commands."""
from datetime import datetime
from eshs_api.models import (
    db, Document, DocumentType, ScreeningForm, ImpactAssessment, RiskAndImpact, EnvironmentalFactor,
)
from eshs_shared.enums import (
    LifeCycleStage, ImpactStatute, ImpactExtension, ImpactDuration, ImpactIntensity, ImpactProbability,
)


def test_init_db_command(runner):
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Initialized the database.' in result.output


def test_check_references_clean(runner, client, document_type):
    client.post('/api/documents', json={
        'code': 'PRC-001',
        'document_name': 'Spill Response',
        'document_type': {'id': document_type['id']},
        'document_state': 'Approved',
        'disposal_method': 'Shred',
    })

    result = runner.invoke(args=['check-references'])
    assert result.exit_code == 0
    assert 'No dangling references found.' in result.output


def test_check_references_reports_dangling_rows(runner, app):
    with app.app_context():
        doc_type = DocumentType(description='Procedure')
        db.session.add(doc_type)
        db.session.commit()
        db.session.add(Document(code='OK-1', document_name='Kept', document_type_id=doc_type.id,
                                document_state='Draft', disposal_method='Shred'))
        db.session.add(Document(code='BAD-1', document_name='Orphan', document_type_id=9999,
                                document_state='Draft', disposal_method='Shred'))
        db.session.add(ScreeningForm(subproject_id=4242, responsible_for_filling_form='A. Costa'))
        db.session.commit()
        orphan_id = db.session.query(Document).filter_by(code='BAD-1').one().id

    result = runner.invoke(args=['check-references'])
    assert result.exit_code == 1
    assert f'documents: 1 dangling reference(s): {orphan_id}' in result.output
    assert 'screening_forms: 1 dangling reference(s)' in result.output

    result = runner.invoke(args=['check-references', '--collection', 'specific_objectives'])
    assert result.exit_code == 0


def test_check_references_covers_impact_assessments(runner, app):
    with app.app_context():
        risk = RiskAndImpact(description='Dust')
        factor = EnvironmentalFactor(description='Air')
        db.session.add_all([risk, factor])
        db.session.commit()

        def assessment(**fields):
            return ImpactAssessment(
                activity='Earthworks', risks_and_impact_id=risk.id, environmental_factor_id=factor.id,
                life_cycle=LifeCycleStage.CONSTRUCTION, statute=ImpactStatute.NEGATIVE,
                extension=ImpactExtension.LOCAL, duration=ImpactDuration.SHORT_TERM,
                intensity=ImpactIntensity.LOW, probability=ImpactProbability.LIKELY,
                description_of_measures='Water spraying', deadline=datetime(2024, 12, 31), **fields
            )

        # No department at all is fine; a department that is gone is not
        db.session.add(assessment())
        orphan = assessment(department_id=777)
        db.session.add(orphan)
        db.session.commit()
        orphan_id = orphan.id

    result = runner.invoke(args=['check-references', '--collection', 'impact_assessments'])
    assert result.exit_code == 1
    assert f'impact_assessments: 1 dangling reference(s): {orphan_id}' in result.output
