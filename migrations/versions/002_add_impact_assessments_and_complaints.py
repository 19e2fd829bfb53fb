"""Add impact assessments and the complaints register

Revision ID: 002_add_impact_assessments_and_complaints
Revises: 001_create_eshs_tables
Create Date: 2026-10-19 14:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_add_impact_assessments_and_complaints'
down_revision = '001_create_eshs_tables'
branch_labels = None
depends_on = None


def record_columns():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade():
    # Impact assessment reference data
    op.create_table('risks_and_impacts', *record_columns(), sa.Column('description', sa.String(300), nullable=False))
    op.create_table(
        'environmental_factors', *record_columns(), sa.Column('description', sa.String(300), nullable=False)
    )

    op.create_table(
        'impact_assessments', *record_columns(),
        sa.Column('department_id', sa.Integer(), sa.ForeignKey('departments.id'), nullable=True),
        sa.Column('subproject_id', sa.Integer(), sa.ForeignKey('subprojects.id'), nullable=True),
        sa.Column('activity', sa.Text(), nullable=False),
        sa.Column('risks_and_impact_id', sa.Integer(), sa.ForeignKey('risks_and_impacts.id'), nullable=False),
        sa.Column('environmental_factor_id', sa.Integer(), sa.ForeignKey('environmental_factors.id'), nullable=False),
        sa.Column('life_cycle', sa.Enum(
            'PRE_CONSTRUCTION', 'CONSTRUCTION', 'OPERATION', 'DECOMMISSIONING', 'CLOSURE', 'RESTORATION',
            name='lifecyclestage'), nullable=False),
        sa.Column('statute', sa.Enum('POSITIVE', 'NEGATIVE', name='impactstatute'), nullable=False),
        sa.Column('extension', sa.Enum('LOCAL', 'REGIONAL', 'NATIONAL', 'GLOBAL', name='impactextension'),
                  nullable=False),
        sa.Column('duration', sa.Enum('SHORT_TERM', 'MEDIUM_TERM', 'LONG_TERM', name='impactduration'),
                  nullable=False),
        sa.Column('intensity', sa.Enum('LOW', 'MEDIUM', 'HIGH', name='impactintensity'), nullable=False),
        sa.Column('probability', sa.Enum('UNLIKELY', 'LIKELY', 'HIGHLY_LIKELY', 'CERTAIN', name='impactprobability'),
                  nullable=False),
        sa.Column('significance', sa.String(100), nullable=True),
        sa.Column('description_of_measures', sa.Text(), nullable=False),
        sa.Column('deadline', sa.DateTime(), nullable=False),
        sa.Column('responsible', sa.String(200), nullable=True),
        sa.Column('effectiveness_assessment', sa.Text(), nullable=True),
        sa.Column('compliance_requirements', sa.Text(), nullable=True),
        sa.Column('observations', sa.Text(), nullable=True),
    )
    op.create_index('idx_impact_department_id', 'impact_assessments', ['department_id'])
    op.create_index('idx_impact_subproject_id', 'impact_assessments', ['subproject_id'])
    op.create_table(
        'impact_assessment_legal_requirements',
        sa.Column('impact_assessment_id', sa.Integer(), sa.ForeignKey('impact_assessments.id'), primary_key=True),
        sa.Column('legal_requirement_id', sa.Integer(), sa.ForeignKey('legal_requirements.id'), primary_key=True),
    )

    # Complaints register
    op.create_table(
        'complaints', *record_columns(),
        sa.Column('number', sa.String(50), nullable=False, unique=True),
        sa.Column('date_occurred', sa.DateTime(), nullable=False),
        sa.Column('local_occurrence', sa.String(300), nullable=False),
        sa.Column('how_occurred', sa.Text(), nullable=False),
        sa.Column('who_involved', sa.Text(), nullable=False),
        sa.Column('report_and_explanation', sa.Text(), nullable=False),
        sa.Column('registered_date', sa.DateTime(), nullable=False),
        sa.Column('claim_local_occurrence', sa.String(300), nullable=False),
        sa.Column('complaintant_gender', sa.String(50), nullable=False),
        sa.Column('complaintant_age', sa.String(50), nullable=False),
        sa.Column('anonymous_complaint', sa.String(50), nullable=False),
        sa.Column('telephone', sa.String(100), nullable=False),
        sa.Column('email', sa.String(200), nullable=True),
        sa.Column('complaintant_address', sa.String(300), nullable=False),
        sa.Column('complaintant_accepted', sa.String(50), nullable=False),
        sa.Column('action_taken', sa.Text(), nullable=False),
        sa.Column('complaintant_notified', sa.String(50), nullable=True),
        sa.Column('notification_method', sa.String(100), nullable=False),
        sa.Column('closing_date', sa.DateTime(), nullable=False),
        sa.Column('claim_category', sa.String(100), nullable=False),
        sa.Column('other_claim_category', sa.String(200), nullable=True),
        sa.Column('inspection_date', sa.DateTime(), nullable=False),
        sa.Column('collected_information', sa.Text(), nullable=False),
        sa.Column('resolution_type', sa.String(100), nullable=False),
        sa.Column('resolution_date', sa.DateTime(), nullable=False),
        sa.Column('resolution_submitted', sa.String(50), nullable=False),
        sa.Column('corrective_action_taken', sa.Text(), nullable=False),
        sa.Column('involved_in_resolution', sa.Text(), nullable=False),
        sa.Column('complaintant_satisfaction', sa.String(100), nullable=False),
        sa.Column('resources_spent', sa.Float(), nullable=False, server_default='0'),
        sa.Column('number_of_days_since_received_to_closure', sa.Integer(), nullable=False),
        sa.Column('monitoring_after_closure', sa.String(100), nullable=False),
        sa.Column('monitoring_method_and_frequency', sa.Text(), nullable=False),
        sa.Column('follow_up', sa.Text(), nullable=False),
        sa.Column('involved_institutions', sa.Text(), nullable=True),
        sa.Column('suggested_preventive_actions', sa.Text(), nullable=False),
    )
    op.create_table(
        'closure_evidence', *record_columns(),
        sa.Column('complaint_id', sa.Integer(), sa.ForeignKey('complaints.id'), nullable=True),
        sa.Column('photo', sa.String(1000), nullable=False),
        sa.Column('document', sa.String(1000), nullable=False),
        sa.Column('created_by', sa.String(200), nullable=False),
    )
    op.create_index('idx_closure_evidence_complaint_id', 'closure_evidence', ['complaint_id'])


def downgrade():
    op.drop_index('idx_closure_evidence_complaint_id', table_name='closure_evidence')
    op.drop_table('closure_evidence')
    op.drop_table('complaints')
    op.drop_table('impact_assessment_legal_requirements')
    op.drop_index('idx_impact_subproject_id', table_name='impact_assessments')
    op.drop_index('idx_impact_department_id', table_name='impact_assessments')
    op.drop_table('impact_assessments')
    op.drop_table('environmental_factors')
    op.drop_table('risks_and_impacts')
