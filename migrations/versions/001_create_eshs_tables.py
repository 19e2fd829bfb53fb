"""Create ESHS dashboard tables

Revision ID: 001_create_eshs_tables
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_eshs_tables'
down_revision = None
branch_labels = None
depends_on = None


MONTHS = ('JANUARY', 'FEBRUARY', 'MARCH', 'APRIL', 'MAY', 'JUNE', 'JULY',
          'AUGUST', 'SEPTEMBER', 'OCTOBER', 'NOVEMBER', 'DECEMBER')


def record_columns():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade():
    # Organization
    op.create_table(
        'departments', *record_columns(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
    )
    op.create_table('positions', *record_columns(), sa.Column('name', sa.String(200), nullable=False))
    op.create_table('toolbox_talks', *record_columns(), sa.Column('name', sa.String(200), nullable=False))

    # Emergency
    op.create_table('incidents', *record_columns(), sa.Column('description', sa.Text(), nullable=False))

    # Documents
    op.create_table('document_types', *record_columns(), sa.Column('description', sa.String(200), nullable=False))
    op.create_table(
        'documents', *record_columns(),
        sa.Column('code', sa.String(100), nullable=False),
        sa.Column('document_name', sa.String(300), nullable=False),
        sa.Column('document_type_id', sa.Integer(), sa.ForeignKey('document_types.id'), nullable=False),
        sa.Column('document_state', sa.String(100), nullable=False),
        sa.Column('disposal_method', sa.String(200), nullable=False),
        sa.Column('creation_date', sa.DateTime(), nullable=True),
        sa.Column('revision_date', sa.DateTime(), nullable=True),
        sa.Column('retention_period', sa.DateTime(), nullable=True),
        sa.Column('document_path', sa.String(1000), nullable=True),
        sa.Column('observation', sa.Text(), nullable=True),
    )
    op.create_index('idx_document_type_id', 'documents', ['document_type_id'])

    # Risks
    op.create_table(
        'subprojects', *record_columns(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('contract_reference', sa.String(200), nullable=True),
        sa.Column('contractor_name', sa.String(200), nullable=True),
        sa.Column('estimated_cost', sa.Float(), nullable=True),
        sa.Column('location', sa.String(300), nullable=False),
        sa.Column('geographic_coordinates', sa.String(200), nullable=True),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('approximate_area', sa.String(100), nullable=False),
    )
    op.create_table(
        'screening_forms', *record_columns(),
        sa.Column('subproject_id', sa.Integer(), sa.ForeignKey('subprojects.id'), nullable=False),
        sa.Column('responsible_for_filling_form', sa.String(200), nullable=False),
        sa.Column('responsible_for_verification', sa.String(200), nullable=True),
        sa.Column('response', sa.String(20), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('relevant_standard', sa.Text(), nullable=True),
        sa.Column('consultation_and_engagement', sa.Text(), nullable=True),
        sa.Column('recommended_actions', sa.Text(), nullable=True),
        sa.Column('risk_category', sa.String(50), nullable=True),
    )
    op.create_index('idx_screening_subproject_id', 'screening_forms', ['subproject_id'])
    op.create_table(
        'legal_requirements', *record_columns(),
        sa.Column('number', sa.String(50), nullable=False),
        sa.Column('document_title', sa.String(300), nullable=False),
        sa.Column('effective_date', sa.DateTime(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'AMENDED', 'REVOKED', name='legalrequirementstatus'), nullable=False),
        sa.Column('amended_description', sa.Text(), nullable=True),
        sa.Column('observation', sa.Text(), nullable=True),
        sa.Column('law_file', sa.String(1000), nullable=True),
    )

    # Programs
    op.create_table(
        'strategic_objectives', *record_columns(),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('goals', sa.Text(), nullable=False),
        sa.Column('strategies_for_achievement', sa.Text(), nullable=False),
    )
    op.create_table(
        'specific_objectives', *record_columns(),
        sa.Column('strategic_objective_id', sa.Integer(), sa.ForeignKey('strategic_objectives.id'), nullable=False),
        sa.Column('specific_objective', sa.Text(), nullable=False),
        sa.Column('actions_for_achievement', sa.Text(), nullable=False),
        sa.Column('responsible_person', sa.String(200), nullable=False),
        sa.Column('necessary_resources', sa.Text(), nullable=False),
        sa.Column('indicator', sa.String(300), nullable=False),
        sa.Column('goal', sa.String(300), nullable=False),
        sa.Column('monitoring_frequency', sa.String(100), nullable=False),
        sa.Column('deadline', sa.DateTime(), nullable=False),
        sa.Column('observation', sa.Text(), nullable=True),
    )
    op.create_index('idx_specific_strategic_objective_id', 'specific_objectives', ['strategic_objective_id'])

    # Training
    op.create_table(
        'training_plans', *record_columns(),
        sa.Column('updated_by', sa.String(200), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('training_area', sa.String(200), nullable=False),
        sa.Column('training_title', sa.String(300), nullable=False),
        sa.Column('training_objective', sa.Text(), nullable=False),
        sa.Column('training_type', sa.Enum('EXTERNAL', 'INTERNAL', name='trainingtype'), nullable=False),
        sa.Column('training_entity', sa.String(200), nullable=False),
        sa.Column('duration', sa.String(100), nullable=False),
        sa.Column('number_of_trainees', sa.Integer(), nullable=False),
        sa.Column('training_recipients', sa.Text(), nullable=False),
        sa.Column('training_month', sa.Enum(*MONTHS, name='trainingmonth'), nullable=False),
        sa.Column('training_status', sa.Enum('COMPLETED', 'PLANNED', name='trainingstatus'), nullable=False),
        sa.Column('observations', sa.Text(), nullable=True),
    )
    op.create_index('ix_training_plans_year', 'training_plans', ['year'])

    # Resource efficiency
    op.create_table(
        'waste_management', *record_columns(),
        sa.Column('waste_route', sa.String(300), nullable=False),
        sa.Column('labelling', sa.String(300), nullable=False),
        sa.Column('storage', sa.String(300), nullable=False),
        sa.Column('transportation_company_method', sa.String(300), nullable=False),
        sa.Column('disposal_company', sa.String(300), nullable=False),
        sa.Column('special_instructions', sa.Text(), nullable=True),
    )

    # Communications
    op.create_table(
        'worker_grievances', *record_columns(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('company', sa.String(200), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('prefered_contact_method', sa.String(100), nullable=False),
        sa.Column('contact', sa.String(200), nullable=False),
        sa.Column('prefered_language', sa.String(100), nullable=False),
        sa.Column('other_language', sa.String(100), nullable=True),
        sa.Column('grievance_details', sa.Text(), nullable=False),
        sa.Column('name_of_person_acknowledging_grievance', sa.String(200), nullable=True),
        sa.Column('position_of_person_acknowledging_grievance', sa.String(200), nullable=True),
        sa.Column('date_of_acknowledgement', sa.DateTime(), nullable=True),
        sa.Column('follow_up_details', sa.Text(), nullable=True),
        sa.Column('closed_out_date', sa.DateTime(), nullable=True),
    )


def downgrade():
    op.drop_table('worker_grievances')
    op.drop_table('waste_management')
    op.drop_index('ix_training_plans_year', table_name='training_plans')
    op.drop_table('training_plans')
    op.drop_index('idx_specific_strategic_objective_id', table_name='specific_objectives')
    op.drop_table('specific_objectives')
    op.drop_table('strategic_objectives')
    op.drop_table('legal_requirements')
    op.drop_index('idx_screening_subproject_id', table_name='screening_forms')
    op.drop_table('screening_forms')
    op.drop_table('subprojects')
    op.drop_index('idx_document_type_id', table_name='documents')
    op.drop_table('documents')
    op.drop_table('document_types')
    op.drop_table('incidents')
    op.drop_table('toolbox_talks')
    op.drop_table('positions')
    op.drop_table('departments')
